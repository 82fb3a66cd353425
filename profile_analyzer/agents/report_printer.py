"""Terminal rendering of an AnalysisReport."""

from typing import List, Optional

from rich.console import Console

from profile_analyzer.models.github import Profile
from profile_analyzer.models.report import AnalysisReport

RULE = "=" * 60
ITEM_PREFIX = "  • "


def _bulleted(title: str, items: List[str]) -> List[str]:
    return [title] + [f"{ITEM_PREFIX}{item}" for item in items] + [""]


def render_report(display_name: str, report: AnalysisReport) -> str:
    """Format the report in the fixed layout used on the terminal."""
    lines = [
        "",
        RULE,
        f"Profile Analysis for {display_name}",
        RULE,
        "",
        "🎭 Developer Personality Type:",
        report.personality_type.strip(),
        "",
    ]
    lines += _bulleted("💪 Technical Strengths:", report.strengths)
    lines += _bulleted("🔧 Primary Tech Stack:", report.tech_stack)
    lines += _bulleted("📈 Areas for Enhancement:", report.areas)
    lines += _bulleted("💡 Recommendations:", report.suggestions)
    lines += [f"📊 Activity Level: {report.activity_level}", RULE]
    return "\n".join(lines) + "\n"


def print_report(
    profile: Profile, report: AnalysisReport, console: Optional[Console] = None
) -> None:
    console = console or Console()
    # Model text is printed verbatim: no markup, emoji codes or highlighting.
    console.print(
        render_report(profile.display_name, report),
        end="",
        markup=False,
        highlight=False,
        emoji=False,
        soft_wrap=True,
    )
