"""
Unit tests for report rendering.
"""

import io

from rich.console import Console

from profile_analyzer.agents.report_printer import print_report, render_report
from profile_analyzer.models.github import Profile
from profile_analyzer.models.report import AnalysisReport

RULE = "=" * 60


def sample_report() -> AnalysisReport:
    return AnalysisReport(
        personality_type=" The Night Owl Architect ",
        strengths=["Deep Go expertise", "Clean API design"],
        areas=["More documentation"],
        suggestions=["Add CI badges"],
        tech_stack=["Go", "Python"],
        activity_level="High",
    )


def test_render_full_layout():
    """Test the report renders in the fixed section order."""
    # Act
    output = render_report("Jane Doe", sample_report())

    # Assert
    assert output == (
        f"\n{RULE}\n"
        "Profile Analysis for Jane Doe\n"
        f"{RULE}\n\n"
        "🎭 Developer Personality Type:\n"
        "The Night Owl Architect\n\n"
        "💪 Technical Strengths:\n"
        "  • Deep Go expertise\n"
        "  • Clean API design\n\n"
        "🔧 Primary Tech Stack:\n"
        "  • Go\n"
        "  • Python\n\n"
        "📈 Areas for Enhancement:\n"
        "  • More documentation\n\n"
        "💡 Recommendations:\n"
        "  • Add CI badges\n\n"
        "📊 Activity Level: High\n"
        f"{RULE}\n"
    )


def test_render_empty_report_keeps_headings():
    """Test an empty report still prints every heading."""
    output = render_report("ghost", AnalysisReport())

    assert "💪 Technical Strengths:\n\n🔧 Primary Tech Stack:" in output
    assert "📊 Activity Level: \n" in output
    assert "•" not in output


def test_print_report_writes_verbatim_to_console():
    """Test model text with rich markup characters is printed unchanged."""
    buffer = io.StringIO()
    console = Console(file=buffer, width=40, color_system=None)
    profile = Profile(login="octocat", name="")
    report = AnalysisReport(
        personality_type="[bold]The Markup Maven[/bold] :rocket:",
        strengths=["A very long strength line that is wider than forty columns easily"],
    )

    print_report(profile, report, console=console)

    text = buffer.getvalue()
    assert "Profile Analysis for octocat" in text
    assert "[bold]The Markup Maven[/bold] :rocket:" in text
    assert "  • A very long strength line that is wider than forty columns easily\n" in text
