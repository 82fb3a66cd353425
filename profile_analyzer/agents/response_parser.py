"""
Response Parser

Turns Gemini's free-text assessment into an AnalysisReport with a single
pass over the lines. The scanner tracks which section it is in; a line is
either a section header, a bullet for the current section, or ignored.

Headers are matched as exact, case-sensitive prefixes of the stripped line.
If the model words a header differently ("Strengths:", "**Activity
Level:**"), that section simply stays empty. The parser never raises.
"""

from enum import Enum
from typing import Dict, List, Optional, Tuple

import structlog

from profile_analyzer.models.report import AnalysisReport

logger = structlog.get_logger(__name__)


class Section(str, Enum):
    NONE = "none"
    PERSONALITY = "personality"
    STRENGTHS = "strengths"
    AREAS = "areas"
    SUGGESTIONS = "suggestions"
    TECH = "tech"
    ACTIVITY = "activity"


# (prefix, next state, report field that takes the rest of the line or None)
HEADER_TRANSITIONS: Tuple[Tuple[str, Section, Optional[str]], ...] = (
    ("Personality Type:", Section.PERSONALITY, "personality_type"),
    ("Technical Strengths:", Section.STRENGTHS, None),
    ("Areas for Enhancement:", Section.AREAS, None),
    ("Recommendations:", Section.SUGGESTIONS, None),
    ("Technology Stack:", Section.TECH, None),
    ("Activity Level:", Section.ACTIVITY, "activity_level"),
)

BULLET_PREFIXES = ("- ", "• ")

LIST_FIELDS: Dict[Section, str] = {
    Section.STRENGTHS: "strengths",
    Section.AREAS: "areas",
    Section.SUGGESTIONS: "suggestions",
    Section.TECH: "tech_stack",
}


def _match_header(line: str) -> Optional[Tuple[Section, Optional[str], str]]:
    for prefix, section, inline_field in HEADER_TRANSITIONS:
        if line.startswith(prefix):
            return section, inline_field, line[len(prefix):].strip()
    return None


def _strip_bullet(line: str) -> Optional[str]:
    for prefix in BULLET_PREFIXES:
        if line.startswith(prefix):
            return line[len(prefix):]
    return None


def parse_analysis_response(text: str) -> AnalysisReport:
    """
    Parse the model's reply into a report.

    Args:
        text: Raw multi-line response text

    Returns:
        AnalysisReport with whatever sections were recognized; the rest
        keep their empty defaults
    """
    report = AnalysisReport()
    current = Section.NONE
    discarded = 0

    for raw_line in text.split("\n"):
        line = raw_line.strip()

        header = _match_header(line)
        if header is not None:
            current, inline_field, value = header
            if inline_field is not None:
                setattr(report, inline_field, value)
            continue

        item = _strip_bullet(line)
        if item is None:
            continue

        field_name = LIST_FIELDS.get(current)
        if field_name is None:
            discarded += 1
            continue
        items: List[str] = getattr(report, field_name)
        items.append(item)

    if report.is_empty():
        logger.warning("No recognized sections in model response", length=len(text))
    elif discarded:
        logger.debug("Bullets outside a list section discarded", count=discarded)

    return report
