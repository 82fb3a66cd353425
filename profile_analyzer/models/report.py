"""
Analysis Report Model

Structured result of parsing Gemini's free-text personality assessment.
"""

from typing import List

from pydantic import BaseModel, Field


class AnalysisReport(BaseModel):
    """Developer personality report.

    Built empty and filled in source order by the response parser. List
    fields only ever grow by append; duplicates are kept.
    """

    personality_type: str = Field(default="", description="Creative personality label")
    strengths: List[str] = Field(default_factory=list)
    areas: List[str] = Field(
        default_factory=list, description="Areas for profile enhancement"
    )
    suggestions: List[str] = Field(
        default_factory=list, description="Specific recommendations"
    )
    tech_stack: List[str] = Field(default_factory=list)
    activity_level: str = Field(default="")

    def is_empty(self) -> bool:
        """Return True when no section of the response was recognized."""
        return not (
            self.personality_type
            or self.strengths
            or self.areas
            or self.suggestions
            or self.tech_stack
            or self.activity_level
        )
