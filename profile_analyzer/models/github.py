"""
GitHub Data Models

Pydantic models for the user profile and repository payloads returned by
the GitHub REST API. Both are immutable snapshots taken once per run.
"""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _none_to_empty(value: Any) -> Any:
    """GitHub sends null for unset text fields; treat them as empty strings."""
    return "" if value is None else value


class Profile(BaseModel):
    """Public attributes of a GitHub user account."""

    model_config = ConfigDict(frozen=True)

    login: str = Field(..., description="GitHub username")
    name: str = Field(default="", description="Display name")
    bio: str = Field(default="")
    company: str = Field(default="")
    location: str = Field(default="")
    followers: int = Field(default=0, ge=0)
    following: int = Field(default=0, ge=0)
    public_repos: int = Field(default=0, ge=0)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("name", "bio", "company", "location", mode="before")
    @classmethod
    def normalize_text(cls, v: Any) -> Any:
        return _none_to_empty(v)

    @property
    def display_name(self) -> str:
        """Name shown in the report banner, falling back to the login."""
        return self.name or self.login

    @property
    def member_since(self) -> str:
        """Account creation month, e.g. "January 2006"."""
        if self.created_at is None:
            return "Unknown"
        return self.created_at.strftime("%B %Y")


class RepositorySummary(BaseModel):
    """Public attributes of one repository from /users/{username}/repos."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    description: str = ""
    language: str = ""
    stars: int = Field(default=0, ge=0, alias="stargazers_count")
    fork: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("description", "language", mode="before")
    @classmethod
    def normalize_text(cls, v: Any) -> Any:
        return _none_to_empty(v)
