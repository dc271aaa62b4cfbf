# teams_graph/models/team.py
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class TeamSummary(BaseModel):
    """One entry of the organization team-list response."""

    model_config = ConfigDict(extra="ignore")

    name: str
    slug: str
    members_url: Optional[str] = None


class Member(BaseModel):
    """One entry of a team member-list response."""

    model_config = ConfigDict(extra="ignore")

    login: str


class Team(BaseModel):
    """A relevant team with its resolved member list."""

    model_config = ConfigDict(frozen=True)  # Make instances immutable

    name: str  # Display name, e.g. "team-foo"; the semantic key
    slug: str  # Only used to build the members URL
    members: List[str] = Field(default_factory=list)

    @classmethod
    def from_summary(cls, summary: TeamSummary, members: List[str]) -> "Team":
        return cls(name=summary.name, slug=summary.slug, members=list(members))
