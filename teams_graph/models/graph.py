from typing import List

from pydantic import BaseModel, ConfigDict, Field, model_validator


class GraphNode(BaseModel):
    """A team in the membership graph and the teams its members also belong to."""

    model_config = ConfigDict(frozen=True)

    name: str  # Canonical identifier, e.g. "giantswarm.team.team-foo"
    memberships: List[str] = Field(default_factory=list)

    @model_validator(mode="after")
    def check_memberships(self) -> "GraphNode":
        if self.name in self.memberships:
            raise ValueError(f"Node '{self.name}' lists itself as a membership")
        if len(set(self.memberships)) != len(self.memberships):
            raise ValueError(f"Node '{self.name}' has duplicate memberships")
        return self


# Nodes in input team order
Graph = List[GraphNode]
