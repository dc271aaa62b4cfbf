from typing import Tuple

from teams_graph.models.enums import TeamCategory
from teams_graph.utils.misc_utils import generate_canonical_id

DEFAULT_NAMESPACE = "giantswarm"

# Checked in order, first match wins
PREFIX_RULES: Tuple[Tuple[str, TeamCategory], ...] = (
    ("sig-", TeamCategory.SIG),
    ("wg-", TeamCategory.WG),
    ("team-", TeamCategory.TEAM),
)

# Teams that follow the naming convention but are not collaboration groups
EXCLUDED_SUFFIX = "-engineers"


class UnknownPrefixError(Exception):
    """Raised when a team name matches none of the known prefixes."""

    def __init__(self, team_name: str):
        self.team_name = team_name
        super().__init__(f"Unknown team name prefix for team '{team_name}'")


def is_relevant_team(team_name: str) -> bool:
    """True for sig-/team-/wg- teams, except the '-engineers' cliques.

    Matching is case-insensitive.
    """
    lower_name = team_name.lower()
    return (
        any(lower_name.startswith(prefix) for prefix, _ in PREFIX_RULES)
        and not lower_name.endswith(EXCLUDED_SUFFIX)
    )


def team_category(team_name: str) -> TeamCategory:
    # Case-sensitive, unlike is_relevant_team
    for prefix, category in PREFIX_RULES:
        if team_name.startswith(prefix):
            return category
    raise UnknownPrefixError(team_name)


def classify_team(
    team_name: str, namespace: str = DEFAULT_NAMESPACE
) -> Tuple[str, TeamCategory]:
    """Maps a raw team name to its canonical graph identifier and category.

    Raises:
        UnknownPrefixError: the name starts with none of sig-, wg-, team-.
    """
    category = team_category(team_name)
    return generate_canonical_id(namespace, category.value, team_name), category
