from collections import Counter
from typing import List, Sequence

from loguru import logger

from teams_graph.graph.classifier import DEFAULT_NAMESPACE, classify_team
from teams_graph.models.enums import TeamCategory
from teams_graph.models.graph import Graph, GraphNode
from teams_graph.models.team import Team


def build_graph(teams: Sequence[Team], namespace: str = DEFAULT_NAMESPACE) -> Graph:
    """Derives the membership-overlap graph from loaded teams.

    One node is emitted per input team, in input order. Only nodes of
    category ``team`` collect memberships: the canonical ids of every other
    team (any category) that shares at least one member with them, in
    discovery order. sig/wg nodes are emitted with empty memberships.

    Raises:
        UnknownPrefixError: any team name cannot be classified. Nothing is
            returned for the other teams in that case.
    """
    _warn_on_id_collisions(teams, namespace)

    graph: Graph = []
    for team_a in teams:
        id_a, category_a = classify_team(team_a.name, namespace)
        members_a = set(team_a.members)
        memberships: List[str] = []

        for team_b in teams:
            id_b, _ = classify_team(team_b.name, namespace)
            for member_b in team_b.members:
                if (
                    id_a != id_b
                    and category_a == TeamCategory.TEAM
                    and id_b not in memberships
                    and member_b in members_a
                ):
                    memberships.append(id_b)

        graph.append(GraphNode(name=id_a, memberships=memberships))

    logger.info(
        f"Built graph with {len(graph)} nodes and "
        f"{sum(len(node.memberships) for node in graph)} membership edges."
    )
    return graph


def _warn_on_id_collisions(teams: Sequence[Team], namespace: str) -> None:
    # Names that differ only by spaces share an id and never link to each other
    counts = Counter(classify_team(team.name, namespace)[0] for team in teams)
    for canonical_id, count in counts.items():
        if count > 1:
            logger.warning(
                f"{count} teams map to canonical id '{canonical_id}'; "
                "they are treated as the same team."
            )
