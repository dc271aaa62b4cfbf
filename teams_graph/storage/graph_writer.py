# teams_graph/storage/graph_writer.py
import json
from pathlib import Path
from typing import Union

from loguru import logger

from teams_graph.models.graph import Graph

DEFAULT_OUTPUT_PATH = "assets/org-vis/teams-graph.json"


class GraphWriteError(Exception):
    """Base exception for failures while persisting the graph."""

    pass


class EncodeError(GraphWriteError):
    """Raised when the graph cannot be rendered as JSON."""

    pass


class WriteError(GraphWriteError):
    """Raised when the rendered graph cannot be written to disk."""

    pass


def render_graph(graph: Graph) -> str:
    """Renders the graph as a two-space indented JSON array.

    Each node becomes ``{"name": ..., "memberships": [...]}``. No trailing
    newline is added.
    """
    try:
        return json.dumps(
            [node.model_dump() for node in graph], indent=2, ensure_ascii=False
        )
    except (TypeError, ValueError) as e:
        raise EncodeError(f"Error marshaling teams into json: {e}") from e


def write_graph(graph: Graph, path: Union[str, Path] = DEFAULT_OUTPUT_PATH) -> Path:
    """Overwrites ``path`` with the rendered graph and returns the path.

    The parent directory must already exist.
    """
    output = Path(path)
    content = render_graph(graph)

    logger.info(f"writing data to {output}")
    try:
        with open(output, "w", encoding="utf-8") as f:
            f.write(content)
    except OSError as e:
        raise WriteError(f"Error writing graph file {output}: {e}") from e

    logger.success(f"Wrote {len(graph)} nodes to {output}")
    return output
