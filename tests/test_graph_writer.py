"""Unit tests for graph rendering and persistence."""

import pytest

from teams_graph.models.graph import GraphNode
from teams_graph.storage.graph_writer import WriteError, render_graph, write_graph

EXPECTED = """[
  {
    "name": "giantswarm.team.team-alpha",
    "memberships": [
      "giantswarm.sig.sig-x"
    ]
  },
  {
    "name": "giantswarm.sig.sig-x",
    "memberships": []
  }
]"""


@pytest.fixture
def graph():
    return [
        GraphNode(name="giantswarm.team.team-alpha", memberships=["giantswarm.sig.sig-x"]),
        GraphNode(name="giantswarm.sig.sig-x"),
    ]


class TestRenderGraph:
    def test_two_space_indent_and_field_order(self, graph):
        assert render_graph(graph) == EXPECTED

    def test_empty_graph(self):
        assert render_graph([]) == "[]"

    def test_non_ascii_is_kept(self):
        rendered = render_graph([GraphNode(name="giantswarm.team.team-ünïcode")])
        assert "team-ünïcode" in rendered


class TestWriteGraph:
    def test_writes_file(self, graph, tmp_path):
        path = tmp_path / "teams-graph.json"

        assert write_graph(graph, path) == path
        assert path.read_text(encoding="utf-8") == EXPECTED

    def test_overwrites_existing_file(self, graph, tmp_path):
        path = tmp_path / "teams-graph.json"
        path.write_text("stale content that is much longer than the new graph" * 100)

        write_graph(graph, str(path))

        assert path.read_text(encoding="utf-8") == EXPECTED

    def test_missing_parent_directory(self, graph, tmp_path):
        path = tmp_path / "assets" / "org-vis" / "teams-graph.json"

        with pytest.raises(WriteError, match="Error writing graph file"):
            write_graph(graph, path)

        assert not path.parent.exists()


class TestGraphNode:
    def test_rejects_self_membership(self):
        with pytest.raises(ValueError, match="itself"):
            GraphNode(name="a", memberships=["a"])

    def test_rejects_duplicates(self):
        with pytest.raises(ValueError, match="duplicate"):
            GraphNode(name="a", memberships=["b", "b"])
