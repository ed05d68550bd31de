"""Centrality and path-to-path relationship analysis.

Paths and positions form a bipartite membership graph: an edge joins a path
to every position it references. A position's centrality is its degree in
that graph, and the weighted projection onto the path nodes gives the number
of positions shared by each pair of paths.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field

import networkx as nx
from networkx.algorithms import bipartite

from ..model import PositionDetail

PATH = "path"
POSITION = "position"


@dataclass
class Analysis:
    """Result of analysing position details."""

    centrality: dict[str, int] = field(default_factory=dict)
    relationships: dict[str, dict[str, int]] = field(default_factory=dict)

    def is_interchange(self, position_id: str) -> bool:
        return self.centrality.get(position_id, 0) > 1


def build_membership_graph(position_details: Iterable[PositionDetail]) -> nx.Graph:
    """Build the bipartite path/position membership graph.

    Nodes are (kind, id) tuples so path and position ids never collide.
    Duplicate (position, path) pairs collapse into one edge.

    Args:
        position_details: Position details to analyse.

    Returns:
        Undirected graph with path nodes in bipartite set 0 and position
        nodes in bipartite set 1.
    """
    G = nx.Graph()
    for detail in position_details:
        path_node = (PATH, detail.career_path_id)
        position_node = (POSITION, detail.position_id)
        G.add_node(path_node, bipartite=0)
        G.add_node(position_node, bipartite=1)
        G.add_edge(path_node, position_node)
    return G


def compute_centrality(membership: nx.Graph) -> dict[str, int]:
    """Count the distinct paths referencing each position."""
    centrality: dict[str, int] = {}
    for kind, node_id in membership.nodes:
        if kind == POSITION:
            centrality[node_id] = membership.degree((kind, node_id))
    return centrality


def compute_relationships(membership: nx.Graph) -> dict[str, dict[str, int]]:
    """Count the positions shared by each pair of distinct paths.

    Stored symmetrically. Pairs sharing nothing have no entry.
    """
    path_nodes = [node for node in membership.nodes if node[0] == PATH]
    if not path_nodes:
        return {}
    projected = bipartite.weighted_projected_graph(membership, path_nodes)

    relationships: dict[str, dict[str, int]] = {}
    for (_, a), (_, b), weight in projected.edges(data="weight"):
        if a == b or not weight:
            continue
        relationships.setdefault(a, {})[b] = weight
        relationships.setdefault(b, {})[a] = weight
    return relationships


def relationship_score(relationships: dict[str, dict[str, int]], a: str, b: str) -> int:
    """Shared-position count for two paths, 0 when unrelated."""
    return relationships.get(a, {}).get(b, 0)


def analyze(position_details: Iterable[PositionDetail]) -> Analysis:
    """Compute centrality per position and relationship strength per path pair.

    Args:
        position_details: Position details to analyse.

    Returns:
        Analysis with centrality and relationships.
    """
    membership = build_membership_graph(position_details)
    return Analysis(
        centrality=compute_centrality(membership),
        relationships=compute_relationships(membership),
    )
