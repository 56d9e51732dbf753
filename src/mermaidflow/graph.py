"""
Graph module for layered diagrams.

Builds a networkx multigraph from entity ids and relations and provides the
deterministic ordering used by layered placement.
"""

import logging
from collections import deque
from typing import Dict, Iterable, List, Tuple

import networkx as nx

logger = logging.getLogger(__name__)


def create_graph(
    node_ids: Iterable[str], relations: Iterable[Tuple[str, str]]
) -> nx.MultiDiGraph:
    """
    Create a graph from entity ids and (source, target) relations.

    A multigraph is used so that parallel relations each count toward the
    in-degree of their target.

    Args:
        node_ids: All entity ids, including ones without relations
        relations: List of (source, target) tuples

    Returns:
        networkx MultiDiGraph
    """
    graph = nx.MultiDiGraph()
    graph.add_nodes_from(node_ids)
    graph.add_edges_from(relations)
    return graph


def topological_order(graph: nx.MultiDiGraph) -> List[str]:
    """
    Return every node in a deterministic topological order.

    Uses Kahn's algorithm with a FIFO queue seeded by the zero in-degree nodes
    in sorted order. Nodes left over because they sit on a cycle are appended
    in sorted order, so the result always contains every node exactly once.
    """
    in_degree = {node: graph.in_degree(node) for node in graph.nodes}
    queue = deque(sorted(node for node, degree in in_degree.items() if degree == 0))
    result = []

    while queue:
        node = queue.popleft()
        result.append(node)

        for _, successor in graph.out_edges(node):
            in_degree[successor] -= 1
            if in_degree[successor] == 0:
                queue.append(successor)

    if len(result) != len(in_degree):
        placed = set(result)
        leftover = sorted(node for node in in_degree if node not in placed)
        logger.debug("Cycle detected, appending %d nodes: %s", len(leftover), leftover)
        result.extend(leftover)

    return result


def assign_layers(graph: nx.MultiDiGraph, order: List[str]) -> Dict[str, int]:
    """
    Assign longest-path layers following the given order.

    A node's layer is one more than the deepest predecessor that already has a
    layer, or 0 when no predecessor has been assigned yet.
    """
    node_layer: Dict[str, int] = {}

    for node in order:
        assigned = [node_layer[p] for p in graph.predecessors(node) if p in node_layer]
        node_layer[node] = max(assigned) + 1 if assigned else 0

    return node_layer


def group_layers(node_layer: Dict[str, int]) -> List[List[str]]:
    """Group nodes by layer, sorting the ids inside each layer."""
    if not node_layer:
        return []

    layers: List[List[str]] = [[] for _ in range(max(node_layer.values()) + 1)]
    for node, layer in node_layer.items():
        layers[layer].append(node)

    return [sorted(layer) for layer in layers]
