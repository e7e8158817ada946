# Copyright (c) 2025 Juliete Rossie @ CRIL - CNRS
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

from typing import Iterable, Optional

import networkx as nx
import numpy as np

from structure.argument import Argument
from structure.relations import RelationKind


class Graph:
    """
    Wrapper around NetworkX holding the node set of a bipolar framework.
    If networkx needs to be replaced this should be done in this wrapper
    """
    graph = None

    def __init__(self, nodes: Optional[Iterable[Argument]] = None):
        self.graph = nx.DiGraph()
        if nodes:
            self.add_nodes(nodes)

    def __contains__(self, node):
        return node in self.graph

    def __iter__(self):
        return iter(self.graph.nodes)

    def __len__(self):
        return self.graph.number_of_nodes()

    def add_node(self, node: Argument) -> bool:
        """Adds a node, returns whether it was new"""
        if node in self.graph:
            return False
        self.graph.add_node(node)
        return True

    def add_nodes(self, nodes):
        """Adds nodes to the graph"""
        self.graph.add_nodes_from(nodes)

    def remove_node(self, node: Argument) -> bool:
        """Removes a node, returns whether it was present"""
        if node not in self.graph:
            return False
        self.graph.remove_node(node)
        return True

    def nodes(self):
        """Returns a snapshot of the nodes"""
        return set(self.graph.nodes)

    def copy(self) -> "Graph":
        return Graph(self.graph.nodes)


def flatten(nodes, supports, attacks) -> nx.MultiDiGraph:
    """
    Builds a multigraph with one edge per member of each relation source. Edges carry the relation
    kind and, for set-valued sources, the whole source set under the "group" key
    """
    g = nx.MultiDiGraph()
    g.add_nodes_from(nodes)
    for kind, relation in ((RelationKind.SUPPORT, supports), (RelationKind.ATTACK, attacks)):
        for source, target in relation:
            if isinstance(source, Argument):
                g.add_edge(source, target, kind=kind, group=None)
            else:
                for member in source:
                    g.add_edge(member, target, kind=kind, group=source)
    return g


def random_digraph(num_args: int, probability: float, seed=None) -> nx.DiGraph:
    """Gilbert random directed graph over the integers 0..num_args-1"""
    state = np.random.RandomState(seed)
    return nx.gnp_random_graph(n=num_args, p=probability, directed=True, seed=state)
