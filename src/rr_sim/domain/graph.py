# rr_sim/domain/graph.py
from collections.abc import Iterable, Iterator

import networkx as nx

from rr_sim.domain.entities.track import NodeId, Track


class Graph:
    """
    Directed, edge-labelled graph over integer node ids, backed by a frozen
    networkx DiGraph. The edge attribute `track` holds the Track, or None for
    a connectivity-only edge that is never routable.

    Every insert returns a new Graph; the previous value is never mutated.
    """

    __slots__ = ("_g",)

    def __init__(self, g: nx.DiGraph | None = None):
        self._g = nx.freeze(nx.DiGraph() if g is None else g.copy())

    @classmethod
    def _own(cls, g: nx.DiGraph) -> "Graph":
        # `g` is fresh and unshared; freeze it without another copy
        out = cls.__new__(cls)
        out._g = nx.freeze(g)
        return out

    @classmethod
    def from_edges(cls, edges: Iterable[tuple[NodeId, NodeId, Track | None]]) -> "Graph":
        g = nx.DiGraph()
        for frm, to, track in edges:
            g.add_edge(frm, to, track=track)
        return cls._own(g)

    # --------------- Queries -----------------------------

    @property
    def nx_graph(self) -> nx.DiGraph:
        """The frozen underlying DiGraph (read-only)."""
        return self._g

    def __contains__(self, node: NodeId) -> bool:
        return node in self._g

    def __len__(self) -> int:
        return self._g.number_of_nodes()

    def __eq__(self, other) -> bool:
        return (
            isinstance(other, Graph)
            and self.nodes() == other.nodes()
            and list(self.edges()) == list(other.edges())
        )

    def __repr__(self) -> str:
        return f"Graph(nodes={self._g.number_of_nodes()}, edges={self._g.number_of_edges()})"

    def nodes(self) -> list[NodeId]:
        return sorted(self._g.nodes)

    def has_edge(self, frm: NodeId, to: NodeId) -> bool:
        return self._g.has_edge(frm, to)

    def get_edge_data(self, frm: NodeId, to: NodeId) -> Track | None:
        data = self._g.get_edge_data(frm, to)
        return None if data is None else data["track"]

    def outgoing(self, node: NodeId) -> list[NodeId]:
        return sorted(self._g.successors(node)) if node in self._g else []

    def incoming(self, node: NodeId) -> list[NodeId]:
        return sorted(self._g.predecessors(node)) if node in self._g else []

    def edges(self) -> Iterator[tuple[NodeId, NodeId, Track | None]]:
        for frm in self.nodes():
            for to in self.outgoing(frm):
                yield frm, to, self._g[frm][to]["track"]

    def edges_with_data(self) -> Iterator[tuple[NodeId, NodeId, Track]]:
        for frm, to, track in self.edges():
            if track is not None:
                yield frm, to, track

    def routable(self) -> nx.DiGraph:
        """Read-only view holding only the edges that carry a Track."""
        g = self._g
        return nx.subgraph_view(g, filter_edge=lambda u, v: g[u][v]["track"] is not None)

    # --------------- Copy-on-write inserts -----------------------------

    def insert_node(self, node: NodeId) -> "Graph":
        if node in self._g:
            return self
        g = self._g.copy()
        g.add_node(node)
        return Graph._own(g)

    def insert_edge(self, frm: NodeId, to: NodeId, track: Track | None = None) -> "Graph":
        g = self._g.copy()
        g.add_edge(frm, to, track=track)  # replaces the data of an existing edge
        return Graph._own(g)
