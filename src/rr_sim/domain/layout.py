# rr_sim/domain/layout.py
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, replace
from typing import NamedTuple

from rr_sim.domain.entities.track import Edge, NodeId, Orientation, Track, track_length
from rr_sim.domain.entities.train import Location
from rr_sim.domain.errors import SwitchStateError
from rr_sim.domain.graph import Graph
from rr_sim.domain.switch import Switch

SwitchState = tuple[int, ...]
EdgeTriple = tuple[NodeId, NodeId, Track]


@dataclass(frozen=True)
class Layout:
    graph: Graph
    switches: tuple[Switch, ...] = ()

    @classmethod
    def from_edges(
        cls, edges: Iterable[tuple[NodeId, NodeId, Track | None]], switches: Iterable[Switch] = ()
    ) -> "Layout":
        return cls(Graph.from_edges(edges), tuple(switches))

    def track_at(self, edge: Edge) -> Track | None:
        return self.graph.get_edge_data(*edge)

    def initial_switch_states(self) -> SwitchState:
        return (0,) * len(self.switches)

    def validate_switch_states(self, states: Sequence[int]) -> SwitchState:
        if len(states) != len(self.switches):
            raise SwitchStateError(
                f"Incorrect number of switch states: expected {len(self.switches)}, got {len(states)}"
            )
        for i, (sw, s) in enumerate(zip(self.switches, states)):
            if not 0 <= s < len(sw.configs):
                raise SwitchStateError(
                    f"switch {i} state {s} out of range (has {len(sw.configs)} configs)"
                )
        return tuple(int(s) for s in states)


def change_switch(layout: Layout, states: SwitchState, switch_id: int) -> SwitchState:
    """Advance one switch to its next config; unknown ids leave the state as is."""
    if not 0 <= switch_id < min(len(states), len(layout.switches)):
        return states
    new = list(states)
    new[switch_id] = layout.switches[switch_id].next_config(states[switch_id])
    return tuple(new)


# ------------------ Partition -----------------------------


class Partition(NamedTuple):
    usable: frozenset[EdgeTriple]
    unusable: frozenset[EdgeTriple]


def partition(layout: Layout, switch_states: Sequence[int]) -> Partition:
    inactive: set[Edge] = set()
    for sw, state in zip(layout.switches, switch_states):
        inactive.update(sw.inactive_edges(state))

    usable, unusable = set(), set()
    for frm, to, track in layout.graph.edges_with_data():
        (unusable if (frm, to) in inactive else usable).add((frm, to, track))
    return Partition(frozenset(usable), frozenset(unusable))


# ------------------ Junction resolution -----------------------------


def _continuation(loc: Location, junction: NodeId, usable: Iterable[EdgeTriple]) -> Location | None:
    frm, to = loc.edge
    candidates = [
        (f, t, track)
        for f, t, track in usable
        if junction in (f, t) and (f, t) != (frm, to)
    ]
    if len(candidates) != 1:
        return None  # dead end or ambiguous
    f, t, track = candidates[0]
    leaves = f == junction
    # the pos axis keeps its sense when leaving through `to` onto an edge that
    # starts at the junction, or through `from` onto one that ends there
    same_sense = leaves == (junction == to)
    return Location(
        edge=(f, t),
        pos=0.0 if leaves else track_length(track),
        orientation=loc.orientation if same_sense else loc.orientation.invert(),
    )


def previous_track(
    loc: Location,
    layout: Layout,
    switch_states: Sequence[int],
    *,
    usable: frozenset[EdgeTriple] | None = None,
) -> Location | None:
    """
    Entry location on the unique usable edge behind `loc`.
    Behind is the `from` node for ALIGNED locations and the `to` node for
    REVERSED ones.
    """
    if usable is None:
        usable = partition(layout, switch_states).usable
    frm, to = loc.edge
    junction = frm if loc.orientation is Orientation.ALIGNED else to
    return _continuation(loc, junction, usable)


def next_track(
    loc: Location,
    layout: Layout,
    switch_states: Sequence[int],
    *,
    usable: frozenset[EdgeTriple] | None = None,
) -> Location | None:
    flipped = replace(loc, orientation=loc.orientation.invert())
    prev = previous_track(flipped, layout, switch_states, usable=usable)
    return None if prev is None else replace(prev, orientation=prev.orientation.invert())
