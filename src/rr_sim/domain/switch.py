# rr_sim/domain/switch.py
from dataclasses import dataclass

from rr_sim.domain.entities.track import Edge
from rr_sim.domain.errors import LayoutError


@dataclass(frozen=True)
class Switch:
    """
    A junction device. `edges` are the physical edges it controls; each entry
    of `configs` lists the indices (into `edges`) connected when that config
    is selected. Configs are mutually exclusive.
    """

    edges: tuple[Edge, ...]
    configs: tuple[tuple[int, ...], ...]

    def __post_init__(self):
        object.__setattr__(self, "edges", tuple((int(a), int(b)) for a, b in self.edges))
        object.__setattr__(self, "configs", tuple(tuple(int(i) for i in c) for c in self.configs))
        n = len(self.edges)
        for ci, cfg in enumerate(self.configs):
            bad = [i for i in cfg if not 0 <= i < n]
            if bad:
                raise LayoutError(f"switch config {ci} references unknown edge indices {bad}")

    def active_edges(self, state: int) -> list[Edge]:
        # out-of-range state => nothing connected (fail-soft)
        if not 0 <= state < len(self.configs):
            return []
        return [self.edges[i] for i in self.configs[state]]

    def inactive_edges(self, state: int) -> list[Edge]:
        active = self.active_edges(state)
        return [e for e in self.edges if e not in active]

    def next_config(self, state: int) -> int:
        if not self.configs:
            return state
        return (state + 1) % len(self.configs)
