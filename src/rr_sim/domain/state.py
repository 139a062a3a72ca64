# rr_sim/domain/state.py
from dataclasses import dataclass, replace

from rr_sim.domain.entities.train import TrainState
from rr_sim.domain.errors import LayoutError
from rr_sim.domain.layout import Layout, SwitchState


@dataclass(frozen=True)
class SimSnapshot:
    """Everything a run needs to continue: validated as a whole, replaced as a whole."""

    layout: Layout
    switch_states: SwitchState
    trains: tuple[TrainState, ...] = ()

    def __post_init__(self):
        object.__setattr__(
            self, "switch_states", self.layout.validate_switch_states(self.switch_states)
        )
        object.__setattr__(self, "trains", tuple(self.trains))
        for tr in self.trains:
            if tr.location is not None and self.layout.track_at(tr.location.edge) is None:
                raise LayoutError(f"train {tr.name!r} is on unknown edge {tr.location.edge}")


@dataclass
class SimState:
    snapshot: SimSnapshot
    running: bool = False
    message: str | None = None
    t: float = 0.0  # simulated seconds since the snapshot was installed

    @property
    def layout(self) -> Layout:
        return self.snapshot.layout

    @property
    def switch_states(self) -> SwitchState:
        return self.snapshot.switch_states

    @property
    def trains(self) -> tuple[TrainState, ...]:
        return self.snapshot.trains

    def install(self, snapshot: SimSnapshot, message: str | None = None) -> None:
        self.snapshot = snapshot
        self.running = False
        self.message = message
        self.t = 0.0

    def set_trains(self, trains) -> None:
        self.snapshot = replace(self.snapshot, trains=tuple(trains))

    def set_switch_states(self, states: SwitchState) -> None:
        self.snapshot = replace(self.snapshot, switch_states=states)
