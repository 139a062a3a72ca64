# rr_sim/app/controllers/persistence.py
from rr_sim.app.events import (
    LayoutInconsistent,
    LayoutLoaded,
    LoadDocument,
    LoadRejected,
    Reset,
    SaveRejected,
    SaveRequested,
    SimReset,
    StateSaved,
)
from rr_sim.domain.mechanics.mechanics_core import Mechanics
from rr_sim.domain.state import SimSnapshot, SimState
from rr_sim.io.document import DocumentError, decode
from rr_sim.runtime.resources import save_document_to_path


def check_layout(
    t: float, snapshot: SimSnapshot, mechanics: Mechanics, *, reject: bool = False
) -> list[LayoutInconsistent]:
    """
    Loop consistency of the projected layout. Conflicts are returned as
    events, or raised as a DocumentError when `reject` is set.
    """
    conflicts = mechanics.frame_conflicts(snapshot.layout)
    if conflicts and reject:
        worst = max(conflicts, key=lambda c: c.distance)
        raise DocumentError(
            f"layout does not close: {len(conflicts)} edge(s) off, worst {worst.edge} "
            f"by {worst.distance:.3f} m"
        )
    return [LayoutInconsistent(t=t, edge=c.edge, distance=c.distance) for c in conflicts]


class PersistenceHandler:
    """Load, save and reset. A rejected document leaves the running state untouched."""

    def __init__(
        self,
        state: SimState,
        mechanics: Mechanics,
        baseline: SimSnapshot,
        save_path: str = "rr.json",
        reject_inconsistent_loops: bool = False,
    ):
        self.state = state
        self.mechanics = mechanics
        self.baseline = baseline
        self.save_path = save_path
        self.reject_inconsistent_loops = reject_inconsistent_loops

    def on_load(self, ev: LoadDocument):
        try:
            snapshot = decode(ev.payload)
            warnings = check_layout(
                ev.t, snapshot, self.mechanics, reject=self.reject_inconsistent_loops
            )
        except DocumentError as exc:
            self.state.message = f"Could not load layout: {exc}"
            return [LoadRejected(t=ev.t, reason=str(exc))]

        self.baseline = snapshot
        self.state.install(snapshot)
        return [
            *warnings,
            LayoutLoaded(
                t=ev.t,
                switches=len(snapshot.switch_states),
                trains=len(snapshot.trains),
                edges=sum(1 for _ in snapshot.layout.graph.edges()),
            ),
        ]

    def on_save(self, ev: SaveRequested):
        path = ev.path or self.save_path
        try:
            save_document_to_path(self.state.snapshot, path)
        except OSError as exc:
            self.state.message = f"Could not save to {path}: {exc}"
            return [SaveRejected(t=ev.t, path=path, reason=str(exc))]
        return [StateSaved(t=ev.t, path=path)]

    def on_reset(self, ev: Reset):
        self.state.install(self.baseline)
        return [SimReset(t=ev.t, trains=len(self.baseline.trains))]
