# rr_sim/app/wiring.py
from rr_sim.app.controllers.persistence import PersistenceHandler
from rr_sim.app.controllers.switches import SwitchHandler
from rr_sim.app.controllers.trains import TrainHandler
from rr_sim.app.events import (
    ChangeSwitch,
    LoadDocument,
    Reset,
    SaveRequested,
    Step,
    Tick,
    ToggleRunning,
)
from rr_sim.sim.kernel import Kernel


def wire(
    kernel: Kernel,
    *,
    trains: TrainHandler,
    switches: SwitchHandler,
    persistence: PersistenceHandler,
) -> None:
    k = kernel

    # host frames
    k.on(Tick, trains.on_tick)  # no-op while paused
    k.on(Step, trains.on_step)  # no-op while running
    k.on(ToggleRunning, trains.on_toggle)

    # user controls
    k.on(ChangeSwitch, switches.on_change_switch)

    # document lifecycle
    k.on(LoadDocument, persistence.on_load)
    k.on(SaveRequested, persistence.on_save)
    k.on(Reset, persistence.on_reset)
