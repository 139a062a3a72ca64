# rr_sim/app/build.py
from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from rr_sim.app.controllers.persistence import PersistenceHandler, check_layout
from rr_sim.app.controllers.switches import SwitchHandler
from rr_sim.app.controllers.trains import TrainHandler
from rr_sim.app.wiring import wire
from rr_sim.config.models import ScenarioModel
from rr_sim.domain.mechanics.mechanics_core import Mechanics
from rr_sim.domain.mechanics.mechanics_factory import build_mechanics
from rr_sim.domain.state import SimState
from rr_sim.io.kernel_logging import KernelLogging  # JSON logs
from rr_sim.io.recorder import JsonlSink, Recorder, Sink
from rr_sim.runtime.registries import make_layout_source
from rr_sim.sim.clock import SimClock
from rr_sim.sim.event import BaseEvent
from rr_sim.sim.hooks import NoopHooks
from rr_sim.sim.kernel import Kernel


@dataclass
class App:
    kernel: Kernel
    clock: SimClock
    state: SimState
    mechanics: Mechanics
    trains: TrainHandler
    switches: SwitchHandler
    persistence: PersistenceHandler
    model: ScenarioModel

    def send(self, cmd: BaseEvent) -> int:
        """Queue one host command and process everything up to its time."""
        self.kernel.schedule(cmd)
        return self.kernel.run(until=cmd.t)


def build(
    cfg: ScenarioModel | Mapping,
    *,
    use_logging: bool = True,
    sinks: Sequence[Sink] | None = None,
) -> App:
    # 0) Validate config
    model = cfg if isinstance(cfg, ScenarioModel) else ScenarioModel.model_validate(cfg)

    # 1) Clock
    clock = SimClock.utc_epoch(*model.sim.epoch)

    # 2) Kernel (with hooks)
    recorder = Recorder(*(sinks if sinks is not None else [JsonlSink()]))
    hooks = (
        KernelLogging(
            run_id=model.run_id,
            recorder=recorder,
            clock=clock,
            level=model.log.level,
            debug=model.log.debug,
            sample_every=model.log.sample_every,
        )
        if use_logging
        else NoopHooks()
    )
    kernel = Kernel(hooks=hooks)

    # 3) Mechanics & initial snapshot
    mechanics = build_mechanics(model.placement, model.projector)
    snapshot = make_layout_source(model.layout).load()
    warnings = check_layout(
        0.0, snapshot, mechanics, reject=model.projector.reject_inconsistent_loops
    )
    state = SimState(snapshot)

    # 4) Handlers (inject deps explicitly)
    trains = TrainHandler(state, mechanics, step_s=model.sim.step_s)
    switches = SwitchHandler(state)
    persistence = PersistenceHandler(
        state,
        mechanics,
        baseline=snapshot,
        save_path=model.save_path,
        reject_inconsistent_loops=model.projector.reject_inconsistent_loops,
    )

    # 5) Wiring
    wire(kernel, trains=trains, switches=switches, persistence=persistence)

    # 6) Surface loop inconsistencies of the initial layout on the first run
    for ev in warnings:
        kernel.schedule(ev)

    return App(kernel, clock, state, mechanics, trains, switches, persistence, model)
