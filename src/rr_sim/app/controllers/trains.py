# rr_sim/app/controllers/trains.py
import math

from rr_sim.app.events import RunningChanged, Step, Tick, ToggleRunning, TrainDerailed
from rr_sim.domain.mechanics.mechanics_core import Mechanics
from rr_sim.domain.state import SimState
from rr_sim.sim.clock import ms


class TrainHandler:
    def __init__(self, state: SimState, mechanics: Mechanics, step_s: float = 1.0):
        self.state = state
        self.mechanics = mechanics
        self.step_s = step_s

    def on_tick(self, ev: Tick):
        if not self.state.running:
            return None
        dt_s = ms(ev.delta_ms)
        if not (math.isfinite(dt_s) and dt_s >= 0):
            return None  # time never runs backwards or to infinity
        return self._advance(ev.t, dt_s)

    def on_step(self, ev: Step):
        # single-stepping only makes sense while paused
        if self.state.running:
            return None
        return self._advance(ev.t, self.step_s)

    def on_toggle(self, ev: ToggleRunning):
        self.state.running = not self.state.running
        return [RunningChanged(t=ev.t, running=self.state.running)]

    def _advance(self, now: float, dt_s: float):
        st = self.state
        before = st.trains
        after = self.mechanics.advance_all(dt_s, before, st.layout, st.switch_states)
        st.set_trains(after)
        st.t += dt_s

        out = []
        for old, new in zip(before, after):
            if old.location is not None and new.location is None:
                out.append(
                    TrainDerailed(t=now, train=new.name, edge=old.location.edge, pos=old.location.pos)
                )
        if out:
            # a derail freezes the run until the user resumes or resets
            st.running = False
            st.message = f"{len(out)} train(s) derailed"
            out.append(RunningChanged(t=now, running=False))
        return out
