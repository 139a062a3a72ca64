# rr_sim/app/controllers/switches.py

from rr_sim.app.events import ChangeSwitch, SwitchChanged, SwitchChangeRejected
from rr_sim.domain.layout import change_switch
from rr_sim.domain.state import SimState


class SwitchHandler:
    def __init__(self, state: SimState):
        self.state = state

    def on_change_switch(self, ev: ChangeSwitch):
        st = self.state
        if not 0 <= ev.switch_id < len(st.switch_states):
            return [
                SwitchChangeRejected(
                    t=ev.t,
                    switch_id=ev.switch_id,
                    reason=f"no switch {ev.switch_id} (layout has {len(st.switch_states)})",
                )
            ]
        old = st.switch_states[ev.switch_id]
        st.set_switch_states(change_switch(st.layout, st.switch_states, ev.switch_id))
        # takes effect for the next tick; trains already past the junction are unaffected
        return [
            SwitchChanged(
                t=ev.t,
                switch_id=ev.switch_id,
                old_state=old,
                new_state=st.switch_states[ev.switch_id],
            )
        ]
