import math
from collections.abc import Sequence
from dataclasses import replace

from rr_sim.domain.entities.track import Orientation, track_length
from rr_sim.domain.entities.train import Location
from rr_sim.domain.layout import EdgeTriple, Layout, next_track, partition, previous_track


def normalize(
    loc: Location,
    layout: Layout,
    switch_states: Sequence[int],
    *,
    usable: frozenset[EdgeTriple] | None = None,
) -> Location | None:
    """
    Re-express `loc` on the edge that actually contains it, so that
    0 <= pos <= length(track). Walks across junctions using only usable
    edges; None means the location left the simulatable network. A NaN or
    infinite position never lands anywhere and also gives None.
    """
    if not math.isfinite(loc.pos):
        return None
    if usable is None:
        usable = partition(layout, switch_states).usable
    cur = loc
    while True:
        track = layout.track_at(cur.edge)
        if track is None:
            return None
        length = track_length(track)
        frm, to = cur.edge
        if cur.pos > length:
            crossed, overshoot = to, cur.pos - length
            step = next_track if cur.orientation is Orientation.ALIGNED else previous_track
        elif cur.pos < 0:
            crossed, overshoot = frm, -cur.pos
            step = previous_track if cur.orientation is Orientation.ALIGNED else next_track
        else:
            return cur
        entry = step(cur, layout, switch_states, usable=usable)
        if entry is None:
            return None
        if entry.edge[0] == crossed:
            cur = replace(entry, pos=entry.pos + overshoot)
        else:
            cur = replace(entry, pos=entry.pos - overshoot)
