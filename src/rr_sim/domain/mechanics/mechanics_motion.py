from collections.abc import Sequence
from dataclasses import replace

from rr_sim.domain.entities.train import TrainState
from rr_sim.domain.layout import EdgeTriple, Layout
from rr_sim.domain.mechanics.mechanics_normalizer import normalize


def travel(train: TrainState, dt_s: float) -> float:
    return train.speed * dt_s


def advance(
    dt_s: float,
    train: TrainState,
    layout: Layout,
    switch_states: Sequence[int],
    *,
    usable: frozenset[EdgeTriple] | None = None,
) -> TrainState:
    """
    One tick: move the train speed * dt along its orientation and normalize.
    A train that cannot be normalized is derailed (no location, speed 0);
    inert trains are returned unchanged.
    """
    if train.location is None:
        return train
    moved = train.location.moved_by(travel(train, dt_s))
    loc = normalize(moved, layout, switch_states, usable=usable)
    if loc is None:
        return train.derailed()
    return replace(train, location=loc)
