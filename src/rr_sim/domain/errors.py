# rr_sim/domain/errors.py


class LayoutError(ValueError):
    """A layout (tracks, graph or switch table) is malformed."""


class SwitchStateError(LayoutError):
    """A switch-state vector does not fit the layout it is applied to."""
