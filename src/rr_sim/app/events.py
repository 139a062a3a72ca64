# app/events.py
from dataclasses import dataclass, field
from typing import Any

from rr_sim.domain.entities.track import Edge
from rr_sim.sim.event import BaseEvent


# Host commands
@dataclass(order=True)
class Tick(BaseEvent):
    delta_ms: float  # elapsed host time since the previous frame


@dataclass(order=True)
class Step(BaseEvent):
    pass


@dataclass(order=True)
class ToggleRunning(BaseEvent):
    pass


@dataclass(order=True)
class Reset(BaseEvent):
    pass


@dataclass(order=True)
class ChangeSwitch(BaseEvent):
    switch_id: int


@dataclass(order=True)
class LoadDocument(BaseEvent):
    payload: Any = field(default=None, compare=False)  # JSON text or parsed mapping


@dataclass(order=True)
class SaveRequested(BaseEvent):
    path: str | None = None  # None => scenario save_path


# Observability
@dataclass(order=True)
class RunningChanged(BaseEvent):
    running: bool


@dataclass(order=True)
class TrainDerailed(BaseEvent):
    train: str
    edge: Edge | None
    pos: float | None


@dataclass(order=True)
class SwitchChanged(BaseEvent):
    switch_id: int
    old_state: int
    new_state: int


@dataclass(order=True)
class SwitchChangeRejected(BaseEvent):
    switch_id: int
    reason: str


@dataclass(order=True)
class LayoutLoaded(BaseEvent):
    switches: int
    trains: int
    edges: int


@dataclass(order=True)
class LoadRejected(BaseEvent):
    reason: str


@dataclass(order=True)
class LayoutInconsistent(BaseEvent):
    edge: Edge
    distance: float


@dataclass(order=True)
class StateSaved(BaseEvent):
    path: str


@dataclass(order=True)
class SaveRejected(BaseEvent):
    path: str
    reason: str


@dataclass(order=True)
class SimReset(BaseEvent):
    trains: int
