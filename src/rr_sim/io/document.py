# rr_sim/io/document.py
"""
Wire format of a saved simulation: layout, trains and switch states.
Lengths in meters, speeds in m/s, curve sweeps in degrees.
"""

import json
import math
from collections.abc import Mapping
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from rr_sim.domain.entities.track import (
    CurvedTrack,
    Edge,
    MapExit,
    Orientation,
    StraightTrack,
    Track,
)
from rr_sim.domain.entities.train import Location, RollingStock, TrainState
from rr_sim.domain.errors import LayoutError
from rr_sim.domain.layout import Layout
from rr_sim.domain.state import SimSnapshot
from rr_sim.domain.switch import Switch


class DocumentError(ValueError):
    """A saved document was rejected; nothing from it has been applied."""


# ----------------- Tracks ---------------------


class StraightTrackDoc(BaseModel):
    model_config = ConfigDict(extra="forbid", allow_inf_nan=False)
    kind: Literal["straight"] = "straight"
    length: float = Field(gt=0)


class CurvedTrackDoc(BaseModel):
    model_config = ConfigDict(extra="forbid", allow_inf_nan=False)
    kind: Literal["curved"] = "curved"
    radius: float = Field(gt=0)
    sweep: float  # degrees, positive turns left

    @field_validator("sweep")
    @classmethod
    def _nonzero(cls, v: float) -> float:
        if v == 0 or not math.isfinite(v):
            raise ValueError("sweep must be finite and non-zero")
        return v


class MapExitDoc(BaseModel):
    model_config = ConfigDict(extra="forbid", allow_inf_nan=False)
    kind: Literal["map-exit"] = "map-exit"


TrackDocUnion = Annotated[
    StraightTrackDoc | CurvedTrackDoc | MapExitDoc, Field(discriminator="kind")
]


# ----------------- Layout ---------------------


class VertexDoc(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True, allow_inf_nan=False)
    from_: int = Field(alias="from", ge=0)
    to: int = Field(ge=0)

    def pair(self) -> Edge:
        return (self.from_, self.to)


class EdgeDoc(VertexDoc):
    track: TrackDocUnion | None  # null => connectivity only


class SwitchDoc(BaseModel):
    model_config = ConfigDict(extra="forbid", allow_inf_nan=False)
    edges: list[VertexDoc]
    configs: list[list[int]]

    @model_validator(mode="after")
    def _check_indices(self):
        n = len(self.edges)
        for ci, cfg in enumerate(self.configs):
            if any(not 0 <= i < n for i in cfg):
                raise ValueError(f"config {ci} references an edge index outside 0..{n - 1}")
        return self


class LayoutDoc(BaseModel):
    model_config = ConfigDict(extra="forbid", allow_inf_nan=False)
    edges: list[EdgeDoc]
    switches: list[SwitchDoc] = Field(default_factory=list)


# ----------------- Trains ---------------------


class LocationDoc(BaseModel):
    model_config = ConfigDict(extra="forbid", allow_inf_nan=False)
    edge: VertexDoc
    pos: float
    orientation: Literal["aligned", "reversed"]


class RollingStockDoc(BaseModel):
    model_config = ConfigDict(extra="forbid", allow_inf_nan=False)
    length: float = Field(gt=0)


class TrainDoc(BaseModel):
    model_config = ConfigDict(extra="forbid", allow_inf_nan=False)
    name: str
    composition: list[RollingStockDoc]
    speed: float = Field(ge=0)
    location: LocationDoc | None  # null => derailed / left the map


class SimDocument(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True, allow_inf_nan=False)
    layout: LayoutDoc
    trains: list[TrainDoc]
    switch_states: list[int] = Field(alias="switchStates")

    @model_validator(mode="after")
    def _check_switch_states(self):
        switches = self.layout.switches
        if len(self.switch_states) != len(switches):
            raise ValueError(
                f"Incorrect number of switch states: expected {len(switches)}, "
                f"got {len(self.switch_states)}"
            )
        for i, (sw, s) in enumerate(zip(switches, self.switch_states)):
            if not 0 <= s < len(sw.configs):
                raise ValueError(f"switch {i} state {s} out of range")
        return self


# ----------------- Conversions ---------------------


def track_from_doc(doc: StraightTrackDoc | CurvedTrackDoc | MapExitDoc) -> Track:
    if isinstance(doc, StraightTrackDoc):
        return StraightTrack(doc.length)
    if isinstance(doc, CurvedTrackDoc):
        return CurvedTrack(doc.radius, math.radians(doc.sweep))
    return MapExit()


def track_to_doc(track: Track) -> StraightTrackDoc | CurvedTrackDoc | MapExitDoc:
    if isinstance(track, StraightTrack):
        return StraightTrackDoc(length=track.length)
    if isinstance(track, CurvedTrack):
        return CurvedTrackDoc(radius=track.radius, sweep=math.degrees(track.sweep))
    if isinstance(track, MapExit):
        return MapExitDoc()
    raise TypeError(f"not a track: {track!r}")


def layout_from_doc(doc: LayoutDoc) -> Layout:
    return Layout.from_edges(
        ((e.from_, e.to, None if e.track is None else track_from_doc(e.track)) for e in doc.edges),
        (
            Switch(edges=tuple(v.pair() for v in s.edges), configs=tuple(map(tuple, s.configs)))
            for s in doc.switches
        ),
    )


def layout_to_doc(layout: Layout) -> LayoutDoc:
    return LayoutDoc(
        edges=[
            EdgeDoc(from_=frm, to=to, track=None if t is None else track_to_doc(t))
            for frm, to, t in layout.graph.edges()
        ],
        switches=[
            SwitchDoc(
                edges=[VertexDoc(from_=a, to=b) for a, b in sw.edges],
                configs=[list(c) for c in sw.configs],
            )
            for sw in layout.switches
        ],
    )


def _train_from_doc(doc: TrainDoc) -> TrainState:
    loc = None
    if doc.location is not None:
        loc = Location(
            doc.location.edge.pair(), doc.location.pos, Orientation(doc.location.orientation)
        )
    return TrainState(
        name=doc.name,
        composition=tuple(RollingStock(rs.length) for rs in doc.composition),
        speed=doc.speed,
        location=loc,
    )


def _train_to_doc(train: TrainState) -> TrainDoc:
    loc = train.location
    return TrainDoc(
        name=train.name,
        composition=[RollingStockDoc(length=rs.length) for rs in train.composition],
        speed=train.speed,
        location=None
        if loc is None
        else LocationDoc(
            edge=VertexDoc(from_=loc.edge[0], to=loc.edge[1]),
            pos=loc.pos,
            orientation=loc.orientation.value,
        ),
    )


def snapshot_from_doc(doc: SimDocument) -> SimSnapshot:
    layout = layout_from_doc(doc.layout)
    return SimSnapshot(layout, tuple(doc.switch_states), tuple(map(_train_from_doc, doc.trains)))


def snapshot_to_doc(snapshot: SimSnapshot) -> SimDocument:
    return SimDocument(
        layout=layout_to_doc(snapshot.layout),
        trains=[_train_to_doc(t) for t in snapshot.trains],
        switch_states=list(snapshot.switch_states),
    )


# ----------------- Entry points ---------------------


def decode(payload: str | bytes | Mapping) -> SimSnapshot:
    """Validate a whole document and build a snapshot, or raise DocumentError."""
    try:
        if isinstance(payload, (str, bytes)):
            doc = SimDocument.model_validate_json(payload)
        else:
            doc = SimDocument.model_validate(payload)
        return snapshot_from_doc(doc)
    except (ValidationError, LayoutError) as exc:
        raise DocumentError(str(exc)) from exc


def encode(snapshot: SimSnapshot) -> dict:
    return snapshot_to_doc(snapshot).model_dump(mode="json", by_alias=True)


def dumps(snapshot: SimSnapshot, **kw) -> str:
    return json.dumps(encode(snapshot), **kw)
