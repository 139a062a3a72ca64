import os
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator


class SimModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    epoch: tuple[int, int, int, int, int, int] = (2024, 1, 1, 0, 0, 0)
    tick_ms: float = 16.0  # default host frame delta
    step_s: float = 1.0  # fixed delta of a single "step" request

    @field_validator("tick_ms", "step_s")
    @classmethod
    def _positive(cls, v: float, info: ValidationInfo) -> float:
        if v <= 0:
            raise ValueError(f"{info.field_name} must be > 0")
        return v


class LogModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    debug: bool = False
    sample_every: int = 1


# ----------------- MECHANICS ---------------------


class PlacementModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    max_iterations: int = Field(default=50, ge=1)
    tolerance_m: float = Field(default=0.05, gt=0)


class ProjectorModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    root: int = Field(default=0, ge=0)
    origin: tuple[float, float] = (0.0, 2.5)
    heading_deg: float = 0.0
    loop_tolerance_m: float = Field(default=0.05, gt=0)
    reject_inconsistent_loops: bool = False


# ----------------- LAYOUT SOURCES ---------------------


class LayoutBuiltinModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    by: Literal["builtin"] = "builtin"
    name: Literal["demo"] = "demo"


class LayoutByPath(BaseModel):
    model_config = ConfigDict(extra="forbid")
    by: Literal["path"] = "path"
    file: str
    must_exist: bool = True

    @field_validator("file")
    @classmethod
    def _expand(cls, v: str) -> str:
        return os.path.expandvars(os.path.expanduser(v))


LayoutSourceUnion = Annotated[LayoutBuiltinModel | LayoutByPath, Field(discriminator="by")]


# ------------------------------------------------------------------


class ScenarioModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    name: str = "railroad"
    run_id: str = "local"
    sim: SimModel = SimModel()
    log: LogModel = LogModel()
    layout: LayoutSourceUnion = Field(default_factory=LayoutBuiltinModel)
    placement: PlacementModel = PlacementModel()
    projector: ProjectorModel = ProjectorModel()
    save_path: str = "rr.json"

    @field_validator("save_path")
    @classmethod
    def _expand(cls, v: str) -> str:
        return os.path.expandvars(os.path.expanduser(v))
