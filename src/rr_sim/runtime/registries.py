# runtime/registries.py
from collections.abc import Callable

from rr_sim.app.protocols import LayoutSource
from rr_sim.config.models import LayoutBuiltinModel, LayoutByPath, LayoutSourceUnion
from rr_sim.runtime.resources import BUILTIN_LAYOUTS, BuiltinLayoutSource, FileLayoutSource

LayoutSourceFactory = Callable[[LayoutSourceUnion, dict], LayoutSource]

_layout_source_registry: dict[str, LayoutSourceFactory] = {}


# ------------------- Layout sources ---------------------------


def register_layout_source(by: str):
    def deco(fn: LayoutSourceFactory):
        _layout_source_registry[by] = fn
        return fn

    return deco


def make_layout_source(cfg: LayoutSourceUnion, *, deps: dict | None = None) -> LayoutSource:
    try:
        factory = _layout_source_registry[cfg.by]
    except KeyError:
        raise ValueError(f"Unknown layout source {cfg.by!r}")
    return factory(cfg, deps or {})


@register_layout_source("builtin")
def _make_builtin(cfg: LayoutBuiltinModel, deps):
    if cfg.name not in BUILTIN_LAYOUTS:
        raise ValueError(f"Unknown builtin layout {cfg.name!r}")
    return BuiltinLayoutSource(cfg.name)


@register_layout_source("path")
def _make_path(cfg: LayoutByPath, deps):
    return FileLayoutSource(cfg.file, must_exist=cfg.must_exist)
