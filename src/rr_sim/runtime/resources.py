# rr_sim/runtime/resources.py
import os
from collections.abc import Callable
from dataclasses import dataclass

from rr_sim.domain.layouts import demo_snapshot
from rr_sim.domain.state import SimSnapshot
from rr_sim.io.document import decode, dumps

BUILTIN_LAYOUTS: dict[str, Callable[[], SimSnapshot]] = {"demo": demo_snapshot}


def load_document_from_path(file: str) -> str | None:
    """Raw document text, or None when the file does not exist."""
    if not os.path.exists(file):
        return None
    with open(file, encoding="utf-8") as f:
        return f.read()


def save_document_to_path(snapshot: SimSnapshot, file: str) -> str:
    directory = os.path.dirname(file)
    if directory:
        os.makedirs(directory, exist_ok=True)
    with open(file, "w", encoding="utf-8") as f:
        f.write(dumps(snapshot, indent=2))
    return file


@dataclass(frozen=True)
class BuiltinLayoutSource:
    name: str = "demo"

    def load(self) -> SimSnapshot:
        return BUILTIN_LAYOUTS[self.name]()


@dataclass(frozen=True)
class FileLayoutSource:
    file: str
    must_exist: bool = True
    fallback: str = "demo"

    def load(self) -> SimSnapshot:
        text = load_document_from_path(self.file)
        if text is None:
            if self.must_exist:
                raise FileNotFoundError(self.file)
            return BUILTIN_LAYOUTS[self.fallback]()
        return decode(text)
