from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class Station:
    """A station in the network - reference data, never mutated by routing."""

    id: str
    name: str
    lat: float
    lon: float
    lines: Tuple[str, ...] = ()
    zones: Tuple[int, ...] = ()

    @property
    def is_interchange(self) -> bool:
        return len(self.lines) > 1
