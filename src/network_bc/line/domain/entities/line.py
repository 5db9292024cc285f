from dataclasses import dataclass
from typing import Optional, Tuple


DEFAULT_LINE_COLOR = "#999999"


def display_line_name(line_id: str) -> str:
    """Human name for a line id: 'hammersmith-city' -> 'Hammersmith City'."""
    return " ".join(part.capitalize() for part in line_id.split("-") if part)


@dataclass(frozen=True)
class Line:
    """A named line made of one or more branches.

    Each branch is an ordered sequence of station ids along a contiguous
    stretch of track. Branches may share stations (forks, interchanges).
    """

    id: str
    name: str
    color: str = DEFAULT_LINE_COLOR
    branches: Tuple[Tuple[str, ...], ...] = ()

    @classmethod
    def create(
        cls,
        line_id: str,
        branches=(),
        name: Optional[str] = None,
        color: Optional[str] = None,
    ) -> "Line":
        return cls(
            id=line_id,
            name=name or display_line_name(line_id),
            color=color or DEFAULT_LINE_COLOR,
            branches=tuple(tuple(branch) for branch in branches),
        )

    @property
    def station_ids(self) -> Tuple[str, ...]:
        """Distinct stations on the line, in first-seen branch order."""
        seen = {}
        for branch in self.branches:
            for station_id in branch:
                seen.setdefault(station_id, None)
        return tuple(seen)
