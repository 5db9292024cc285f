from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

from src.network_bc.line.domain.entities.line import Line
from src.network_bc.station.domain.entities.station import Station


@dataclass(frozen=True)
class LineNetwork:
    """Static reference data for a transit network (stations + lines)."""

    stations: Dict[str, Station] = field(default_factory=dict)
    lines: Dict[str, Line] = field(default_factory=dict)
    generated: Optional[str] = None  # Timestamp of the source data file

    @property
    def line_connections(self) -> Dict[str, Tuple[Tuple[str, ...], ...]]:
        """Per-line branch mapping: {line_id: (branch, branch, ...)}."""
        return {line_id: line.branches for line_id, line in self.lines.items()}

    @property
    def line_colors(self) -> Dict[str, str]:
        return {line_id: line.color for line_id, line in self.lines.items()}


class NetworkDataError(ValueError):
    """Raised when network reference data is malformed.

    Only raised while loading data or building the graph, never per query.
    """

    def __init__(self, message: str, source: Optional[str] = None):
        self.source = source
        if source:
            message = f"{source}: {message}"
        super().__init__(message)


__all__ = ["LineNetwork", "NetworkDataError"]
