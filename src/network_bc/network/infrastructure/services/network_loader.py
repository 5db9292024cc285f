"""Network data loader.

Reads the network data file (stations, lines, per-line branches) maintained
outside the routing engine and turns it into domain objects.

Expected document layout:

    {
      "generated": "...",
      "stations": [{"id", "name", "lat", "lng", "lines", "zone"}, ...],
      "lines": [{"id", "name", "color"}, ...],          (optional)
      "lineColors": {"central": "#DC241F", ...},        (optional)
      "lineConnections": {"central": [[...], [...]], ...}
    }

Malformed data raises NetworkDataError at load time.
"""

import json
import logging
from pathlib import Path
from typing import Dict, List, Optional, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError, field_validator

from src.network_bc.line.domain.entities.line import Line
from src.network_bc.network.domain.entities import LineNetwork, NetworkDataError
from src.network_bc.station.domain.entities.station import Station

logger = logging.getLogger(__name__)


class StationRecord(BaseModel):
    """A station entry in the data file."""
    id: str = Field(min_length=1)
    name: str
    lat: float
    lon: float = Field(validation_alias=AliasChoices("lng", "lon"))
    lines: List[str] = []
    zone: List[int] = []


class LineRecord(BaseModel):
    """A line entry in the data file."""
    id: str = Field(min_length=1)
    name: Optional[str] = None
    color: Optional[str] = None


class NetworkDocument(BaseModel):
    """Top-level network data file."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    generated: Optional[str] = None
    stations: List[StationRecord] = []
    lines: List[LineRecord] = []
    line_colors: Dict[str, str] = Field(default_factory=dict, alias="lineColors")
    line_connections: Dict[str, List[List[str]]] = Field(alias="lineConnections")

    @field_validator("stations")
    @classmethod
    def unique_station_ids(cls, stations: List[StationRecord]) -> List[StationRecord]:
        seen = set()
        duplicates = set()
        for station in stations:
            if station.id in seen:
                duplicates.add(station.id)
            seen.add(station.id)
        if duplicates:
            raise ValueError(f"duplicate station ids: {sorted(duplicates)}")
        return stations

    @field_validator("line_connections")
    @classmethod
    def non_empty_branches(cls, connections: Dict[str, List[List[str]]]) -> Dict[str, List[List[str]]]:
        for line_id, branches in connections.items():
            for index, branch in enumerate(branches):
                if not branch:
                    raise ValueError(f"line '{line_id}' branch {index} is empty")
                if any(not station_id for station_id in branch):
                    raise ValueError(f"line '{line_id}' branch {index} has an empty station id")
        return connections


def parse_network(document: dict, source: str = "<memory>") -> LineNetwork:
    """Validate a raw network document and build the domain LineNetwork."""
    try:
        parsed = NetworkDocument.model_validate(document)
    except ValidationError as e:
        raise NetworkDataError(f"invalid network data: {e}", source=source) from e

    stations = {
        record.id: Station(
            id=record.id,
            name=record.name,
            lat=record.lat,
            lon=record.lon,
            lines=tuple(record.lines),
            zones=tuple(record.zone),
        )
        for record in parsed.stations
    }

    line_records = {record.id: record for record in parsed.lines}
    lines: Dict[str, Line] = {}
    for line_id, branches in parsed.line_connections.items():
        record = line_records.get(line_id)
        color = parsed.line_colors.get(line_id) or (record.color if record else None)
        lines[line_id] = Line.create(
            line_id,
            branches=branches,
            name=record.name if record else None,
            color=color,
        )

    # Lines declared without branch data are kept so that colours still resolve
    for line_id, record in line_records.items():
        if line_id not in lines:
            logger.warning(f"Line '{line_id}' has no branch data in {source}")
            lines[line_id] = Line.create(
                line_id,
                name=record.name,
                color=parsed.line_colors.get(line_id) or record.color,
            )

    unknown = {
        station_id
        for line in lines.values()
        for station_id in line.station_ids
        if station_id not in stations
    }
    if unknown and stations:
        logger.warning(
            f"{len(unknown)} station ids in line connections have no station record "
            f"in {source} (e.g. {sorted(unknown)[:5]})"
        )

    return LineNetwork(stations=stations, lines=lines, generated=parsed.generated)


def load_network(path: Union[str, Path]) -> LineNetwork:
    """Load and validate a network data file from disk."""
    path = Path(path)
    try:
        with path.open(encoding="utf-8") as f:
            document = json.load(f)
    except FileNotFoundError as e:
        raise NetworkDataError("network data file not found", source=str(path)) from e
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        raise NetworkDataError(f"cannot read network data: {e}", source=str(path)) from e

    if not isinstance(document, dict):
        raise NetworkDataError("network data must be a JSON object", source=str(path))

    network = parse_network(document, source=str(path))
    logger.info(
        f"Loaded network from {path}: {len(network.stations)} stations, "
        f"{len(network.lines)} lines"
    )
    return network
