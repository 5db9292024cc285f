#!/usr/bin/env python3
"""Validate a network data file.

This script verifies:
- The file parses and every branch is well formed
- Every graph edge is served by at least one line
- Every station id in a branch has a station record
- Station records list the lines that actually serve them
- Which stations are unreachable (no branch) and how many components exist
"""

import argparse
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from src.network_bc.network.domain.entities import NetworkDataError
from src.network_bc.network.infrastructure.services.network_loader import load_network
from src.network_bc.routing.network_graph import NetworkGraph

logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)

DEFAULT_DATA_PATH = Path(__file__).resolve().parents[1] / "data" / "underground-network.json"


def connected_components(graph: NetworkGraph) -> list:
    """Group graph stations into connected components (largest first)."""
    seen = set()
    components = []
    for start in graph.adjacency:
        if start in seen:
            continue
        component = []
        stack = [start]
        seen.add(start)
        while stack:
            station = stack.pop()
            component.append(station)
            for neighbor in graph.neighbors(station):
                if neighbor not in seen:
                    seen.add(neighbor)
                    stack.append(neighbor)
        components.append(component)
    return sorted(components, key=len, reverse=True)


class NetworkValidator:
    """Runs consistency checks over a loaded network."""

    def __init__(self, network, graph: NetworkGraph):
        self.network = network
        self.graph = graph
        self.results = {
            'total_checks': 0,
            'passed': 0,
            'failed': 0,
            'warnings': 0,
        }

    def _log_result(self, check_name: str, passed: bool, message: str = ""):
        """Log a single check result."""
        self.results['total_checks'] += 1
        status = "✓ PASS" if passed else "✗ FAIL"
        level = logging.INFO if passed else logging.ERROR
        msg = f"{status}: {check_name}"
        if message:
            msg += f" - {message}"
        logger.log(level, msg)
        if passed:
            self.results['passed'] += 1
        else:
            self.results['failed'] += 1

    def _log_warning(self, check_name: str, message: str = ""):
        self.results['warnings'] += 1
        msg = f"⚠ WARN: {check_name}"
        if message:
            msg += f" - {message}"
        logger.warning(msg)

    def check_edge_lines(self) -> None:
        missing = [(a, b) for a, b, lines in self.graph.edges() if not lines]
        self._log_result(
            "Every edge has a line",
            not missing,
            f"{len(missing)} edges without a line" if missing else f"{self.graph.edge_count} edges",
        )

    def check_station_records(self) -> None:
        missing = sorted(s for s in self.graph.adjacency if s not in self.network.stations)
        self._log_result(
            "Branch stations have records",
            not missing,
            f"missing: {missing[:10]}" if missing else "",
        )

    def check_station_lines(self) -> None:
        mismatched = []
        for station_id, station in self.network.stations.items():
            served_by = self.graph.lines_at(station_id)
            if served_by and set(station.lines) != served_by:
                mismatched.append(station_id)
        if mismatched:
            self._log_warning(
                "Station line lists differ from branch data",
                f"{len(mismatched)} stations (e.g. {mismatched[:5]})",
            )
        else:
            self._log_result("Station line lists match branch data", True)

    def check_reachability(self) -> None:
        unreachable = sorted(s for s in self.network.stations if not self.graph.has_station(s))
        if unreachable:
            self._log_warning("Stations in no branch (unreachable)", ", ".join(unreachable))

        components = connected_components(self.graph)
        if len(components) > 1:
            self._log_warning(
                "Network is not connected",
                f"{len(components)} components, sizes {[len(c) for c in components]}",
            )
        else:
            self._log_result("Network is connected", True, f"{self.graph.station_count} stations")

    def report_interchanges(self) -> None:
        interchanges = self.graph.get_interchanges()
        logger.info(f"{len(interchanges)} interchange stations")
        for station_id, lines in sorted(interchanges.items(), key=lambda item: -len(item[1])):
            logger.debug(f"  {station_id}: {', '.join(lines)}")

    def run(self) -> bool:
        self.check_edge_lines()
        self.check_station_records()
        self.check_station_lines()
        self.check_reachability()
        self.report_interchanges()

        logger.info(
            f"Checks: {self.results['total_checks']}, passed: {self.results['passed']}, "
            f"failed: {self.results['failed']}, warnings: {self.results['warnings']}"
        )
        return self.results['failed'] == 0


def main() -> int:
    parser = argparse.ArgumentParser(description='Validate a network data file')
    parser.add_argument('--data', type=str, default=str(DEFAULT_DATA_PATH), help='Network data JSON file')
    parser.add_argument('--verbose', '-v', action='store_true', help='List every interchange')
    args = parser.parse_args()

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    try:
        network = load_network(args.data)
        graph = NetworkGraph.from_network(network)
    except NetworkDataError as e:
        logger.error(f"✗ FAIL: {e}")
        return 2

    return 0 if NetworkValidator(network, graph).run() else 1


if __name__ == "__main__":
    sys.exit(main())
