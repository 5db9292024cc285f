#!/usr/bin/env python3
"""Plan a route between two stations from the command line.

Usage:
    python scripts/plan_route.py --from bank --to oxford-circus
    python scripts/plan_route.py --from waterloo --to euston --data data/underground-network.json
"""

import argparse
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from src.network_bc.network.domain.entities import NetworkDataError
from src.network_bc.routing.network_store import NetworkStore

logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)

DEFAULT_DATA_PATH = Path(__file__).resolve().parents[1] / "data" / "underground-network.json"


def main() -> int:
    parser = argparse.ArgumentParser(description='Plan a route between two stations')
    parser.add_argument('--from', dest='origin', required=True, help='Origin station ID')
    parser.add_argument('--to', dest='destination', required=True, help='Destination station ID')
    parser.add_argument('--data', type=str, default=str(DEFAULT_DATA_PATH), help='Network data JSON file')
    args = parser.parse_args()

    store = NetworkStore.get_instance()
    try:
        store.load_data(args.data)
    except NetworkDataError as e:
        logger.error(str(e))
        return 2

    service = store.create_routing_service()
    route = service.find_route(args.origin, args.destination)
    if route is None:
        logger.error(f"No route found between {args.origin} and {args.destination}")
        return 1

    print(f"{service.station_name(args.origin)} -> {service.station_name(args.destination)}")
    print('=' * 60)
    for step in service.describe_route(route):
        print(f"  {step}")
    print('-' * 60)
    print(f"  Lines:    {', '.join(service.line_name(line) for line in route.lines_used)}")
    print(f"  Stations: {route.total_stations}")
    print(f"  Changes:  {route.changes}")
    print(f"  Time:     ~{route.estimated_time} min")
    return 0


if __name__ == "__main__":
    sys.exit(main())
