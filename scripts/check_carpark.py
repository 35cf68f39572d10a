#!/usr/bin/env python3
"""Check car park availability and plan a route from the command line.

Runs the controller against the live services: matches the query
against a catalog file, prints suggestions with their open lots, checks
the first match and optionally computes a driving route to it.

Usage
-----
::

    python scripts/check_carpark.py carparks.json "ang mo kio ave 1"
    python scripts/check_carpark.py carparks.json "blk 101" --origin "Orchard Road"
    python scripts/check_carpark.py carparks.json "blk 101" --here 1.3521,103.8198

Options::

    --origin TEXT        Start address for the route (geocoded)
    --here LAT,LNG       Current position, used when --origin is not given
    --route              Compute a route even without --origin/--here
    --json               Output the final session state as JSON
    --verbose, -v        Enable debug logging

The catalog file is a JSON list of objects with ``car_park_no``,
``address``, ``lat`` and ``lng`` keys.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any

from pycarpark import (
    UNKNOWN,
    CarparkConfig,
    CarparkController,
    CatalogIndex,
    FixedGeolocation,
    HttpTransport,
    LatLng,
    SessionState,
)


def _parse_position(value: str) -> LatLng:
    try:
        lat_text, lng_text = value.split(",", 1)
        position = LatLng(float(lat_text), float(lng_text))
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"expected LAT,LNG, got {value!r}") from exc
    if not position.is_valid:
        raise argparse.ArgumentTypeError(f"position out of range: {value!r}")
    return position


def _load_catalog(path: Path) -> CatalogIndex:
    rows = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(rows, list):
        raise SystemExit(f"{path}: expected a JSON list of car parks")
    return CatalogIndex.from_records(rows)


def _print_state(state: SessionState) -> None:
    for facility, lots in state.suggestions():
        shown = "--" if lots is None else ("N/A" if lots == UNKNOWN else str(lots))
        print(f"  {facility.id:<8} {facility.address:<60} {shown:>5}")

    if state.error_message:
        print(f"\nError: {state.error_message}")

    facility = state.selected_facility
    if facility is not None:
        print(f"\nSelected {facility.id}: {facility.address}")
        print(f"  lots available: {state.selected_availability}")

    route = state.current_route
    if route is not None:
        print(f"  origin: {route.origin.lat:.6f},{route.origin.lng:.6f}")
        if route.found:
            distance = f"{route.distance_m / 1000:.1f} km" if route.distance_m is not None else "?"
            duration = f"{route.duration_s / 60:.0f} min" if route.duration_s is not None else "?"
            print(f"  route: {len(route.path)} points, {distance}, {duration}")
        else:
            print("  route: no path found")


def _state_json(state: SessionState) -> dict[str, Any]:
    return {
        "query_text": state.query_text,
        "matches": [facility.id for facility in state.matches],
        "match_availability": state.match_availability,
        "selected_facility": state.selected_facility.model_dump() if state.selected_facility else None,
        "selected_availability": state.selected_availability,
        "origin_address": state.origin_address,
        "origin_coords": list(state.origin_coords) if state.origin_coords else None,
        "route_path": [list(point) for point in state.route_path],
        "route_visible": state.route_visible,
        "error_message": state.error_message,
    }


async def main() -> None:
    parser = argparse.ArgumentParser(
        description="Check live car park availability and plan a driving route.",
    )
    parser.add_argument("catalog", type=Path, help="JSON catalog of car parks")
    parser.add_argument("query", help="Address text to search for")
    parser.add_argument("--origin", default="", help="Start address for the route")
    parser.add_argument("--here", type=_parse_position, help="Current position as LAT,LNG")
    parser.add_argument("--route", action="store_true", help="Compute a route after checking")
    parser.add_argument("--json", action="store_true", dest="json_mode", help="Output machine-readable JSON")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    else:
        logging.basicConfig(level=logging.WARNING)

    catalog = _load_catalog(args.catalog)
    config = CarparkConfig.from_env()
    geolocation = FixedGeolocation(args.here) if args.here is not None else None

    async with HttpTransport(config) as transport:
        controller = CarparkController.create(catalog, transport, config=config, geolocation=geolocation)

        await controller.update_query(args.query)
        state = controller.state
        if not args.json_mode:
            print(f"Matches for {args.query!r}: {len(state.matches)}")

        await controller.check()
        if args.origin:
            # a typed origin with a checked facility routes on its own
            controller.set_origin_address(args.origin)
            await controller.wait_idle()
        elif args.route or args.here is not None:
            await controller.request_route()

        state = controller.state
        await controller.aclose()

    if args.json_mode:
        json.dump(_state_json(state), sys.stdout, indent=2)
        print()
    else:
        _print_state(state)


if __name__ == "__main__":
    asyncio.run(main())
