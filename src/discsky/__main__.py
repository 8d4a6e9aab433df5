"""Command-line entrypoint for discsky."""

from __future__ import annotations

import argparse
import json
import math
import sys
from collections.abc import Sequence

from discsky.config import config_from_env
from discsky.contracts import GeoCoordinate, OutOfDiscError, PlanarPoint
from discsky.engine import DiscSky
from discsky.logging_config import setup_logging


def _finite_float(value: str) -> float:
    """Parse a finite float CLI argument."""
    try:
        parsed = float(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid number: '{value}'") from exc
    if not math.isfinite(parsed):
        raise argparse.ArgumentTypeError(f"number must be finite: '{value}'")
    return parsed


def _latitude_arg(value: str) -> float:
    """Parse a latitude within [-90, 90]."""
    parsed = _finite_float(value)
    if not -90.0 <= parsed <= 90.0:
        raise argparse.ArgumentTypeError(f"latitude must be within [-90, 90]: '{value}'")
    return parsed


def _longitude_arg(value: str) -> float:
    """Parse a longitude within [-180, 180]."""
    parsed = _finite_float(value)
    if not -180.0 <= parsed <= 180.0:
        raise argparse.ArgumentTypeError(f"longitude must be within [-180, 180]: '{value}'")
    return parsed


def _add_sky_arguments(parser: argparse.ArgumentParser) -> None:
    """Add sun/moon position and declination options."""
    parser.add_argument("--sun-x", type=_finite_float, required=True)
    parser.add_argument("--sun-z", type=_finite_float, required=True)
    parser.add_argument("--moon-x", type=_finite_float, required=True)
    parser.add_argument("--moon-z", type=_finite_float, required=True)
    parser.add_argument("--declination-deg", type=_finite_float, default=0.0)


def build_parser() -> argparse.ArgumentParser:
    """Create and return the top-level CLI parser."""
    parser = argparse.ArgumentParser(
        prog="discsky",
        description="Flat-disc projection and sky illumination command-line interface.",
    )
    parser.add_argument(
        "--version",
        action="version",
        version="%(prog)s 0.1.0",
    )
    parser.add_argument("--log-level", default=None)

    subparsers = parser.add_subparsers(dest="command")

    project = subparsers.add_parser("project", help="Project lat/lon onto the disc plane.")
    project.add_argument("--lat", type=_latitude_arg, required=True)
    project.add_argument("--lon", type=_longitude_arg, required=True)

    unproject = subparsers.add_parser("unproject", help="Report lat/lon under a disc point.")
    unproject.add_argument("--x", type=_finite_float, required=True)
    unproject.add_argument("--z", type=_finite_float, required=True)

    illuminate = subparsers.add_parser("illuminate", help="Sample illumination at a disc point.")
    _add_sky_arguments(illuminate)
    illuminate.add_argument("--x", type=_finite_float, required=True)
    illuminate.add_argument("--z", type=_finite_float, required=True)

    phase = subparsers.add_parser("phase", help="Print moon phase and eclipse state.")
    _add_sky_arguments(phase)

    return parser


def _updated_sky(args: argparse.Namespace) -> DiscSky:
    """Build an engine updated with the sun/moon options."""
    sky = DiscSky(config_from_env())
    sky.update((args.sun_x, args.sun_z), (args.moon_x, args.moon_z), args.declination_deg)
    return sky


def main(argv: Sequence[str] | None = None) -> int:
    """Run the CLI application."""
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_level)

    try:
        if args.command == "project":
            point = DiscSky(config_from_env()).project_geo_to_plane(GeoCoordinate(args.lat, args.lon))
            print(json.dumps(point.to_dict()))
        elif args.command == "unproject":
            coord = DiscSky(config_from_env()).project_plane_to_geo(PlanarPoint.from_xz(args.x, args.z))
            print(json.dumps({"lat": coord.latitude_deg, "lon": coord.longitude_deg}))
        elif args.command == "illuminate":
            sample = _updated_sky(args).sample_illumination(PlanarPoint.from_xz(args.x, args.z))
            print(json.dumps(sample.to_dict()))
        elif args.command == "phase":
            sky = _updated_sky(args)
            print(json.dumps({"phase": sky.sample_moon_phase(), "eclipse": sky.sample_eclipse().to_dict()}))
    except OutOfDiscError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
