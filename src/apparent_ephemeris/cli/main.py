"""CLI entry point: apparent-ephemeris positions|motion subcommands."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from datetime import datetime
from typing import TextIO, cast

from apparent_ephemeris.catalog import Catalog, default_catalog
from apparent_ephemeris.ephemeris import Ephemeris, write_table
from apparent_ephemeris.errors import EphemerisError
from apparent_ephemeris.motion import DIRECTIONS, MOTIONS, UNITS, MotionSolver, calculate_motion
from apparent_ephemeris.time_utils import parse_datetime

logger = logging.getLogger(__name__)


def _configure_logging(verbose: bool = False) -> None:
    """Configure logging for CLI (stderr, level from --verbose or APPARENT_EPHEMERIS_LOG)."""
    level = logging.DEBUG if verbose else logging.WARNING
    env_level = os.environ.get('APPARENT_EPHEMERIS_LOG', '').upper()
    if env_level in ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'):
        level = getattr(logging, env_level)
    logging.basicConfig(
        level=level,
        format='%(levelname)s: %(name)s: %(message)s',
        stream=sys.stderr,
    )


def _parse_time(text: str) -> datetime:
    parsed = parse_datetime(text)
    if parsed is None:
        raise EphemerisError(f'Invalid time {text!r}')
    return parsed


def _positions_cmd(parser: argparse.ArgumentParser, args: argparse.Namespace) -> int:
    """Write a table of apparent positions (positions subcommand).

    Parameters:
        parser: Argument parser (unused).
        args: Parsed args; time, lat, lon, height, bodies, motion, output.

    Returns:
        Exit code 0 on success, 1 on error.
    """
    try:
        utc = _parse_time(args.time)
        catalog: Catalog = default_catalog()
        if args.bodies:
            catalog = Catalog(catalog.get_body(key) for key in args.bodies)
        ephemeris = Ephemeris.from_datetime(
            utc,
            latitude=args.lat,
            longitude=args.lon,
            height=args.height,
            calculate_motion=args.motion,
            catalog=catalog,
        )
    except EphemerisError as e:
        print(f'Error: {e}', file=sys.stderr)
        return 1

    if args.output is not None:
        with open(args.output, 'w', encoding='utf-8') as f:
            write_table(ephemeris, f)
        return 0
    out: TextIO = sys.stdout
    write_table(ephemeris, out)
    return 0


def _motion_cmd(parser: argparse.ArgumentParser, args: argparse.Namespace) -> int:
    """Find a station or motion moment (motion subcommand).

    Parameters:
        parser: Argument parser (unused).
        args: Parsed args; body, time, kind, direction, unit.

    Returns:
        Exit code 0 on success, 1 on error.
    """
    label = 'moment' if args.unit == 'second' else 'station'
    try:
        utc = _parse_time(args.time)
        result = calculate_motion(
            args.body, utc, args.kind, args.direction, args.unit, solver=MotionSolver()
        )
    except EphemerisError as e:
        print(f'Error: {e}', file=sys.stderr)
        return 1
    print(
        f'{args.body} {args.direction} {args.kind} {label}: '
        f'{result.date.strftime("%Y-%m-%dT%H:%M:%SZ")} '
        f'longitude {result.apparent_longitude:.6f} '
        f'movement {result.next_movement_amount:+.6e}'
    )
    return 0


def main() -> int:
    """Entry point for apparent-ephemeris CLI (positions | motion).

    Returns:
        Exit code 0 on success, 1 on failure.
    """
    parser = argparse.ArgumentParser(
        prog='apparent-ephemeris',
        description='Apparent positions of the Sun, Moon, planets and stars, and retrograde stations.',
    )
    subparsers = parser.add_subparsers(dest='command', required=True)

    pos_parser = subparsers.add_parser('positions', help='Table of apparent positions')
    pos_parser.add_argument('--time', type=str, required=True, help='UTC time, e.g. 2019-10-31T00:00Z')
    pos_parser.add_argument('--lat', type=float, default=0.0, help='Latitude (deg, north positive)')
    pos_parser.add_argument('--lon', type=float, default=0.0, help='Longitude (deg, east positive)')
    pos_parser.add_argument('--height', type=float, default=0.0, help='Height above ellipsoid (m)')
    pos_parser.add_argument(
        '--bodies', type=str, nargs='*', default=None, help='Body keys (default: whole catalog)'
    )
    pos_parser.add_argument(
        '--motion', action='store_true', help='Include daily motion and retrograde flag'
    )
    pos_parser.add_argument('-o', '--output', type=str, default=None, help='Output table file')
    pos_parser.add_argument('-v', '--verbose', action='store_true', help='Show DEBUG logs')
    pos_parser.set_defaults(func=_positions_cmd)

    motion_parser = subparsers.add_parser('motion', help='Find a retrograde/direct station or moment')
    motion_parser.add_argument('--body', type=str, required=True, help='Body key, e.g. mercury')
    motion_parser.add_argument('--time', type=str, required=True, help='UTC start time')
    motion_parser.add_argument(
        '--kind', type=str, choices=MOTIONS, default='retrograde', help='Motion state to find'
    )
    motion_parser.add_argument(
        '--direction', type=str, choices=DIRECTIONS, default='next', help='Search direction'
    )
    motion_parser.add_argument(
        '--unit',
        type=str,
        choices=tuple(UNITS),
        default='minute',
        help='Resolution: date or minute for a station, second for a moment',
    )
    motion_parser.add_argument('-v', '--verbose', action='store_true', help='Show DEBUG logs')
    motion_parser.set_defaults(func=_motion_cmd)

    args = parser.parse_args()
    _configure_logging(verbose=args.verbose)
    return cast(int, args.func(parser, args))


if __name__ == '__main__':
    sys.exit(main())
