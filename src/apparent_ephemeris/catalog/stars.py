"""Bright star catalog and star list file reader."""

from __future__ import annotations

import logging
import math
from pathlib import Path

from apparent_ephemeris.angle_utils import parse_angle
from apparent_ephemeris.catalog.base import Body, BodyType, StarElements
from apparent_ephemeris.constants import DEGREES_PER_HOUR_RA

logger = logging.getLogger(__name__)


def star_key(name: str) -> str:
    """Catalog key for a star name ('Alpha Centauri' -> 'alpha_centauri')."""
    return '_'.join(name.lower().split())


def make_star(
    name: str,
    ra: str,
    dec: str,
    pm_ra: float = 0.0,
    pm_dec: float = 0.0,
    parallax: float = 0.0,
    magnitude: float = 0.0,
) -> Body:
    """Build a star Body from sexagesimal J2000 RA ("h m s") and Dec ("d m s").

    Parameters:
        name: Display name; the key is derived from it.
        ra: Right ascension text in hours.
        dec: Declination text in degrees.
        pm_ra: Proper motion in RA times cos(dec), mas/yr.
        pm_dec: Proper motion in Dec, mas/yr.
        parallax: Parallax in mas (0 if unknown).
        magnitude: Apparent visual magnitude.

    Returns:
        Body of type STAR.

    Raises:
        ValueError: If RA or Dec cannot be parsed.
    """
    ra_val = parse_angle(ra)
    dec_val = parse_angle(dec)
    if ra_val is None or dec_val is None:
        raise ValueError(f'Cannot parse position of star {name!r}: {ra!r} {dec!r}')
    return Body(
        key=star_key(name),
        name=name,
        body_type=BodyType.STAR,
        magnitude=magnitude,
        star=StarElements(
            ra=math.radians(ra_val * DEGREES_PER_HOUR_RA),
            dec=math.radians(dec_val),
            pm_ra=pm_ra,
            pm_dec=pm_dec,
            parallax=parallax,
        ),
    )


BRIGHT_STARS: tuple[Body, ...] = (
    make_star('Sirius', '06 45 08.917', '-16 42 58.02', -546.01, -1223.07, 379.21, -1.46),
    make_star('Vega', '18 36 56.336', '38 47 01.28', 200.94, 286.23, 130.23, 0.03),
    make_star('Regulus', '10 08 22.311', '11 58 01.95', -248.73, 5.59, 41.13, 1.40),
    make_star('Spica', '13 25 11.579', '-11 09 40.75', -42.35, -30.67, 13.06, 0.97),
    make_star('Aldebaran', '04 35 55.239', '16 30 33.49', 63.45, -188.94, 48.94, 0.86),
    make_star('Antares', '16 29 24.459', '-26 25 55.21', -12.11, -23.30, 5.89, 1.09),
    make_star('Polaris', '02 31 49.09', '89 15 50.8', 44.48, -11.85, 7.54, 1.98),
    make_star('Betelgeuse', '05 55 10.305', '07 24 25.43', 27.54, 11.30, 6.55, 0.50),
)


def _parse_motion_line(line: str) -> tuple[float, float, float, float] | None:
    """Return (pm_ra, pm_dec, parallax, magnitude) if line is four numbers."""
    fields = line.split()
    if len(fields) != 4:
        return None
    try:
        pm_ra, pm_dec, parallax, magnitude = (float(f) for f in fields)
    except ValueError:
        return None
    return (pm_ra, pm_dec, parallax, magnitude)


def read_stars(filepath: str | Path, max_stars: int = 100) -> list[Body]:
    """Read a star list file.

    Format: for each star, a line with the name, then RA (hours or "h m s"),
    then Dec (degrees or "d m s"), then optionally a line with four numbers
    ``pm_ra pm_dec parallax magnitude`` (mas/yr, mas/yr, mas, mag). Lines
    starting with '!' and blank lines are skipped. Entries whose RA or Dec
    cannot be parsed are skipped with a warning.

    Parameters:
        filepath: Path to star list file.
        max_stars: Maximum number of stars to read.

    Returns:
        List of star Bodies in file order.
    """
    path = Path(filepath)
    with path.open(encoding='utf-8') as f:
        lines = [
            line.strip() for line in f if line.strip() and not line.lstrip().startswith('!')
        ]
    stars: list[Body] = []
    i = 0
    while i < len(lines) and len(stars) < max_stars:
        if i + 2 >= len(lines):
            logger.warning('Star list %s: incomplete entry %r at end of file', path, lines[i])
            break
        name, ra_line, dec_line = lines[i], lines[i + 1], lines[i + 2]
        i += 3
        motion = _parse_motion_line(lines[i]) if i < len(lines) else None
        if motion is not None:
            i += 1
        pm_ra, pm_dec, parallax, magnitude = motion or (0.0, 0.0, 0.0, 0.0)
        try:
            stars.append(make_star(name, ra_line, dec_line, pm_ra, pm_dec, parallax, magnitude))
        except ValueError as e:
            logger.warning('Star list %s: skipping entry: %s', path, e)
    logger.info('Read %d stars from %s', len(stars), path)
    return stars
