"""Body catalog: built-in solar system bodies and bright stars, plus star lists."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from pathlib import Path

from apparent_ephemeris.catalog.base import Body, BodyType, OrbitalElements, StarElements
from apparent_ephemeris.catalog.planets import EARTH, SOLAR_SYSTEM_BODIES
from apparent_ephemeris.catalog.stars import BRIGHT_STARS, make_star, read_stars
from apparent_ephemeris.config import get_starlist_path
from apparent_ephemeris.errors import InvalidArgumentError, UnknownBodyError

logger = logging.getLogger(__name__)

__all__ = [
    'EARTH',
    'Body',
    'BodyType',
    'Catalog',
    'OrbitalElements',
    'StarElements',
    'default_catalog',
    'make_star',
    'read_stars',
]


class Catalog:
    """Ordered, read-only collection of reducible bodies keyed by name.

    Earth is deliberately absent: it is the observer's platform and is held
    separately as ``EARTH``.
    """

    def __init__(self, bodies: Iterable[Body]) -> None:
        self._bodies: dict[str, Body] = {}
        for body in bodies:
            if body.key == EARTH.key:
                raise InvalidArgumentError('Earth cannot be a catalog target')
            self._bodies[body.key] = body

    def __iter__(self) -> Iterator[Body]:
        return iter(self._bodies.values())

    def __len__(self) -> int:
        return len(self._bodies)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and key.lower() in self._bodies

    def keys(self) -> list[str]:
        """Body keys in catalog order."""
        return list(self._bodies)

    def get_body(self, key: str) -> Body:
        """Return the body for a (case-insensitive) key.

        Raises:
            UnknownBodyError: If the key is not in the catalog.
        """
        body = self._bodies.get(key.lower())
        if body is None:
            raise UnknownBodyError(
                f'Unknown body {key!r}; expected one of: {", ".join(self._bodies)}'
            )
        return body

    def with_stars(self, filepath: str | Path) -> Catalog:
        """Return a new catalog extended by the stars in a star list file.

        Stars with a key already present replace the existing entry.
        """
        return Catalog([*self, *read_stars(filepath)])


_default: Catalog | None = None


def default_catalog() -> Catalog:
    """Built-in catalog, extended by STARLIST_PATH when configured. Cached."""
    global _default
    if _default is None:
        catalog = Catalog([*SOLAR_SYSTEM_BODIES, *BRIGHT_STARS])
        path = get_starlist_path()
        if path is not None:
            logger.info('Merging star list %s into catalog', path)
            catalog = catalog.with_stars(path)
        _default = catalog
    return _default
