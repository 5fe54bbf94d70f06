"""Tests for the body catalog and star list reader."""

from __future__ import annotations

import logging
import math
from pathlib import Path

import pytest

import apparent_ephemeris.catalog as catalog_mod
from apparent_ephemeris.catalog import Catalog, default_catalog, read_stars
from apparent_ephemeris.catalog.base import BodyType, OrbitalElements
from apparent_ephemeris.catalog.planets import CHIRON, EARTH, MERCURY
from apparent_ephemeris.errors import InvalidArgumentError, UnknownBodyError


def test_default_catalog_contents() -> None:
    catalog = default_catalog()
    keys = catalog.keys()
    assert keys[:3] == ['sun', 'moon', 'mercury']
    for key in ('pluto', 'chiron', 'sirius', 'polaris', 'betelgeuse'):
        assert key in catalog
    assert 'earth' not in catalog


def test_get_body_is_case_insensitive() -> None:
    assert default_catalog().get_body('Mars').name == 'Mars'


def test_unknown_body_raises() -> None:
    with pytest.raises(UnknownBodyError, match='vulcan'):
        default_catalog().get_body('vulcan')
    with pytest.raises(KeyError):
        default_catalog().get_body('vulcan')


def test_earth_is_not_a_target() -> None:
    with pytest.raises(InvalidArgumentError, match='Earth'):
        Catalog([EARTH])
    with pytest.raises(ValueError):
        Catalog([EARTH])


def test_mercury_elements_converted_from_mean_longitude() -> None:
    assert MERCURY.elements is not None
    assert MERCURY.elements.mean_anomaly == pytest.approx(252.25032350 - 77.45779628)
    assert MERCURY.elements.perihelion == pytest.approx(77.45779628 - 48.33076593)
    assert MERCURY.elements.daily_motion == pytest.approx(149472.67411175 / 36525.0)


def test_semi_axis_derived_from_perihelion_distance() -> None:
    assert CHIRON.elements is not None
    assert CHIRON.elements.semi_axis is None
    assert CHIRON.elements.a == pytest.approx(8.45 / (1.0 - 0.3831))


def test_semi_axis_requires_a_distance() -> None:
    elements = OrbitalElements(
        semi_axis=1.0,
        eccentricity=0.1,
        inclination=0.0,
        node=0.0,
        perihelion=0.0,
        mean_anomaly=0.0,
        daily_motion=1.0,
    )
    object.__setattr__(elements, 'semi_axis', None)
    with pytest.raises(InvalidArgumentError, match='perihelion_distance'):
        elements.a


def test_elements_reject_bad_eccentricity() -> None:
    with pytest.raises(InvalidArgumentError):
        OrbitalElements(
            semi_axis=1.0,
            eccentricity=1.0,
            inclination=0.0,
            node=0.0,
            perihelion=0.0,
            mean_anomaly=0.0,
            daily_motion=1.0,
        )


def test_read_stars_with_comments_and_motion(tmp_path: Path) -> None:
    path = tmp_path / 'stars.txt'
    path.write_text(
        '! bright stars\n'
        'Alpha Test\n'
        '06 00 00\n'
        '-30 30 00\n'
        '100.0 -50.0 20.0 1.5\n'
        '\n'
        'Beta Test\n'
        '! position follows\n'
        '12\n'
        '45\n'
    )
    stars = read_stars(path)
    assert [s.key for s in stars] == ['alpha_test', 'beta_test']
    alpha, beta = stars
    assert alpha.body_type is BodyType.STAR
    assert alpha.star is not None
    assert alpha.star.ra == pytest.approx(math.radians(90.0))
    assert alpha.star.dec == pytest.approx(math.radians(-30.5))
    assert alpha.star.pm_ra == 100.0
    assert alpha.star.parallax == 20.0
    assert alpha.magnitude == 1.5
    assert beta.star is not None
    assert beta.star.parallax == 0.0
    assert beta.star.ra == pytest.approx(math.radians(180.0))


def test_read_stars_skips_bad_entry(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    path = tmp_path / 'stars.txt'
    path.write_text('Broken\nnot-an-angle\n10\nGood\n1\n2\n')
    with caplog.at_level(logging.WARNING):
        stars = read_stars(path)
    assert [s.name for s in stars] == ['Good']
    assert 'skipping entry' in caplog.text


def test_read_stars_respects_max(tmp_path: Path) -> None:
    path = tmp_path / 'stars.txt'
    path.write_text(''.join(f'S{i}\n{i}\n{i}\n' for i in range(5)))
    assert len(read_stars(path, max_stars=2)) == 2


def test_with_stars_extends_catalog(tmp_path: Path) -> None:
    path = tmp_path / 'stars.txt'
    path.write_text('Extra Star\n3 0 0\n10 0 0\n')
    base = Catalog([MERCURY])
    extended = base.with_stars(path)
    assert extended.keys() == ['mercury', 'extra_star']
    assert base.keys() == ['mercury']


def test_default_catalog_merges_starlist_env(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    path = tmp_path / 'stars.txt'
    path.write_text('Env Star\n1 0 0\n5 0 0\n')
    monkeypatch.setenv('STARLIST_PATH', str(path))
    monkeypatch.setattr(catalog_mod, '_default', None)
    assert 'env_star' in default_catalog()
