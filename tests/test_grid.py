"""Tests for coordinate-grid and city placement geometry."""

from __future__ import annotations

import logging

import pytest

from discsky.config import DiscConfig, SouthernPolicy
from discsky.geo.grid import DEFAULT_CITIES, build_coordinate_grid, coarse_grid, place_cities

_DISC = DiscConfig(radius=10_000.0)


def test_coordinate_grid_line_counts() -> None:
    """Default steps give ten parallels, twelve meridians and eight labels."""
    grid = build_coordinate_grid(_DISC)

    assert [line.value_deg for line in grid.parallels] == [0.0, 10.0, 20.0, 30.0, 40.0, 50.0, 60.0, 70.0, 80.0, 90.0]
    assert len(grid.meridians) == 12
    assert [label.text for label in grid.labels] == [f"{lat}°" for lat in range(10, 90, 10)]
    assert len(grid.parallels[0].points) == 73
    assert len(grid.meridians[0].points) == 46


def test_parallels_are_circles_of_projected_radius() -> None:
    """Every point of a parallel sits at the projected radial distance."""
    grid = build_coordinate_grid(_DISC)
    thirty = next(line for line in grid.parallels if line.value_deg == 30.0)

    for point in thirty.points:
        assert point.radial_distance == pytest.approx(_DISC.radius * 60.0 / 90.0)


def test_meridians_run_from_rim_to_pole() -> None:
    """Meridian polylines start on the rim and end at the center."""
    grid = build_coordinate_grid(_DISC)
    east = next(line for line in grid.meridians if line.value_deg == 90.0)

    assert east.points[0].x == pytest.approx(_DISC.radius)
    assert east.points[-1].radial_distance == pytest.approx(0.0)


def test_latitude_labels_are_offset_along_x() -> None:
    """Labels sit at longitude 0 shifted by the label offset."""
    grid = build_coordinate_grid(_DISC, label_offset=250.0)
    label = grid.labels[0]

    assert label.text == "10°"
    assert label.position.x == pytest.approx(250.0)
    assert label.position.z == pytest.approx(_DISC.radius * 80.0 / 90.0)


def test_coarse_grid_spokes_and_rings() -> None:
    """The radial-spoke grid reaches the rim with its outermost ring."""
    grid = coarse_grid(_DISC.radius)

    assert len(grid.meridians) == 24
    assert len(grid.parallels) == 6
    assert grid.parallels[-1].value_deg == 0.0
    assert grid.parallels[-1].points[0].radial_distance == pytest.approx(_DISC.radius)
    assert len(grid.parallels[0].points) == 129
    with pytest.raises(ValueError):
        coarse_grid(0.0)


def test_southern_cities_are_out_of_model(caplog: pytest.LogCaptureFixture) -> None:
    """Sydney and Cape Town are kept without a position and logged."""
    with caplog.at_level(logging.WARNING, logger="discsky.geo.grid"):
        markers = place_cities(_DISC)

    by_name = {marker.name: marker for marker in markers}
    assert len(markers) == len(DEFAULT_CITIES)
    assert not by_name["Sydney"].in_model
    assert not by_name["Cape Town"].in_model
    assert by_name["Moscow"].in_model
    assert by_name["London"].label == "51.5°,-0.1°"
    assert "Sydney" in caplog.text


def test_extend_policy_places_southern_cities_beyond_rim() -> None:
    """Under the extend policy every city receives a position."""
    markers = place_cities(DiscConfig(radius=10_000.0, southern_policy=SouthernPolicy.EXTEND))

    sydney = next(marker for marker in markers if marker.name == "Sydney")
    assert sydney.position is not None
    assert sydney.position.radial_distance > 10_000.0
