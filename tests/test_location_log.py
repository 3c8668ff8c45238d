from __future__ import annotations

import pytest

from core.models import PhotoLocation, UserPhoto
from core.services.location_log import format_coordinate, format_line, maps_url


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (10.5, "10.5"),
        (20.25, "20.25"),
        (1.0, "1"),
        (-0.0, "0"),
        (-122.4194, "-122.4194"),
        (0.1, "0.1"),
        (0.00001, "0.00001"),
        (0.000123, "0.000123"),
        (1e-7, "1e-7"),
        (-2.5e-8, "-2.5e-8"),
        (1e21, "1e+21"),
        (1.5e22, "1.5e+22"),
        (1e16, "10000000000000000"),
    ],
)
def test_format_coordinate(value, expected):
    assert format_coordinate(value) == expected


def test_maps_url():
    assert maps_url(PhotoLocation(10.5, 20.25)) == "https://www.google.com/maps?q=10.5,20.25"


def test_line_uses_file_name():
    photo = UserPhoto(
        filepath="file:///x/1000.jpeg",
        file_name="1000.jpeg",
        location=PhotoLocation(10.5, 20.25),
    )
    assert format_line(photo) == (
        "1000.jpeg | 10.5,20.25 | https://www.google.com/maps?q=10.5,20.25\n"
    )


def test_line_falls_back_to_filepath():
    photo = UserPhoto(filepath="legacy.jpeg", location=PhotoLocation(1, 2))
    assert format_line(photo) == "legacy.jpeg | 1,2 | https://www.google.com/maps?q=1,2\n"


def test_no_line_without_location():
    assert format_line(UserPhoto(filepath="a.jpeg", file_name="a.jpeg")) is None
