"""Tests for teamrepo/domain/models/enums.py."""

from teamrepo.domain.models.enums import Direction


def test_direction_values_are_lowercase_strings():
    assert Direction.ASC == "asc"
    assert Direction.DESC == "desc"


def test_direction_is_ascending():
    assert Direction.ASC.is_ascending
    assert not Direction.DESC.is_ascending


def test_direction_parses_from_string():
    assert Direction("desc") is Direction.DESC
