"""
Tests for the character catalog.
"""

import pytest

from multiversus.data import CHARACTER_INFO, Character, find_character


def test_every_character_has_info():
    assert set(CHARACTER_INFO) == set(Character)


@pytest.mark.parametrize(
    "name, expected",
    [
        ("Batman", Character.BATMAN),
        ("  wonder woman ", Character.WONDER_WOMAN),
        ("jake", Character.JAKE),
        ("Finn the Human", Character.FINN),
        ("character_c017", Character.IRON_GIANT),
        ("Mario", None),
        ("", None),
    ],
)
def test_find_character(name, expected):
    assert find_character(name) == expected


def test_character_is_its_id():
    assert f"{Character.LEBRON_JAMES}_1v1" == "character_c16_1v1"
