"""
Character catalog.

Backend ids for playable characters, with display names and aliases.
Used to build character-scoped leaderboard names.
"""

from dataclasses import dataclass, field
from enum import StrEnum


class Character(StrEnum):
    """Backend character ids."""

    SHAGGY = "character_shaggy"
    WONDER_WOMAN = "character_wonder_woman"
    BATMAN = "character_batman"
    SUPERMAN = "character_superman"
    TAZ = "character_taz"
    IRON_GIANT = "character_C017"
    GARNET = "character_garnet"
    STEVEN_UNIVERSE = "character_steven"
    JAKE = "character_jake"
    REINDOG = "character_creature"
    FINN = "character_finn"
    VELMA = "character_velma"
    ARYA_STARK = "character_arya"
    BUGS_BUNNY = "character_bugs_bunny"
    HARLEY_QUINN = "character_harleyquinn"
    TOM_AND_JERRY = "character_tom_and_jerry"
    LEBRON_JAMES = "character_c16"


@dataclass(frozen=True)
class CharacterInfo:
    """Display metadata for a character."""

    id: Character
    display_name: str
    aliases: tuple[str, ...] = field(default_factory=tuple)


CHARACTER_INFO: dict[Character, CharacterInfo] = {
    info.id: info
    for info in (
        CharacterInfo(Character.SHAGGY, "Shaggy"),
        CharacterInfo(Character.WONDER_WOMAN, "Wonder Woman"),
        CharacterInfo(Character.BATMAN, "Batman"),
        CharacterInfo(Character.SUPERMAN, "Superman"),
        CharacterInfo(Character.TAZ, "Taz"),
        CharacterInfo(Character.IRON_GIANT, "Iron Giant"),
        CharacterInfo(Character.GARNET, "Garnet"),
        CharacterInfo(Character.STEVEN_UNIVERSE, "Steven Universe"),
        CharacterInfo(Character.JAKE, "Jake the Dog", ("Jake",)),
        CharacterInfo(Character.REINDOG, "Reindog"),
        CharacterInfo(Character.FINN, "Finn the Human", ("Finn",)),
        CharacterInfo(Character.VELMA, "Velma"),
        CharacterInfo(Character.ARYA_STARK, "Arya Stark"),
        CharacterInfo(Character.BUGS_BUNNY, "Bugs Bunny"),
        CharacterInfo(Character.HARLEY_QUINN, "Harley Quinn"),
        CharacterInfo(Character.TOM_AND_JERRY, "Tom and Jerry"),
        CharacterInfo(Character.LEBRON_JAMES, "LeBron James"),
    )
}


def find_character(name: str) -> Character | None:
    """
    Resolve a character from its id, display name or an alias.

    Matching is case-insensitive.

    Returns:
        The character, or None if unknown
    """
    needle = name.strip().casefold()
    if not needle:
        return None

    for info in CHARACTER_INFO.values():
        candidates = (info.id.value, info.display_name, *info.aliases)
        if any(candidate.casefold() == needle for candidate in candidates):
            return info.id

    return None
