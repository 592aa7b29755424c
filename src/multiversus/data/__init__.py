"""
Data Models and Catalogs Module.

Contains Pydantic models for requests and search pages, and the
character catalog.
"""

from .characters import CHARACTER_INFO, Character, CharacterInfo, find_character
from .models import RequestDescriptor, SearchPage

__all__ = [
    # Models
    "RequestDescriptor",
    "SearchPage",
    # Characters
    "CHARACTER_INFO",
    "Character",
    "CharacterInfo",
    "find_character",
]
