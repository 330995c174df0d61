"""
Tag reconciliation between application fields and multilingual OSM tags.

Pure logic, no I/O. Tags are a ``dict`` so every key holds a single value.
"""

import re
from typing import Dict, Optional, Tuple

# Icon id -> (category key, category value)
ICON_TAGS: Dict[str, Tuple[str, str]] = {
    "icon-viewpoint": ("tourism", "viewpoint"),
    "icon-tint": ("natural", "spring"),
    "icon-ruins": ("historic", "ruins"),
    "icon-picnic": ("tourism", "picnic_site"),
    "icon-campsite": ("tourism", "camp_site"),
    "icon-tree": ("natural", "tree"),
    "icon-cave": ("natural", "cave_entrance"),
    "icon-star": ("tourism", "attraction"),
    "icon-peak": ("natural", "peak"),
}

# Only non-latin characters may precede the first hebrew letter
_HEBREW_PATTERN = re.compile(r"^[^a-zA-Z]*[\u0591-\u05F4]")


def has_hebrew_characters(words: str) -> bool:
    return _HEBREW_PATTERN.match(words) is not None


def is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def icon_for_tags(tags: Dict[str, str]) -> Optional[str]:
    """Reverse lookup of the icon vocabulary, first match in table order."""
    for icon, (key, value) in ICON_TAGS.items():
        if tags.get(key) == value:
            return icon
    return None


class TagReconciler:
    """Maps title, description and icon edits onto an OSM tag set."""

    def __init__(self, default_language: str):
        self.default_language = default_language

    def resolve_language(self, value: Optional[str], language: str) -> str:
        """
        Language a value is written under.

        The script of a non-empty value decides: hebrew letters mean "he",
        anything else "en". The requested language only applies to blank values.
        """
        if is_blank(value):
            return language
        return "he" if has_hebrew_characters(value) else "en"

    def set_localized_tag(self, tags: Dict[str, str], key: str, value: Optional[str], language: str) -> None:
        """
        Write ``value`` under ``key`` for the language resolved from the value.

        The default language owns the base key; every other language is written
        to ``key:language``. An existing key is replaced.
        """
        language = self.resolve_language(value, language)
        value = value or ""
        if language == self.default_language:
            tags[key] = value
            return
        tags[f"{key}:{language}"] = value

    @staticmethod
    def apply_icon_vocabulary(tags: Dict[str, str], icon: Optional[str]) -> None:
        mapping = ICON_TAGS.get(icon or "")
        if mapping is None:
            return
        key, value = mapping
        tags[key] = value

    @staticmethod
    def strip_empty_tags(tags: Dict[str, str]) -> None:
        for key in [k for k, v in tags.items() if is_blank(v)]:
            del tags[key]
