import pytest

from poisync.services.tag_reconciler import (
    TagReconciler,
    has_hebrew_characters,
    icon_for_tags,
)


@pytest.fixture
def reconciler():
    return TagReconciler(default_language="he")


def test_hebrew_value_writes_base_key_only(reconciler):
    tags = {}
    reconciler.set_localized_tag(tags, "name", "הכנרת", "he")
    assert tags == {"name": "הכנרת"}


def test_script_overrides_requested_language(reconciler):
    tags = {}
    reconciler.set_localized_tag(tags, "name", "Sea of Galilee", "he")
    assert tags == {"name:en": "Sea of Galilee"}

    tags = {}
    reconciler.set_localized_tag(tags, "name", "הכנרת", "en")
    assert tags == {"name": "הכנרת"}


def test_blank_value_keeps_requested_language(reconciler):
    tags = {"description:en": "old"}
    reconciler.set_localized_tag(tags, "description", "  ", "en")
    assert tags == {"description:en": "  "}


def test_existing_key_is_replaced(reconciler):
    tags = {"name": "ישן", "name:en": "Old"}
    reconciler.set_localized_tag(tags, "name", "חדש", "he")
    reconciler.set_localized_tag(tags, "name", "New", "en")
    assert tags == {"name": "חדש", "name:en": "New"}


@pytest.mark.parametrize("value,expected_key", [
    ("עין גדי", "name"),
    ("123 עין גדי", "name"),
    ("Ein Gedi", "name:en"),
    ("Ein גדי", "name:en"),
    ("42", "name:en"),
])
def test_exactly_one_new_key_per_write(reconciler, value, expected_key):
    tags = {"tourism": "attraction"}
    reconciler.set_localized_tag(tags, "name", value, "ru")
    new_keys = set(tags) - {"tourism"}
    assert new_keys == {expected_key}


def test_hebrew_detection_requires_no_leading_latin():
    assert has_hebrew_characters("(מעיין)")
    assert not has_hebrew_characters("Spring מעיין")
    assert not has_hebrew_characters("")


def test_icon_vocabulary_appends_mapping(reconciler):
    tags = {"name": "מעיין"}
    reconciler.apply_icon_vocabulary(tags, "icon-tint")
    assert tags == {"name": "מעיין", "natural": "spring"}


def test_unknown_icon_is_noop(reconciler):
    tags = {"name": "x"}
    reconciler.apply_icon_vocabulary(tags, "icon-unknown")
    reconciler.apply_icon_vocabulary(tags, None)
    assert tags == {"name": "x"}


def test_strip_empty_tags(reconciler):
    tags = {"name": "x", "image": "", "website": "   ", "description": "\t"}
    reconciler.strip_empty_tags(tags)
    assert tags == {"name": "x"}
    assert all(v.strip() for v in tags.values())


def test_icon_for_tags_reverse_lookup():
    assert icon_for_tags({"natural": "peak"}) == "icon-peak"
    assert icon_for_tags({"highway": "path"}) is None
