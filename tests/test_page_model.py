"""Tests for page_model module (PageEntry and rotation normalization)."""

import pytest

from pdfninja.core.page_model import PageEntry, normalize_rotation
from pdfninja.utils.exceptions import InvalidRotationError, ValidationError


class TestNormalizeRotation:
    def test_multiples_of_90(self):
        assert normalize_rotation(0) == 0
        assert normalize_rotation(90) == 90
        assert normalize_rotation(270) == 270

    def test_wraps_full_turns(self):
        assert normalize_rotation(360) == 0
        assert normalize_rotation(450) == 90

    def test_negative_wraps(self):
        assert normalize_rotation(-90) == 270
        assert normalize_rotation(-360) == 0

    def test_non_multiple_raises(self):
        with pytest.raises(InvalidRotationError):
            normalize_rotation(45)

    def test_float_raises(self):
        with pytest.raises(InvalidRotationError):
            normalize_rotation(90.0)

    def test_bool_raises(self):
        with pytest.raises(InvalidRotationError):
            normalize_rotation(True)

    def test_is_validation_error(self):
        with pytest.raises(ValidationError):
            normalize_rotation(10)


class TestPageEntry:
    def test_default_values(self):
        entry = PageEntry(page_number=1)
        assert entry.rotation == 0
        assert entry.selected is False
        assert entry.output_position == 0

    def test_rotation_normalization(self):
        entry = PageEntry(page_number=1, rotation=450)
        assert entry.rotation == 90

    def test_invalid_rotation_raises(self):
        with pytest.raises(InvalidRotationError):
            PageEntry(page_number=1, rotation=45)

    def test_rotate_right(self):
        entry = PageEntry(page_number=1)
        entry.rotate_right()
        assert entry.rotation == 90
        entry.rotate_right()
        assert entry.rotation == 180

    def test_rotate_left(self):
        entry = PageEntry(page_number=1)
        entry.rotate_left()
        assert entry.rotation == 270

    def test_rotate_wraps_to_zero(self):
        entry = PageEntry(page_number=1, rotation=270)
        entry.rotate(90)
        assert entry.rotation == 0

    def test_rotate_invalid_keeps_state(self):
        entry = PageEntry(page_number=1, rotation=180)
        with pytest.raises(InvalidRotationError):
            entry.rotate(30)
        assert entry.rotation == 180

    def test_to_dict_roundtrip(self):
        entry = PageEntry(page_number=3, selected=True, rotation=90, output_position=2)
        restored = PageEntry.from_dict(entry.to_dict())
        assert restored == entry

    def test_from_dict_defaults(self):
        entry = PageEntry.from_dict({})
        assert entry.page_number == 1
        assert entry.selected is False
        assert entry.rotation == 0
