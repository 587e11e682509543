"""
SpacingCard — Input and Schema Tests
======================================

What we test:
    ✅ Spacing values: "auto" or ASCII numeric only, within the column width
    ✅ Unit dropdown offers every unit in display order
    ✅ Input display state (pristine, unit selector, updated marker, width)
    ✅ Value and unit edits reported as SpacingChange
"""

import pytest
from pydantic import ValidationError

from spacingcard.client.inputs import SpacingChange, SpacingInput
from spacingcard.schemas.spacing import (
    VALUE_MAX_LENGTH,
    SpacingField,
    SpacingProperty,
    SpacingUnit,
    is_valid_spacing_value,
    unit_options,
)


class TestSpacingValues:

    @pytest.mark.parametrize("value", ["auto", "0", "12", "12.5", ".5", "-4", " 8 "])
    def test_valid(self, value):
        assert is_valid_spacing_value(value)

    @pytest.mark.parametrize(
        "value", ["", "12px", "abc", "1.2.3", "AUTO", "--1", "\u0661\u0662", "\uff11\uff12", "1" * 33]
    )
    def test_invalid(self, value):
        assert not is_valid_spacing_value(value)

    def test_property_strips_value(self):
        assert SpacingProperty(value=" 3 ", unit="em").value == "3"

    def test_property_rejects_letters(self):
        with pytest.raises(ValidationError):
            SpacingProperty(value="ten", unit="px")

    def test_longest_value_fits_column(self):
        assert SpacingProperty(value="9" * VALUE_MAX_LENGTH).value == "9" * VALUE_MAX_LENGTH
        with pytest.raises(ValidationError):
            SpacingProperty(value="9" * (VALUE_MAX_LENGTH + 1))

    def test_property_rejects_non_ascii_digits(self):
        with pytest.raises(ValidationError):
            SpacingProperty(value="\u0661\u0662", unit="px")

    def test_unit_options_order(self):
        assert [u.value for u in unit_options()] == [
            "px", "pt", "in", "cm", "mm", "%", "em",
            "rem", "vw", "vh", "vmin", "vmax", "ch", "ex",
        ]


class TestSpacingInput:

    def setup_method(self):
        self.changes = []
        self.input = SpacingInput(
            SpacingField.MARGIN_TOP,
            SpacingProperty(),
            on_change=self.changes.append,
        )

    def test_initial_state(self):
        assert self.input.pristine
        assert not self.input.shows_unit_selector
        assert not self.input.shows_updated_marker
        assert self.input.width == SpacingInput.MIN_WIDTH

    def test_focus_reveals_unit_selector(self):
        self.input.focus()
        assert self.input.shows_unit_selector
        self.input.blur()
        assert not self.input.shows_unit_selector

    def test_edit_reports_change(self):
        self.input.set_value("24")

        assert self.changes == [
            SpacingChange(property_key=SpacingField.MARGIN_TOP, value="24", unit=SpacingUnit.PX)
        ]
        assert self.input.shows_updated_marker
        assert self.input.shows_unit_selector

    def test_updated_marker_hidden_while_focused(self):
        self.input.focus()
        self.input.set_value("24")
        assert not self.input.shows_updated_marker

    def test_width_grows_with_value(self):
        self.input.set_value("123456")
        assert self.input.width == 6 * SpacingInput.CHAR_WIDTH

    def test_unit_selector_change(self):
        self.input.unit_selector.select("rem")

        assert self.input.unit == SpacingUnit.REM
        assert self.changes[-1].unit == SpacingUnit.REM
        assert self.changes[-1].value == "auto"

    def test_unknown_unit_rejected(self):
        with pytest.raises(ValueError):
            self.input.unit_selector.select("furlong")
        assert self.changes == []

    def test_invalid_value_kept_while_typing(self):
        self.input.set_value("12p")
        assert self.input.value == "12p"
        assert self.changes[-1].value == "12p"
