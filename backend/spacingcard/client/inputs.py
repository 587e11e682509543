"""
SpacingCard Client — Input and Unit Selector
==============================================

What:  Per-side editing state: one SpacingInput for each of the eight
       margin/padding sides, each with a UnitSelector dropdown.
How:   Inputs own their value/unit/focus state, seeded from the record, and
       report every edit upward as a SpacingChange through `on_change`.

Display rules (kept from the card layout):
    - pristine:              value is the literal "auto"
    - shows_unit_selector:   hidden only while "auto" and not focused
    - shows_updated_marker:  value changed from "auto" and input not focused
    - width:                 max(54, 15 px per character)
"""

from dataclasses import dataclass
from typing import Callable, List, Optional, Union

from spacingcard.schemas.spacing import (
    AUTO_VALUE,
    DEFAULT_UNIT,
    SpacingField,
    SpacingProperty,
    SpacingUnit,
)


@dataclass(frozen=True)
class SpacingChange:
    """An edit reported by an input: which side, and its new value/unit."""
    property_key: SpacingField
    value: str
    unit: SpacingUnit


ChangeCallback = Callable[[SpacingChange], None]


class UnitSelector:
    """Dropdown of CSS units for one input."""

    def __init__(self, unit: SpacingUnit, on_unit_change: Callable[[SpacingUnit], None]):
        self.current_unit = unit
        self.focused = False
        self._on_unit_change = on_unit_change

    @property
    def options(self) -> List[SpacingUnit]:
        return list(SpacingUnit)

    def select(self, unit: Union[SpacingUnit, str]) -> None:
        """Pick a unit; raises ValueError for a unit not in the list."""
        new_unit = SpacingUnit(unit)
        self.current_unit = new_unit
        self._on_unit_change(new_unit)

    def focus(self) -> None:
        self.focused = True

    def blur(self) -> None:
        self.focused = False


class SpacingInput:
    """Text field plus unit dropdown for one spacing side."""

    MIN_WIDTH = 54
    CHAR_WIDTH = 15

    def __init__(
        self,
        identifier: SpacingField,
        spacing_property: SpacingProperty,
        on_change: Optional[ChangeCallback] = None,
    ):
        self.identifier = identifier
        self.value = spacing_property.value or AUTO_VALUE
        self.unit = spacing_property.unit or DEFAULT_UNIT
        self.focused = False
        self._on_change = on_change
        self.unit_selector = UnitSelector(self.unit, self.set_unit)

    # ── Display state ─────────────────────────────────────────────────────

    @property
    def pristine(self) -> bool:
        return self.value == AUTO_VALUE

    @property
    def shows_unit_selector(self) -> bool:
        return not (self.value == AUTO_VALUE and not self.focused)

    @property
    def shows_updated_marker(self) -> bool:
        return not self.pristine and not self.focused

    @property
    def width(self) -> int:
        return max(self.MIN_WIDTH, len(self.value) * self.CHAR_WIDTH)

    # ── Events ────────────────────────────────────────────────────────────

    def set_value(self, value: str) -> None:
        self.value = value
        self._emit()

    def set_unit(self, unit: Union[SpacingUnit, str]) -> None:
        self.unit = SpacingUnit(unit)
        self.unit_selector.current_unit = self.unit
        self._emit()

    def focus(self) -> None:
        self.focused = True

    def blur(self) -> None:
        self.focused = False

    def _emit(self) -> None:
        if self._on_change is not None:
            self._on_change(
                SpacingChange(property_key=self.identifier, value=self.value, unit=self.unit)
            )
