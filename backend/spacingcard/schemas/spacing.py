"""
SpacingCard — Spacing Schemas
===============================

What:  Pydantic models and enums defining the spacing record contract.
Why:   One definition of the eight spacing fields, their units and their
       physical storage columns, shared by the ORM model, the service, the
       API routes and the form client.
How:   FastAPI validates PATCH bodies against SpacingPatch and serializes
       SpacingResponse; the client parses the same models from JSON.

Record shape (JSON):
    {
        "id": 1,
        "user_id": "…", "project_id": "…", "component_id": "…",
        "margin_top": {"value": "auto", "unit": "px"},
        ...                                     (8 spacing fields)
        "padding_left": {"value": "12.5", "unit": "em"}
    }

Storage shape: each logical field is two columns, `<field>_value` and
`<field>_unit`, listed once in SPACING_COLUMNS.
"""

import re
from enum import Enum
from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel, Field, field_validator


# ══════════════════════════════════════════════════════════════════════════
# Enums and static column mapping
# ══════════════════════════════════════════════════════════════════════════


class SpacingField(str, Enum):
    """The eight logical spacing fields of a component."""

    MARGIN_TOP = "margin_top"
    MARGIN_RIGHT = "margin_right"
    MARGIN_BOTTOM = "margin_bottom"
    MARGIN_LEFT = "margin_left"
    PADDING_TOP = "padding_top"
    PADDING_RIGHT = "padding_right"
    PADDING_BOTTOM = "padding_bottom"
    PADDING_LEFT = "padding_left"


class SpacingUnit(str, Enum):
    """CSS length units offered by the unit dropdown, in display order."""

    PX = "px"
    PT = "pt"
    IN = "in"
    CM = "cm"
    MM = "mm"
    PERCENT = "%"
    EM = "em"
    REM = "rem"
    VW = "vw"
    VH = "vh"
    VMIN = "vmin"
    VMAX = "vmax"
    CH = "ch"
    EX = "ex"


# Logical field → (value column, unit column) in spacing_table
SPACING_COLUMNS: Dict[SpacingField, Tuple[str, str]] = {
    SpacingField.MARGIN_TOP: ("margin_top_value", "margin_top_unit"),
    SpacingField.MARGIN_RIGHT: ("margin_right_value", "margin_right_unit"),
    SpacingField.MARGIN_BOTTOM: ("margin_bottom_value", "margin_bottom_unit"),
    SpacingField.MARGIN_LEFT: ("margin_left_value", "margin_left_unit"),
    SpacingField.PADDING_TOP: ("padding_top_value", "padding_top_unit"),
    SpacingField.PADDING_RIGHT: ("padding_right_value", "padding_right_unit"),
    SpacingField.PADDING_BOTTOM: ("padding_bottom_value", "padding_bottom_unit"),
    SpacingField.PADDING_LEFT: ("padding_left_value", "padding_left_unit"),
}

AUTO_VALUE = "auto"
DEFAULT_UNIT = SpacingUnit.PX

# Width of the `<side>_value` / `<side>_unit` columns in spacing_table
VALUE_MAX_LENGTH = 32
UNIT_MAX_LENGTH = 8

# "auto", or an optionally signed ASCII integer/decimal: 12, 12.5, .5, -4
_SPACING_VALUE_RE = re.compile(r"^(auto|[+-]?([0-9]+(\.[0-9]+)?|\.[0-9]+))$")


def is_valid_spacing_value(value: str) -> bool:
    """True when value is the literal "auto" or a numeric string that fits its column."""
    if not value:
        return False
    value = value.strip()
    return len(value) <= VALUE_MAX_LENGTH and bool(_SPACING_VALUE_RE.match(value))


# ══════════════════════════════════════════════════════════════════════════
# Record models
# ══════════════════════════════════════════════════════════════════════════


class SpacingProperty(BaseModel):
    """
    One side of a margin or padding: a value plus its unit.

    value is kept as a string because "auto" is a legal value.
    """
    value: str = Field(
        default=AUTO_VALUE,
        max_length=VALUE_MAX_LENGTH,
        description='"auto" or a numeric string',
    )
    unit: SpacingUnit = Field(default=DEFAULT_UNIT, description="CSS length unit")

    @field_validator("value")
    @classmethod
    def validate_value(cls, v: str) -> str:
        """Rejects anything but "auto" or a number (e.g. "12px", "abc")."""
        if not is_valid_spacing_value(v):
            raise ValueError(f"Invalid spacing value '{v}'. Use 'auto' or a number.")
        return v.strip()


def default_property() -> SpacingProperty:
    return SpacingProperty(value=AUTO_VALUE, unit=DEFAULT_UNIT)


class SpacingResponse(BaseModel):
    """
    What:  Full spacing record of one component.
    Who:   Returned by GET /spacing/{component_id}; held by the form client.
    """
    id: Optional[int] = Field(default=None, description="Database surrogate key")
    user_id: str = Field(description="Owning user identifier")
    project_id: str = Field(description="Owning project identifier")
    component_id: str = Field(description="Component identifier (lookup key)")

    margin_top: SpacingProperty = Field(default_factory=default_property)
    margin_right: SpacingProperty = Field(default_factory=default_property)
    margin_bottom: SpacingProperty = Field(default_factory=default_property)
    margin_left: SpacingProperty = Field(default_factory=default_property)
    padding_top: SpacingProperty = Field(default_factory=default_property)
    padding_right: SpacingProperty = Field(default_factory=default_property)
    padding_bottom: SpacingProperty = Field(default_factory=default_property)
    padding_left: SpacingProperty = Field(default_factory=default_property)

    def get_property(self, field: SpacingField) -> SpacingProperty:
        return getattr(self, field.value)

    def set_property(self, field: SpacingField, prop: SpacingProperty) -> None:
        setattr(self, field.value, prop)

    def spacing(self) -> Dict[SpacingField, SpacingProperty]:
        """The eight spacing fields keyed by SpacingField."""
        return {field: self.get_property(field) for field in SpacingField}


class SpacingPatch(BaseModel):
    """
    What:  Partial spacing record accepted by PATCH /spacing/{component_id}.
    How:   Any subset of the eight fields; omitted fields stay unchanged.
           Unknown keys (id, user_id, ...) sent by full-record clients are ignored.
    """
    margin_top: Optional[SpacingProperty] = None
    margin_right: Optional[SpacingProperty] = None
    margin_bottom: Optional[SpacingProperty] = None
    margin_left: Optional[SpacingProperty] = None
    padding_top: Optional[SpacingProperty] = None
    padding_right: Optional[SpacingProperty] = None
    padding_bottom: Optional[SpacingProperty] = None
    padding_left: Optional[SpacingProperty] = None

    model_config = {"extra": "ignore"}

    def supplied_fields(self) -> Dict[SpacingField, SpacingProperty]:
        """Fields present in the request body, in SpacingField order."""
        supplied = {}
        for field in SpacingField:
            prop = getattr(self, field.value)
            if prop is not None:
                supplied[field] = prop
        return supplied

    @classmethod
    def from_record(cls, record: SpacingResponse) -> "SpacingPatch":
        """A patch carrying all eight fields of a record."""
        return cls(**{field.value: prop for field, prop in record.spacing().items()})


# ══════════════════════════════════════════════════════════════════════════
# Operation responses
# ══════════════════════════════════════════════════════════════════════════


class PatchResponse(BaseModel):
    """Returned by PATCH /spacing/{component_id}."""
    message: str = Field(default="success", description="Human-readable result")


class CreateResponse(BaseModel):
    """Returned by POST /spacing; the id is usable immediately by GET."""
    component_id: str = Field(description="Identifier of the new spacing record")


class ErrorResponse(BaseModel):
    """
    Error body for every failed request (always HTTP 500).

    Example:
        {"error": "no matching spacing record found for 'abc'", "request_id": "1f2e3d4c"}
    """
    error: str = Field(description="Raw error message")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Returned by GET /health for container and load balancer probes."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")


def unit_options() -> List[SpacingUnit]:
    """Units in dropdown order."""
    return list(SpacingUnit)
