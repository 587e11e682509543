"""
SpacingCard — Spacing SQLAlchemy Model
========================================

What:  ORM model representing `spacing_table`.
How:   Inherits from the shared DeclarativeBase; created on startup by
       database.create_tables().
Who:   Used by SpacingService for get/patch/post.

Table Design:
    - id: integer surrogate key assigned by the database
    - user_id / project_id / component_id: random UUID strings from POST;
      component_id is unique and is the only lookup/update key
    - 16 spacing columns: `<side>_value` (string, "auto" or a number) and
      `<side>_unit` (CSS unit), one pair per margin/padding side.
      The pairs are listed in schemas.spacing.SPACING_COLUMNS.
"""

from sqlalchemy import Integer, String, text
from sqlalchemy.orm import Mapped, mapped_column

from spacingcard.database import Base
from spacingcard.schemas.spacing import UNIT_MAX_LENGTH, VALUE_MAX_LENGTH


def _value_column() -> Mapped[str]:
    return mapped_column(
        String(VALUE_MAX_LENGTH),
        nullable=False,
        default="auto",
        server_default=text("'auto'"),
    )


def _unit_column() -> Mapped[str]:
    return mapped_column(
        String(UNIT_MAX_LENGTH),
        nullable=False,
        default="px",
        server_default=text("'px'"),
    )


class SpacingRecord(Base):
    """
    One row per component.

    Lifecycle:
        1. Created by POST /spacing with fresh identifiers and "auto"/"px" everywhere
        2. Read by GET /spacing/{component_id}
        3. Mutated in place by PATCH (any subset of the eight sides)
        4. Never deleted
    """

    __tablename__ = "spacing_table"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    user_id: Mapped[str] = mapped_column(String(64), nullable=False)
    project_id: Mapped[str] = mapped_column(String(64), nullable=False)
    component_id: Mapped[str] = mapped_column(
        String(64),
        nullable=False,
        unique=True,
        index=True,
    )

    # ── Margin ────────────────────────────────────────────────────────────
    margin_top_value: Mapped[str] = _value_column()
    margin_top_unit: Mapped[str] = _unit_column()
    margin_right_value: Mapped[str] = _value_column()
    margin_right_unit: Mapped[str] = _unit_column()
    margin_bottom_value: Mapped[str] = _value_column()
    margin_bottom_unit: Mapped[str] = _unit_column()
    margin_left_value: Mapped[str] = _value_column()
    margin_left_unit: Mapped[str] = _unit_column()

    # ── Padding ───────────────────────────────────────────────────────────
    padding_top_value: Mapped[str] = _value_column()
    padding_top_unit: Mapped[str] = _unit_column()
    padding_right_value: Mapped[str] = _value_column()
    padding_right_unit: Mapped[str] = _unit_column()
    padding_bottom_value: Mapped[str] = _value_column()
    padding_bottom_unit: Mapped[str] = _unit_column()
    padding_left_value: Mapped[str] = _value_column()
    padding_left_unit: Mapped[str] = _unit_column()

    def __repr__(self) -> str:
        return f"<SpacingRecord(id={self.id}, component_id='{self.component_id}')>"
