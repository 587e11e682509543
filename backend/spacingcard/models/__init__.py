"""SQLAlchemy ORM models; importing this package registers every table with Base.metadata."""

from spacingcard.models.example import ExampleRow
from spacingcard.models.spacing import SpacingRecord

__all__ = ["ExampleRow", "SpacingRecord"]
