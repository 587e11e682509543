"""
SpacingCard — Example Table Model
===================================

What:  Diagnostic table read by GET /examples.
Why:   Lets an operator confirm the API can reach the database and read rows
       without touching spacing data.
"""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from spacingcard.database import Base


class ExampleRow(Base):
    """A free-form named row; contents are returned as-is."""

    __tablename__ = "example_table"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False, default="")

    def __repr__(self) -> str:
        return f"<ExampleRow(id={self.id}, name='{self.name}')>"
