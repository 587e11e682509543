"""
SpacingCard — Spacing Service (Data Access Functions)
======================================================

What:  The three spacing operations (get, patch, post) plus the diagnostic
       example listing, each issuing one parameterized SQL statement.
Why:   Keeps SQL and record reshaping out of the route handlers.
How:   Every method receives the AsyncSession for the current request; the
       session dependency commits or rolls back around it.
Who:   Called by the spacing and examples route handlers.

Column mapping:
    Rows store each side as two columns (margin_top_value, margin_top_unit).
    SPACING_COLUMNS maps each SpacingField to its pair in both directions:
        row → SpacingResponse   (get_spacing)
        SpacingPatch → UPDATE   (patch_spacing)
        defaults → INSERT       (post_spacing)
"""

import logging
import uuid
from typing import Any, Dict, List

from pydantic import ValidationError
from sqlalchemy import insert, select, text, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from spacingcard.exceptions import (
    CorruptRecordError,
    MissingParameterError,
    NotFoundError,
    QueryFailureError,
)
from spacingcard.models.spacing import SpacingRecord
from spacingcard.schemas.spacing import (
    AUTO_VALUE,
    DEFAULT_UNIT,
    SPACING_COLUMNS,
    SpacingPatch,
    SpacingResponse,
)

logger = logging.getLogger(__name__)


def _require_component_id(component_id: str) -> str:
    if component_id is None or not str(component_id).strip():
        raise MissingParameterError(parameter="component_id")
    return str(component_id).strip()


def record_to_response(record: SpacingRecord) -> SpacingResponse:
    """
    Reassemble the 16 flat columns of a row into eight {value, unit} pairs.

    Stored values are validated like request bodies; a row another writer
    left in a bad state raises ValidationError naming the offending side.
    """
    spacing = {
        field.value: {
            "value": getattr(record, value_column),
            "unit": getattr(record, unit_column),
        }
        for field, (value_column, unit_column) in SPACING_COLUMNS.items()
    }
    return SpacingResponse(
        id=record.id,
        user_id=record.user_id,
        project_id=record.project_id,
        component_id=record.component_id,
        **spacing,
    )


def patch_to_columns(patch: SpacingPatch) -> Dict[str, str]:
    """Flatten the supplied fields of a patch into column → value pairs."""
    columns: Dict[str, str] = {}
    for field, prop in patch.supplied_fields().items():
        value_column, unit_column = SPACING_COLUMNS[field]
        columns[value_column] = prop.value
        columns[unit_column] = prop.unit.value
    return columns


def default_columns() -> Dict[str, str]:
    """Column values of a brand-new record: every side "auto" in px."""
    columns: Dict[str, str] = {}
    for value_column, unit_column in SPACING_COLUMNS.values():
        columns[value_column] = AUTO_VALUE
        columns[unit_column] = DEFAULT_UNIT.value
    return columns


class SpacingService:
    """
    Data access for spacing_table.

    Error Handling Strategy:
        NotFoundError and MissingParameterError propagate as-is.
        SQLAlchemy failures are logged and wrapped in QueryFailureError.
        No retries and no explicit transactions beyond the request session.
    """

    async def get_spacing(self, db: AsyncSession, component_id: str) -> SpacingResponse:
        """
        Retrieve one component's spacing record.

        Query:
            SELECT * FROM spacing_table WHERE component_id = :component_id

        Raises:
            MissingParameterError: blank component_id
            NotFoundError: no row matches
            QueryFailureError: the SELECT failed
            CorruptRecordError: the row holds a value or unit the schema rejects
        """
        component_id = _require_component_id(component_id)
        try:
            result = await db.execute(
                select(SpacingRecord).where(SpacingRecord.component_id == component_id)
            )
            record = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error fetching spacing %s: %s", component_id, str(e))
            raise QueryFailureError(
                operation="get_spacing",
                context={"component_id": component_id, "error_type": type(e).__name__},
            ) from e

        if record is None:
            raise NotFoundError(resource="spacing", resource_id=component_id)

        try:
            return record_to_response(record)
        except ValidationError as e:
            fields = [".".join(str(part) for part in err["loc"]) for err in e.errors()]
            logger.error("Stored spacing %s fails validation: %s", component_id, fields)
            raise CorruptRecordError(component_id=component_id, fields=fields) from e

    async def patch_spacing(
        self,
        db: AsyncSession,
        component_id: str,
        patch: SpacingPatch,
    ) -> str:
        """
        Update any subset of the eight spacing fields of one component.

        Query (columns vary with the supplied fields):
            UPDATE spacing_table
               SET margin_top_value = :v1, margin_top_unit = :u1, ...
             WHERE component_id = :component_id

        The affected-row count is checked: patching an unknown component
        raises NotFoundError instead of reporting success.

        Returns:
            "success"
        """
        component_id = _require_component_id(component_id)
        columns = patch_to_columns(patch)
        if not columns:
            raise MissingParameterError(
                parameter="spacing fields",
                message="no spacing fields supplied to patch",
            )

        try:
            result = await db.execute(
                update(SpacingRecord)
                .where(SpacingRecord.component_id == component_id)
                .values(**columns)
            )
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error patching spacing %s: %s", component_id, str(e))
            raise QueryFailureError(
                operation="patch_spacing",
                context={"component_id": component_id, "error_type": type(e).__name__},
            ) from e

        if result.rowcount == 0:
            raise NotFoundError(resource="spacing", resource_id=component_id)

        logger.info(
            "Patched spacing %s: %s",
            component_id,
            ", ".join(field.value for field in patch.supplied_fields()),
        )
        return "success"

    async def post_spacing(self, db: AsyncSession) -> str:
        """
        Create a spacing record with fresh identifiers and default spacing.

        Query:
            INSERT INTO spacing_table (user_id, project_id, component_id,
                                       margin_top_value, margin_top_unit, ...)
            VALUES (...)

        Returns:
            The new component_id.
        """
        identifiers = {
            "user_id": str(uuid.uuid4()),
            "project_id": str(uuid.uuid4()),
            "component_id": str(uuid.uuid4()),
        }
        try:
            await db.execute(
                insert(SpacingRecord).values(**identifiers, **default_columns())
            )
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error creating spacing record: %s", str(e))
            raise QueryFailureError(
                operation="post_spacing",
                context={"error_type": type(e).__name__},
            ) from e

        logger.info("Created spacing record for component %s", identifiers["component_id"])
        return identifiers["component_id"]

    async def list_examples(self, db: AsyncSession) -> List[Dict[str, Any]]:
        """Raw rows of example_table, as column → value dicts."""
        try:
            result = await db.execute(text("SELECT * FROM example_table"))
        except SQLAlchemyError as e:
            logger.error("Database error listing examples: %s", str(e))
            raise QueryFailureError(
                operation="list_examples",
                context={"error_type": type(e).__name__},
            ) from e
        return [dict(row._mapping) for row in result]


# ── Singleton Instance ────────────────────────────────────────────────────
# Stateless; the session is passed into every call
spacing_service = SpacingService()
