"""
SpacingCard — Spacing Route Handlers
======================================

What:  GET/PATCH /spacing/{component_id} and POST /spacing.
How:   Validates the path parameter, delegates to SpacingService, returns JSON.
Who:   Called by the spacing form client.

Every failure (missing parameter, unknown component, database error,
invalid body) is turned into HTTP 500 `{"error": ...}` by the global
exception handlers in main.py.
"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from spacingcard.database import get_db_session
from spacingcard.schemas.spacing import (
    CreateResponse,
    ErrorResponse,
    PatchResponse,
    SpacingPatch,
    SpacingResponse,
)
from spacingcard.services.spacing_service import spacing_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Spacing"])

_ERRORS = {500: {"description": "Any failure", "model": ErrorResponse}}


@router.get(
    "/spacing/{component_id}",
    response_model=SpacingResponse,
    responses=_ERRORS,
    summary="Get a component's spacing record",
)
async def get_spacing(
    component_id: str,
    db: AsyncSession = Depends(get_db_session),
) -> SpacingResponse:
    """
    Retrieve the spacing record of one component.

    Called when the form mounts with a stored component_id, and right after
    a new project is created.
    """
    return await spacing_service.get_spacing(db=db, component_id=component_id)


@router.patch(
    "/spacing/{component_id}",
    response_model=PatchResponse,
    responses=_ERRORS,
    summary="Update any subset of a component's spacing fields",
)
async def patch_spacing(
    component_id: str,
    patch: SpacingPatch,
    db: AsyncSession = Depends(get_db_session),
) -> PatchResponse:
    """
    Patch spacing values of one component.

    Body: any of the eight fields, each {"value": ..., "unit": ...}.
    Fields not present in the body are left unchanged.
    """
    message = await spacing_service.patch_spacing(
        db=db,
        component_id=component_id,
        patch=patch,
    )
    return PatchResponse(message=message)


@router.post(
    "/spacing",
    response_model=CreateResponse,
    responses=_ERRORS,
    summary="Create a spacing record with default values",
)
async def post_spacing(db: AsyncSession = Depends(get_db_session)) -> CreateResponse:
    """Create a record with fresh ids and every side set to auto/px."""
    component_id = await spacing_service.post_spacing(db=db)
    return CreateResponse(component_id=component_id)
