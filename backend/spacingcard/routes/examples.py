"""
SpacingCard — Examples Route
==============================

What:  GET /examples returns every row of example_table unchanged.
Why:   Diagnostic endpoint for checking database reachability end-to-end.
"""

from typing import Any, Dict, List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from spacingcard.database import get_db_session
from spacingcard.services.spacing_service import spacing_service

router = APIRouter(tags=["Diagnostics"])


@router.get("/examples", summary="Raw rows of example_table")
async def list_examples(
    db: AsyncSession = Depends(get_db_session),
) -> List[Dict[str, Any]]:
    return await spacing_service.list_examples(db=db)
