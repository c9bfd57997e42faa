"""Admin API endpoints for managing the showtime catalog."""

import logging
import secrets

from fastapi import APIRouter, Depends, File, Header, HTTPException, Query, UploadFile
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from vestri.config import settings
from vestri.database import get_db
from vestri.exceptions import ImportValidationError
from vestri.schemas import ShowtimeCreate, ShowtimeResponse, ShowtimeUpdate
from vestri.services.catalog import ShowtimeCatalog
from vestri.services.importer import parse_workbook
from vestri.services.listing import to_response
from vestri.services.temporal import local_now

logger = logging.getLogger(__name__)


async def require_admin(x_admin_password: str | None = Header(None)) -> None:
    """Reject requests that don't carry the shared admin password."""
    if x_admin_password is None or not secrets.compare_digest(
        x_admin_password.encode(), settings.admin_password.encode()
    ):
        raise HTTPException(status_code=401, detail="Invalid admin password")


router = APIRouter(dependencies=[Depends(require_admin)])


class DeleteResponse(BaseModel):
    deleted: int


class ImportResponse(BaseModel):
    """Result of a spreadsheet import (or its preview when dry_run is set)."""

    dry_run: bool
    count: int
    showtimes: list[ShowtimeCreate]


@router.post("/admin/showtimes", response_model=ShowtimeResponse, status_code=201)
async def create_showtime(
    payload: ShowtimeCreate,
    db: AsyncSession = Depends(get_db),
) -> ShowtimeResponse:
    showtime = await ShowtimeCatalog(db).create(payload)
    return to_response(showtime, local_now())


@router.post("/admin/showtimes/import", response_model=ImportResponse)
async def import_showtimes(
    file: UploadFile = File(..., description="Programme spreadsheet (.xlsx)"),
    dry_run: bool = Query(False, description="Validate and preview without inserting"),
    db: AsyncSession = Depends(get_db),
) -> ImportResponse:
    """
    Bulk-import showtimes from a spreadsheet.

    Every row is validated first; a single invalid row rejects the whole
    file with a 422 listing each problem.
    """
    content = await file.read()
    try:
        payloads = parse_workbook(content)
    except ImportValidationError as e:
        raise HTTPException(status_code=422, detail=e.errors) from e

    if not dry_run:
        await ShowtimeCatalog(db).bulk_create(payloads)
        logger.info(f"Imported {len(payloads)} showtimes from {file.filename!r}")

    return ImportResponse(dry_run=dry_run, count=len(payloads), showtimes=payloads)


@router.patch("/admin/showtimes/{showtime_id}", response_model=ShowtimeResponse)
async def update_showtime(
    showtime_id: int,
    changes: ShowtimeUpdate,
    db: AsyncSession = Depends(get_db),
) -> ShowtimeResponse:
    """Partial update, e.g. toggling sold out or editing the annotation."""
    try:
        showtime = await ShowtimeCatalog(db).update(showtime_id, changes)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e

    if showtime is None:
        raise HTTPException(status_code=404, detail="Showtime not found")
    return to_response(showtime, local_now())


@router.delete("/admin/showtimes/past", response_model=DeleteResponse)
async def delete_past_showtimes(db: AsyncSession = Depends(get_db)) -> DeleteResponse:
    """Delete showtimes on earlier days and today's screenings that have ended."""
    deleted = await ShowtimeCatalog(db).delete_past(local_now())
    return DeleteResponse(deleted=deleted)


@router.delete("/admin/showtimes/{showtime_id}", status_code=204)
async def delete_showtime(
    showtime_id: int,
    db: AsyncSession = Depends(get_db),
) -> None:
    if not await ShowtimeCatalog(db).delete(showtime_id):
        raise HTTPException(status_code=404, detail="Showtime not found")


@router.delete("/admin/showtimes", response_model=DeleteResponse)
async def delete_all_showtimes(db: AsyncSession = Depends(get_db)) -> DeleteResponse:
    deleted = await ShowtimeCatalog(db).delete_all()
    logger.warning(f"Deleted the entire catalog ({deleted} showtimes)")
    return DeleteResponse(deleted=deleted)
