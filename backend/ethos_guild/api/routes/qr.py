"""QR Redirect — resolves a printed slug to its artifact, event or venue page."""

from fastapi import APIRouter, Depends, status
from fastapi.responses import RedirectResponse
from sqlalchemy.ext.asyncio import AsyncSession

from ethos_guild.infrastructure.database import get_db
from ethos_guild.services.qr_directory import QRDirectory

router = APIRouter(prefix="/api/v1/qr", tags=["qr"])


@router.get("/{slug}")
async def resolve_slug(slug: str, db: AsyncSession = Depends(get_db)):
    """302 to the entity page; every hit is recorded as a scan."""
    resolution = await QRDirectory(db).resolve(slug)
    return RedirectResponse(resolution.url, status_code=status.HTTP_302_FOUND)
