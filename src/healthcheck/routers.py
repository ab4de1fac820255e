from fastapi import APIRouter

from src.core.utils.datetime_utils import get_utc_now
from src.main.config import config

router = APIRouter()


@router.get("/health/", response_model=dict)
@router.head("/health/", include_in_schema=False)
async def check_health() -> dict[str, str]:
    """Health check endpoint to verify the service is running."""
    return {"status": "ok", "version": config.app.VERSION}


@router.get("/time/", response_model=dict)
def get_utc_time() -> dict[str, str]:
    """Server UTC time; token `iat`/`exp` values are computed against this clock."""
    now = get_utc_now()
    return {"time": now.replace(microsecond=0).isoformat()}
