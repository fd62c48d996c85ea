"""API dependencies."""

from typing import Optional

from fastapi import Header, HTTPException

from isofit.core.config import get_settings


async def get_api_key(x_api_key: Optional[str] = Header(default=None, alias="X-API-Key")) -> str:
    """
    Check the static API key when one is configured.

    With ``API_KEY`` unset every request passes; otherwise the header must be
    present (401) and match (403).
    """
    expected = get_settings().API_KEY
    if not expected:
        return x_api_key or ""
    if not x_api_key:
        raise HTTPException(status_code=401, detail="Missing API Key")
    if x_api_key != expected:
        raise HTTPException(status_code=403, detail="Invalid API Key")
    return x_api_key
