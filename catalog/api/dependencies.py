"""
FastAPI dependencies for the catalog API: API key guard and container access.
"""

import hmac
import logging
import os
from typing import List, Optional

from dotenv import load_dotenv
from fastapi import Header, HTTPException, Request, status

from catalog.container import Container, get_container

load_dotenv()

logger = logging.getLogger(__name__)

# Reachable without a key even when API_KEYS is set.
PUBLIC_PATHS = frozenset({
    "/",
    "/health",
    "/docs",
    "/docs/oauth2-redirect",
    "/openapi.json",
    "/redoc",
})


def configured_api_keys() -> List[str]:
    """Comma-separated API_KEYS, read on every request so tests can patch it."""
    raw = os.getenv("API_KEYS", "")
    return [k.strip() for k in raw.split(",") if k.strip()]


def _key_matches(candidate: str, keys: List[str]) -> bool:
    return bool(candidate) and any(hmac.compare_digest(candidate, k) for k in keys)


async def api_key_protection(
    request: Request,
    x_api_key: Optional[str] = Header(default=None, alias="X-API-KEY"),
) -> None:
    keys = configured_api_keys()
    if not keys or request.url.path in PUBLIC_PATHS:
        return

    if not _key_matches((x_api_key or "").strip(), keys):
        logger.info("API key rejected: path=%s header_present=%s", request.url.path, bool(x_api_key))
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or missing API Key",
        )


def container_dependency() -> Container:
    return get_container()
