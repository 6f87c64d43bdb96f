"""Static UI bundle and root-level search.

Registered last so every GET that no API route claims ends up here. Paths
outside /api are served from STATIC_DIR when they name a file; otherwise a
`q` parameter runs a GIF search and anything else gets index.html so the
single page app can route client-side.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import FileResponse

from src.api.routes.gifs import search_gifs
from src.clients.giphy import GiphyClient
from src.core.deps import get_gif_client, get_settings_dep
from src.core.settings import AppSettings

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Frontend"])


def resolve_static_file(static_root: Path, request_path: str) -> Optional[Path]:
    """Return the regular file under `static_root` named by `request_path`, or None."""
    candidate = (static_root / request_path.lstrip("/")).resolve()
    if not candidate.is_relative_to(static_root):
        return None
    return candidate if candidate.is_file() else None


def _file_response(path: Path) -> FileResponse:
    # Browsers refuse stylesheets that are not served as text/css
    media_type = "text/css" if path.suffix == ".css" else None
    return FileResponse(path, media_type=media_type)


_API_WRITE_METHODS = ["POST", "PUT", "DELETE", "PATCH"]


# PUBLIC_INTERFACE
@router.api_route("/api", methods=_API_WRITE_METHODS, include_in_schema=False)
@router.api_route("/api/{rest:path}", methods=_API_WRITE_METHODS, include_in_schema=False)
async def unknown_api_path(rest: str = ""):
    """Writes to /api paths that no API route claims are 404, not 405."""
    raise HTTPException(status_code=404, detail="Not Found")


# PUBLIC_INTERFACE
@router.get("/{full_path:path}", include_in_schema=False, response_model=None)
async def frontend(
    full_path: str,
    q: Optional[str] = Query(None),
    p: Optional[str] = Query(None),
    settings: AppSettings = Depends(get_settings_dep),
    client: GiphyClient = Depends(get_gif_client),
):
    if full_path == "api" or full_path.startswith("api/"):
        raise HTTPException(status_code=404, detail="Not Found")

    static_root = Path(settings.STATIC_DIR).resolve()
    target = resolve_static_file(static_root, full_path)
    if target is not None:
        return _file_response(target)

    if q:
        return await search_gifs(client, q, p)

    index = static_root / "index.html"
    if not index.is_file():
        logger.error("Cannot serve %s: file missing", index)
        raise HTTPException(status_code=500, detail="Internal Server Error")
    return _file_response(index)
