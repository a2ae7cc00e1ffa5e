"""Filter endpoints operating on raw RGBA8 buffers.

Clients POST the pixel buffer as the request body and get the filtered
buffer back in the same layout.
"""

import logging

import numpy as np
from fastapi import APIRouter, HTTPException, Request, Response
from fastapi.concurrency import run_in_threadpool
from pydantic import ValidationError

from expblur.config import settings
from expblur.exceptions import ExpBlurError
from expblur.filters import filter_registry, load_builtin_filters

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/filters", tags=["filters"])

load_builtin_filters()

# Params filled from settings when missing
_DEFAULT_PARAMS = {
    "radius": lambda: settings.DEFAULT_RADIUS,
    "aprec": lambda: settings.DEFAULT_APREC,
    "zprec": lambda: settings.DEFAULT_ZPREC,
}

# Params where zero also means "use the configured default"
_ZERO_IS_DEFAULT = frozenset({"aprec", "zprec"})


@router.get("")
async def list_filters() -> dict:
    """List available filters with their parameter schemas."""
    return {
        "filters": [
            {
                "id": filter_id,
                "name": cls.name,
                "description": cls.description,
                "category": cls.category,
                "params": cls.get_params_schema(),
            }
            for filter_id, cls in sorted(filter_registry.items())
        ]
    }


@router.post("/{filter_id}")
async def apply_filter(filter_id: str, request: Request) -> Response:
    """Apply a filter to a raw RGBA8 buffer.

    Request body should be the raw pixel data, row-major, 4 bytes per pixel.
    Headers:
        X-Width: Width in pixels
        X-Height: Height in pixels
    Query parameters are passed to the filter as its params.
    """
    filter_cls = filter_registry.get(filter_id)
    if filter_cls is None:
        raise HTTPException(status_code=404, detail=f"Unknown filter: {filter_id}")

    body = await request.body()
    if not body:
        raise HTTPException(status_code=400, detail="Empty body")
    if len(body) > settings.MAX_IMAGE_SIZE:
        raise HTTPException(
            status_code=413,
            detail=f"Image of {len(body)} bytes exceeds limit of {settings.MAX_IMAGE_SIZE}",
        )

    width = _parse_int_header(request, "x-width")
    height = _parse_int_header(request, "x-height")
    if width <= 0 or height <= 0:
        raise HTTPException(status_code=400, detail="X-Width and X-Height must be positive")
    if len(body) != width * height * 4:
        logger.warning(f"Rejected {filter_id}: {len(body)} bytes for {width}x{height}")
        raise HTTPException(
            status_code=400,
            detail=f"Body of {len(body)} bytes does not match {width}x{height} RGBA",
        )

    params = _resolve_params(dict(request.query_params))
    try:
        flt = filter_cls(**params)
        image = np.frombuffer(body, dtype=np.uint8).reshape(height, width, 4)
        result = await run_in_threadpool(flt.apply, image)
    except (ValidationError, ExpBlurError) as e:
        logger.warning(f"Rejected {filter_id} with params {params}: {e}")
        raise HTTPException(status_code=400, detail=str(e))

    return Response(
        content=result.tobytes(),
        media_type="application/octet-stream",
        headers={"X-Width": str(width), "X-Height": str(height)},
    )


def _resolve_params(params: dict[str, str]) -> dict:
    """Fill in configured defaults for missing blur params.

    A zero precision counts as missing. A zero radius is kept and leaves
    the image unchanged.
    """
    resolved = dict(params)
    for key, default in _DEFAULT_PARAMS.items():
        value = resolved.get(key)
        if value is None or (key in _ZERO_IS_DEFAULT and _is_zero(value)):
            resolved[key] = default()
    return resolved


def _is_zero(value: str) -> bool:
    """Check whether a query value parses to zero."""
    try:
        return float(value) == 0
    except ValueError:
        return False


def _parse_int_header(request: Request, header: str) -> int:
    """Parse an integer header value."""
    value = request.headers.get(header)
    if value:
        try:
            return int(value)
        except ValueError:
            pass
    return 0
