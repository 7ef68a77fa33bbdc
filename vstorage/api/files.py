"""
Files API endpoint implementation.

This module exposes the virtual storage operations under /api.
"""

import logging
from typing import BinaryIO, Iterator, Optional

from fastapi import APIRouter, HTTPException, Query, Request
from fastapi.responses import StreamingResponse

from ..exceptions import AdapterError, StorageFileNotFoundError
from ..models import ErrorResponse, ExistsResponse, SuccessResponse
from ..virtual_storage import VirtualStorage

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Files"])

CHUNK_SIZE = 64 * 1024


def _get_storage(request: Request) -> VirtualStorage:
    storage: Optional[VirtualStorage] = getattr(request.app.state, "storage", None)
    if storage is None:
        raise HTTPException(status_code=503, detail="Storage is not initialized")
    return storage


def _require_path(path: str) -> str:
    """Reject empty storage paths before they reach the adapters."""
    if not path.strip("/"):
        raise HTTPException(status_code=400, detail="A non-empty file path is required")
    return path


def _iter_stream(stream: BinaryIO) -> Iterator[bytes]:
    try:
        while True:
            chunk = stream.read(CHUNK_SIZE)
            if not chunk:
                break
            yield chunk
    finally:
        stream.close()


@router.get(
    "/exists/{path:path}",
    response_model=ExistsResponse,
    summary="Check whether a file exists in any adapter"
)
async def file_exists(request: Request, path: str):
    _require_path(path)
    storage = _get_storage(request)
    return ExistsResponse(path=path, exists=storage.exists(path))


@router.get(
    "/files/{path:path}",
    responses={
        400: {"model": ErrorResponse, "description": "Empty file path"},
        404: {"model": ErrorResponse, "description": "File not found in any adapter"},
        502: {"model": ErrorResponse, "description": "Every adapter failed"}
    },
    summary="Download a file",
    description="Stream the file from the first adapter that holds it"
)
async def read_file(request: Request, path: str):
    """
    Stream a file from the virtual storage.

    Raises:
        HTTPException: 404 when no adapter has the file, 502 when adapters failed
    """
    _require_path(path)
    storage = _get_storage(request)
    try:
        stream = storage.get_stream(path)
    except StorageFileNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except AdapterError as e:
        logger.error(f"Backend failure reading {path}: {e.cause}")
        raise HTTPException(status_code=502, detail=str(e))

    return StreamingResponse(_iter_stream(stream), media_type="application/octet-stream")


@router.put(
    "/files/{path:path}",
    response_model=SuccessResponse,
    responses={502: {"model": ErrorResponse, "description": "No adapter stored the file"}},
    summary="Upload a file",
    description="Store the request body in every adapter"
)
async def write_file(request: Request, path: str):
    _require_path(path)
    storage = _get_storage(request)
    body = await request.body()
    if not storage.put(path, body):
        raise HTTPException(status_code=502, detail=f"No adapter stored {path}")

    logger.info(f"Stored {len(body)} bytes at {path}")
    return SuccessResponse(message="File stored", data={"path": path, "size": len(body)})


@router.post(
    "/rename/{path:path}",
    response_model=SuccessResponse,
    responses={409: {"model": ErrorResponse, "description": "No adapter renamed the file"}},
    summary="Rename a file"
)
async def rename_file(
    request: Request,
    path: str,
    new_path: str = Query(..., min_length=1, description="New path of the file")
):
    _require_path(path)
    _require_path(new_path)
    storage = _get_storage(request)
    if not storage.rename(path, new_path):
        raise HTTPException(status_code=409, detail=f"Could not rename {path} to {new_path}")
    return SuccessResponse(message="File renamed", data={"path": path, "new_path": new_path})


@router.delete(
    "/files/{path:path}",
    response_model=SuccessResponse,
    responses={404: {"model": ErrorResponse, "description": "No adapter deleted the file"}},
    summary="Delete a file"
)
async def delete_file(request: Request, path: str):
    _require_path(path)
    storage = _get_storage(request)
    if not storage.delete(path):
        raise HTTPException(status_code=404, detail=f"Could not delete {path}")
    return SuccessResponse(message="File deleted", data={"path": path})
