"""
API Routes for manual event editing.

Endpoints
---------
- `POST /events/split`: Split one event into several by asset groups.
- `POST /events/merge`: Merge events of one owner and context.
- `POST /events/move`: Move assets between two events.
- `POST /events/key-asset`: Choose the key asset of an event.

Rejected edits return HTTP 400 with ``{"error": <code>, "detail": <reason>}``.
Nothing is persisted; the caller stores the returned events.
"""

from __future__ import annotations

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from lifeline.api.schemas import (
    EditResponse,
    KeyAssetRequest,
    MergeRequest,
    MoveRequest,
    SplitRequest,
)
from lifeline.core.contracts.editing import EditFailure
from lifeline.core.result import Err, Ok, never
from lifeline.engine.editor import EditResult, EventSetEditor

router = APIRouter(prefix="/events", tags=["Editing"])


def _respond(result: EditResult) -> EditResponse | JSONResponse:
    if isinstance(result, Ok):
        return EditResponse(events=result.value)
    if isinstance(result, Err):
        failure: EditFailure = result.error
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": failure.code.value, "detail": failure.reason},
        )
    never(f"Unexpected edit result: {result!r}")


@router.post("/split", response_model=EditResponse)
async def split_event(request: SplitRequest) -> EditResponse | JSONResponse:
    return _respond(EventSetEditor().split(request.event, request.groups))


@router.post("/merge", response_model=EditResponse)
async def merge_events(request: MergeRequest) -> EditResponse | JSONResponse:
    return _respond(EventSetEditor().merge(request.events, request.primary_id))


@router.post("/move", response_model=EditResponse)
async def move_assets(request: MoveRequest) -> EditResponse | JSONResponse:
    return _respond(EventSetEditor().move(request.asset_ids, request.source, request.target))


@router.post("/key-asset", response_model=EditResponse)
async def set_key_asset(request: KeyAssetRequest) -> EditResponse | JSONResponse:
    return _respond(EventSetEditor().set_key(request.event, request.asset_id))


__all__ = ["router"]
