"""
API Routes for derived timeline views.

Endpoints
---------
- `POST /views/nodes`: Zoom-tier render nodes.
- `POST /views/bubbles`: Overview bubbles.
- `POST /views/layout`: Full timeline view (filter, nodes, layout, bubbles).
- `POST /views/flow`: Multi-stream flow paths.
- `POST /views/swimlanes`: Per-participant swimlanes.

All views are recomputed from the request body on every call.
"""

from __future__ import annotations

from fastapi import APIRouter

from lifeline.api.schemas import (
    BubblesRequest,
    FlowRequest,
    LayoutRequest,
    NodesRequest,
    SwimlaneRequest,
)
from lifeline.core.contracts.bubble import BubbleData
from lifeline.core.contracts.flow import FlowLayout
from lifeline.core.contracts.nodes import RenderNode
from lifeline.core.contracts.swimlane import SwimlaneItem
from lifeline.engine.aggregation import build_nodes
from lifeline.engine.bubbles import aggregate_bubbles
from lifeline.engine.flow import layout_flow
from lifeline.engine.swimlanes import layout_swimlanes
from lifeline.pipelines.timeline_view import TimelineView, run_view

router = APIRouter(prefix="/views", tags=["Views"])


@router.post("/nodes", response_model=list[RenderNode])
async def nodes_view(request: NodesRequest) -> list[RenderNode]:
    return build_nodes(
        request.events,
        request.tier,
        request.visible_start,
        request.visible_end,
        expanded_ids=request.expanded_ids,
        thresholds=request.thresholds,
    )


@router.post("/bubbles", response_model=list[BubbleData])
async def bubbles_view(request: BubblesRequest) -> list[BubbleData]:
    return aggregate_bubbles(request.events, request.tier)


@router.post("/layout", response_model=None)
async def layout_view(request: LayoutRequest) -> TimelineView:
    """Run the full timeline view pipeline and return its JSON-safe payload."""
    return run_view(
        request.events,
        tier=request.tier,
        visible_start=request.visible_start,
        visible_end=request.visible_end,
        viewport=request.viewport,
        pixels_per_day=request.pixels_per_day,
        mode=request.mode,
        orientation=request.orientation,
        expanded_ids=request.expanded_ids,
        context_id=request.context_id,
        event_type=request.event_type,
        thresholds=request.thresholds,
        constants=request.constants,
    )


@router.post("/flow", response_model=FlowLayout)
async def flow_view(request: FlowRequest) -> FlowLayout:
    return layout_flow(
        request.events,
        request.participant_ids,
        request.start_date,
        request.viewport_width,
        config=request.config,
        display_names=request.display_names,
    )


@router.post("/swimlanes", response_model=list[SwimlaneItem])
async def swimlanes_view(request: SwimlaneRequest) -> list[SwimlaneItem]:
    return layout_swimlanes(
        request.events,
        request.lane_owner_ids,
        request.start_date,
        request.pixels_per_day,
        config=request.config,
    )


__all__ = ["router"]
