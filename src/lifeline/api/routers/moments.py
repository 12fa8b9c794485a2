"""
API Routes for media clustering.

Endpoints
---------
- `POST /moments`: Group raw media into moments (timeline events).
"""

from __future__ import annotations

from fastapi import APIRouter

from lifeline.api.schemas import MomentsRequest, MomentsResponse
from lifeline.core.contracts.clustering import ClusteringConfiguration
from lifeline.core.settings import load_settings
from lifeline.engine.clustering import MediaClusteringEngine

router = APIRouter(tags=["Moments"])


@router.post("/moments", response_model=MomentsResponse, summary="Cluster media into moments")
async def build_moments(request: MomentsRequest) -> MomentsResponse:
    """
    Cluster the submitted assets and return one event per moment.

    Threshold precedence: explicit `config`, then the `context` preset, then
    the server's default context.
    """
    config = request.config or ClusteringConfiguration.for_context(
        request.context or load_settings().default_context
    )
    engine = MediaClusteringEngine(config)
    clusters = engine.cluster(request.assets)
    events = engine.to_events(clusters, owner_id=request.owner_id, context_id=request.context_id)
    return MomentsResponse(
        events=events,
        cluster_count=len(clusters),
        burst_count=sum(1 for c in clusters if c.is_burst),
    )


__all__ = ["router"]
