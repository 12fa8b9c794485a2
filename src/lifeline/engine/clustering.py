"""Media clustering engine: turn a raw photo roll into timeline moments.

Pipeline
--------
1. Sort assets by capture time.
2. Detect bursts: runs where every consecutive gap is at most
   ``burst_threshold_seconds``. A run closes when the next gap is too large
   (kept as a burst if it reached ``min_burst_size``) or when it reaches
   ``max_burst_size``.
3. Greedily grow proximity clusters over the assets left outside bursts. A new
   asset joins the open cluster while the time since the cluster's first asset
   stays within ``temporal_threshold_minutes`` and its distance to every
   geotagged member stays within ``spatial_threshold_meters``. Assets without
   GPS never break the spatial constraint.
4. Merge bursts and proximity clusters by start time and convert each into a
   :class:`TimelineEvent` ("moment").

Every input asset ends up in exactly one cluster.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from uuid import uuid4

from lifeline.core.contracts.clustering import ClusteringConfiguration, MediaCluster
from lifeline.core.contracts.media import MediaAsset
from lifeline.core.contracts.timeline import TimelineEvent
from lifeline.core.geo import centroid, haversine_meters
from lifeline.engine.key_asset import rekey

logger = logging.getLogger(__name__)

#: Clusters larger than this (and not bursts) are typed as a "collection".
COLLECTION_MIN_ASSETS = 10


def _new_id() -> str:
    return str(uuid4())


def build_cluster(assets: Sequence[MediaAsset], *, is_burst: bool = False) -> MediaCluster:
    """Wrap a non-empty run of assets into a :class:`MediaCluster`."""
    if not assets:
        raise ValueError("A cluster needs at least one asset")
    ordered = rekey(assets)
    return MediaCluster(
        assets=ordered,
        start=ordered[0].captured_at,
        end=ordered[-1].captured_at,
        center=centroid(a.location for a in ordered if a.location is not None),
        key_asset=next(a for a in ordered if a.is_key_asset),
        is_burst=is_burst,
    )


def detect_bursts(
    assets: Sequence[MediaAsset], config: ClusteringConfiguration
) -> tuple[list[list[MediaAsset]], list[MediaAsset]]:
    """Split time-sorted ``assets`` into burst runs and leftovers.

    Returns
    -------
    tuple[list[list[MediaAsset]], list[MediaAsset]]
        ``(bursts, remaining)``; ``remaining`` keeps capture order.
    """
    bursts: list[list[MediaAsset]] = []
    remaining: list[MediaAsset] = []
    run: list[MediaAsset] = []

    def close() -> None:
        if len(run) >= config.min_burst_size:
            bursts.append(list(run))
        else:
            remaining.extend(run)
        run.clear()

    for asset in assets:
        if run:
            gap = asset.captured_at - run[-1].captured_at
            if gap > config.burst_threshold or len(run) >= config.max_burst_size:
                close()
        run.append(asset)
    if run:
        close()

    return bursts, remaining


def _fits(cluster: list[MediaAsset], asset: MediaAsset, config: ClusteringConfiguration) -> bool:
    if asset.captured_at - cluster[0].captured_at > config.temporal_threshold:
        return False
    if asset.location is None:
        return True
    return all(
        haversine_meters(asset.location, member.location) <= config.spatial_threshold_meters
        for member in cluster
        if member.location is not None
    )


def group_by_proximity(
    assets: Sequence[MediaAsset], config: ClusteringConfiguration
) -> list[list[MediaAsset]]:
    """Greedy temporal/spatial grouping over time-sorted ``assets``."""
    groups: list[list[MediaAsset]] = []
    current: list[MediaAsset] = []
    for asset in assets:
        if current and not _fits(current, asset, config):
            groups.append(current)
            current = []
        current.append(asset)
    if current:
        groups.append(current)
    return groups


def _event_type(cluster: MediaCluster) -> str:
    if cluster.is_burst:
        return "burst"
    if cluster.asset_count > COLLECTION_MIN_ASSETS:
        return "collection"
    return "photo"


def _title(cluster: MediaCluster) -> str | None:
    if cluster.is_burst:
        return f"Photo Burst ({cluster.asset_count} photos)"
    if cluster.asset_count > 1:
        return f"{cluster.asset_count} Photos"
    return None


def _description(cluster: MediaCluster) -> str | None:
    parts: list[str] = []
    minutes = int(cluster.duration.total_seconds() // 60)
    if minutes >= 1:
        parts.append(f"Duration: {minutes} minutes")
    names = {a.location.name for a in cluster.assets if a.location is not None and a.location.name}
    if len(names) == 1:
        parts.append(f"Location: {names.pop()}")
    return " • ".join(parts) or None


class MediaClusteringEngine:
    """Group media into moments.

    Parameters
    ----------
    config:
        Default thresholds; individual calls may override them.
    """

    def __init__(self, config: ClusteringConfiguration | None = None) -> None:
        self.config = config or ClusteringConfiguration()

    def cluster(
        self,
        assets: Sequence[MediaAsset],
        config: ClusteringConfiguration | None = None,
    ) -> list[MediaCluster]:
        """Partition ``assets`` into bursts and proximity clusters.

        Returns
        -------
        list[MediaCluster]
            Clusters ordered by start time. Empty input yields an empty list.
        """
        cfg = config or self.config
        if not assets:
            return []

        ordered = sorted(assets, key=lambda a: (a.captured_at, a.id))
        bursts, remaining = detect_bursts(ordered, cfg)
        clusters = [build_cluster(run, is_burst=True) for run in bursts]
        clusters.extend(build_cluster(group) for group in group_by_proximity(remaining, cfg))
        clusters.sort(key=lambda c: (c.start, c.assets[0].id))

        logger.debug(
            "Clustered %d assets into %d clusters (%d bursts)",
            len(ordered),
            len(clusters),
            len(bursts),
        )
        return clusters

    def to_events(
        self,
        clusters: Sequence[MediaCluster],
        owner_id: str,
        context_id: str | None = None,
        id_factory: Callable[[], str] | None = None,
    ) -> list[TimelineEvent]:
        """Convert each cluster into a moment owned by ``owner_id``."""
        make_id = id_factory or _new_id
        events: list[TimelineEvent] = []
        for cluster in clusters:
            event_id = make_id()
            events.append(
                TimelineEvent(
                    id=event_id,
                    owner_id=owner_id,
                    context_id=context_id,
                    timestamp=cluster.start,
                    event_type=_event_type(cluster),
                    title=_title(cluster),
                    description=_description(cluster),
                    assets=rekey(cluster.assets, event_id),
                    location=cluster.center,
                )
            )
        return events

    def build_moments(
        self,
        assets: Sequence[MediaAsset],
        owner_id: str,
        context_id: str | None = None,
        config: ClusteringConfiguration | None = None,
        id_factory: Callable[[], str] | None = None,
    ) -> list[TimelineEvent]:
        """Cluster ``assets`` and convert the clusters into events in one call."""
        return self.to_events(
            self.cluster(assets, config),
            owner_id=owner_id,
            context_id=context_id,
            id_factory=id_factory,
        )


__all__ = [
    "COLLECTION_MIN_ASSETS",
    "MediaClusteringEngine",
    "build_cluster",
    "detect_bursts",
    "group_by_proximity",
]
