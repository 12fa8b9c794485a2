"""Collision-free card placement along a time axis.

Nodes are positioned by elapsed days along the primary axis. In maximal mode
cards alternate sides of the axis (left/right for a vertical axis, top/bottom
for a horizontal one) and each new card is pushed forward along the primary
axis until it clears every card already placed on its side. The scheme is
greedy and incremental, so it can run on every zoom or viewport change.

In minimal mode no cards are produced; a label is hidden when it would sit
closer than ``min_label_spacing`` to a label that is already visible.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import date, datetime

from lifeline.core.calendar import elapsed_days
from lifeline.core.contracts.geometry import Point, Rect
from lifeline.core.contracts.layout import (
    DisplayMode,
    LayoutConstants,
    LayoutNode,
    Orientation,
    Viewport,
)
from lifeline.core.contracts.nodes import ClusterNode, EventNode, RenderNode
from lifeline.core.result import never

logger = logging.getLogger(__name__)


def card_height(node: RenderNode, constants: LayoutConstants) -> float:
    """Estimated card extent for a node: clusters compact, media events tall."""
    if isinstance(node, ClusterNode):
        return constants.cluster_card_height
    if isinstance(node, EventNode):
        return constants.media_card_height if node.has_media else constants.card_height
    never(f"Unsupported render node: {node!r}")


def _propose_card(
    primary: float,
    side: int,
    height: float,
    orientation: Orientation,
    viewport: Viewport,
    constants: LayoutConstants,
) -> Rect:
    if orientation is Orientation.VERTICAL:
        axis = viewport.width / 2
        x = axis - constants.gutter - constants.card_width if side == 0 else axis + constants.gutter
        return Rect(x=x, y=primary - height / 2, w=constants.card_width, h=height)
    axis = viewport.height / 2
    y = axis - constants.gutter - height if side == 0 else axis + constants.gutter
    return Rect(x=primary - constants.card_width / 2, y=y, w=constants.card_width, h=height)


def _resolve(card: Rect, placed: Sequence[Rect], orientation: Orientation, spacing: float) -> Rect:
    """Shift ``card`` forward along the primary axis until it overlaps nothing."""
    while True:
        blocker = next((other for other in placed if card.overlaps(other)), None)
        if blocker is None:
            return card
        if orientation is Orientation.VERTICAL:
            card = card.shifted(dy=blocker.bottom + spacing - card.top)
        else:
            card = card.shifted(dx=blocker.right + spacing - card.left)


def layout_nodes(
    nodes: Sequence[RenderNode],
    mode: DisplayMode,
    orientation: Orientation,
    viewport: Viewport,
    pixels_per_day: float,
    min_date: date | datetime,
    constants: LayoutConstants | None = None,
) -> list[LayoutNode]:
    """Place ``nodes`` along the time axis.

    Parameters
    ----------
    nodes:
        Render nodes, normally sorted by start time already.
    mode:
        ``maximal`` produces cards; ``minimal`` only resolves label spacing.
    orientation:
        Direction of the time axis.
    viewport:
        Drawing area; the axis runs through its centre line.
    pixels_per_day:
        Scale of the primary axis.
    min_date:
        Origin of the primary axis.

    Returns
    -------
    list[LayoutNode]
        One entry per node, ordered by primary offset.
    """
    consts = constants or LayoutConstants()
    offsets = [
        (elapsed_days(node.start, min_date) * pixels_per_day, node) for node in nodes
    ]
    offsets.sort(key=lambda pair: pair[0])

    out: list[LayoutNode] = []
    sides: tuple[list[Rect], list[Rect]] = ([], [])
    visible_labels: list[float] = []

    for index, (primary, node) in enumerate(offsets):
        if orientation is Orientation.VERTICAL:
            marker = Point(x=viewport.width / 2, y=primary)
        else:
            marker = Point(x=primary, y=viewport.height / 2)

        if mode is DisplayMode.MAXIMAL:
            side = index % 2
            proposed = _propose_card(
                primary, side, card_height(node, consts), orientation, viewport, consts
            )
            card = _resolve(proposed, sides[side], orientation, consts.min_card_spacing)
            sides[side].append(card)
            out.append(LayoutNode(node=node, card=card, marker=marker, primary_px=primary))
            continue

        visible = all(abs(primary - other) >= consts.min_label_spacing for other in visible_labels)
        if visible:
            visible_labels.append(primary)
        out.append(
            LayoutNode(
                node=node, card=None, marker=marker, label_visible=visible, primary_px=primary
            )
        )

    logger.debug("Laid out %d nodes in %s/%s mode", len(out), mode.value, orientation.value)
    return out


__all__ = ["card_height", "layout_nodes"]
