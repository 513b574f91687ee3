# src/Swatch_engine/wheel/overlap.py
from __future__ import annotations

import math
from typing import List, Sequence, Tuple

from Swatch_engine.color.schema import HarmonyTarget, Point
from Swatch_engine.wheel._constants import _FAN_RADIUS_PX, _FAN_THRESHOLD_PX
from Swatch_engine.wheel.geometry import ViewTransform, project

__all__ = ["group_coincident", "resolve_overlaps"]


def group_coincident(positions: Sequence[Point], threshold_px: float) -> List[List[int]]:
    """
    Does:
        Greedy grouping: each point joins the first group whose reference (first member)
        lies within threshold_px (inclusive), otherwise it starts a new group. Groups keep input order.
    """
    groups: List[List[int]] = []
    for i, p in enumerate(positions):
        for g in groups:
            if p.distance_to(positions[g[0]]) <= threshold_px:
                g.append(i)
                break
        else:
            groups.append([i])
    return groups


def resolve_overlaps(
    targets: Sequence[HarmonyTarget],
    t: ViewTransform,
    fan_threshold_px: float = _FAN_THRESHOLD_PX,
    fan_radius_px: float = _FAN_RADIUS_PX,
) -> List[Tuple[HarmonyTarget, Point]]:
    """
    Does:
        Project harmony targets and spread near-coincident ones on a small ring around the
        group's reference position, so each marker stays visible and clickable.

    Rule:
        member j of a group of size k > 1 goes to reference + r * (cos a, sin a),
        a = (j / k) * 2pi - pi/2 (first member at the top). Singletons keep their projection.
        Output order matches input order.
    """
    if fan_threshold_px < 0 or fan_radius_px < 0:
        raise ValueError("fan_threshold_px and fan_radius_px must be >= 0")

    positions = [project(tg.hsl, t) for tg in targets]
    resolved = list(positions)
    for group in group_coincident(positions, fan_threshold_px):
        k = len(group)
        if k < 2:
            continue
        ref = positions[group[0]]
        for j, idx in enumerate(group):
            a = (j / k) * 2.0 * math.pi - math.pi / 2.0
            resolved[idx] = Point(ref.x + fan_radius_px * math.cos(a), ref.y + fan_radius_px * math.sin(a))

    return list(zip(targets, resolved))
