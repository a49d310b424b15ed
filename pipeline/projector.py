"""
Point projector: turns ordered hops into renderable geo points.
"""

import math
import logging
from typing import Iterable, List, Tuple

from models import Coordinate, GeoPoint, HopRecord, Language
from pipeline.classifier import classify_hop


logger = logging.getLogger(__name__)


def has_valid_coordinate(hop: HopRecord) -> bool:
    """
    Check whether a hop can be drawn on the map.

    Both lon and lat must be present and finite, and the pair must not be
    exactly (0, 0), which geocoders emit for "unknown".
    """
    if hop.lon is None or hop.lat is None:
        return False
    if not (math.isfinite(hop.lon) and math.isfinite(hop.lat)):
        return False
    return not (hop.lon == 0 and hop.lat == 0)


def point_latency(hop: HopRecord) -> float:
    """Latency shown on the point glyph: last, else average, else 0."""
    if hop.latency_last is not None:
        return hop.latency_last
    if hop.latency_avg is not None:
        return hop.latency_avg
    return 0.0


def project_points(hops: Iterable[HopRecord], language: Language = Language.PRIMARY) -> Tuple[GeoPoint, ...]:
    """
    Project hops into geo points.

    Hop order is preserved and points sharing a coordinate are kept.
    Hops without a valid coordinate are dropped.

    Args:
        hops: Hops in path order
        language: Label language

    Returns:
        Tuple of GeoPoint in hop order
    """
    points: List[GeoPoint] = []
    dropped = 0

    for hop in hops:
        if not has_valid_coordinate(hop):
            dropped += 1
            continue

        tier, label = classify_hop(hop, language)
        points.append(GeoPoint(
            label=label,
            coordinate=Coordinate(lon=hop.lon, lat=hop.lat),
            latency=point_latency(hop),
            hop_index=hop.hop_index,
            precision_tier=tier
        ))

    if dropped:
        logger.debug(f"Dropped {dropped} hops without a drawable coordinate")

    return tuple(points)
