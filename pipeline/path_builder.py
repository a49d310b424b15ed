"""
Path builder for the route map.

Derives the ordered, colored line segments drawn between consecutive
high-precision points. Country-level and unlocated hops are left out of the
path so that low-confidence locations never produce misleading long-haul
lines, although they are still drawn as points.
"""

from typing import Iterable, List, Tuple

from models import GeoPoint, PathSegment, SegmentColor
from pipeline.classifier import is_high_precision


HIGH_LATENCY_MS = 200.0
MEDIUM_LATENCY_MS = 100.0


def segment_color(latency_ms: float) -> SegmentColor:
    """
    Color band for a segment, from its destination hop's latency.

    Upper boundaries are exclusive, so exactly 200 ms is still "medium"
    and exactly 100 ms is still "low".

    Args:
        latency_ms: Destination latency in milliseconds

    Returns:
        Segment color band

    Examples:
        >>> segment_color(200.0).value
        'medium'
        >>> segment_color(200.1).value
        'high'
        >>> segment_color(100.0).value
        'low'
    """
    if latency_ms > HIGH_LATENCY_MS:
        return SegmentColor.HIGH
    if latency_ms > MEDIUM_LATENCY_MS:
        return SegmentColor.MEDIUM
    return SegmentColor.LOW


def path_points(points: Iterable[GeoPoint]) -> Tuple[GeoPoint, ...]:
    """Points eligible for the path, in hop order."""
    return tuple(p for p in points if is_high_precision(p.precision_tier))


def build_segments(points: Iterable[GeoPoint]) -> Tuple[PathSegment, ...]:
    """
    Build path segments between consecutive high-precision points.

    Args:
        points: Projected points in hop order

    Returns:
        One segment per consecutive pair of path points; empty when fewer
        than two points qualify
    """
    eligible = path_points(points)
    segments: List[PathSegment] = []

    for source, destination in zip(eligible, eligible[1:]):
        segments.append(PathSegment(
            from_coordinate=source.coordinate,
            to_coordinate=destination.coordinate,
            color=segment_color(destination.latency)
        ))

    return tuple(segments)
