"""
Viewport framer for the route map.

Computes the bounding box, center and zoom level that frame every drawn
point, including low-precision ones that are not part of the path.
"""

from typing import Sequence, Tuple

from models import Bounds, Coordinate, GeoPoint, ViewportFrame


# (span threshold in degrees, zoom level), widest first. The first threshold
# strictly exceeded by the span selects the zoom. This table is authoritative:
# a 50 degree span frames at 2.5, not the 1.8 of older hand-worked examples.
ZOOM_LADDER: Tuple[Tuple[float, float], ...] = (
    (150.0, 1.0),
    (100.0, 1.3),
    (60.0, 1.8),
    (30.0, 2.5),
    (15.0, 3.5),
    (8.0, 5.0),
    (4.0, 6.0),
)
MAX_ZOOM = 7.0
MIN_ZOOM = 1.0
SINGLE_POINT_ZOOM = 5.0

PADDING_RATIO = 0.15
MIN_PADDING_DEG = 10.0

WORLD_BOUNDS = Bounds(min_lon=-180.0, max_lon=180.0, min_lat=-90.0, max_lat=90.0)
DEFAULT_FRAME = ViewportFrame(
    center=Coordinate(lon=0.0, lat=0.0),
    zoom_level=MIN_ZOOM,
    bounds=WORLD_BOUNDS
)


def zoom_for_span(span: float) -> float:
    """
    Select a zoom level from the larger axis span of the unpadded box.

    Examples:
        >>> zoom_for_span(200)
        1.0
        >>> zoom_for_span(10)
        3.5
        >>> zoom_for_span(1)
        7.0
    """
    for threshold, zoom in ZOOM_LADDER:
        if span > threshold:
            return zoom
    return MAX_ZOOM


def _padding(span: float) -> float:
    if span == 0:
        return MIN_PADDING_DEG
    return span * PADDING_RATIO


def frame_viewport(points: Sequence[GeoPoint]) -> ViewportFrame:
    """
    Frame all projected points.

    Each axis is padded by 15% of its own span, or by a fixed 10 degrees
    when the span is zero. The center is the midpoint of the padded box.
    Bounds are not clamped to the world box.

    Args:
        points: All projected points, regardless of precision tier

    Returns:
        Viewport frame; the default world frame when there are no points
    """
    if not points:
        return DEFAULT_FRAME

    lons = [p.coordinate.lon for p in points]
    lats = [p.coordinate.lat for p in points]
    min_lon, max_lon = min(lons), max(lons)
    min_lat, max_lat = min(lats), max(lats)

    lon_span = max_lon - min_lon
    lat_span = max_lat - min_lat
    lon_pad = _padding(lon_span)
    lat_pad = _padding(lat_span)

    bounds = Bounds(
        min_lon=min_lon - lon_pad,
        max_lon=max_lon + lon_pad,
        min_lat=min_lat - lat_pad,
        max_lat=max_lat + lat_pad
    )
    center = Coordinate(
        lon=(bounds.min_lon + bounds.max_lon) / 2,
        lat=(bounds.min_lat + bounds.max_lat) / 2
    )

    if len(points) < 2:
        zoom = SINGLE_POINT_ZOOM
    else:
        zoom = zoom_for_span(max(lon_span, lat_span))

    return ViewportFrame(center=center, zoom_level=zoom, bounds=bounds)
