"""
Unit and property tests for the viewport framer.
"""

import pytest
from hypothesis import given, settings, strategies as st
from models import Coordinate, GeoPoint, PrecisionTier
from pipeline.viewport import DEFAULT_FRAME, SINGLE_POINT_ZOOM, frame_viewport, zoom_for_span


def make_point(index, lon, lat, tier=PrecisionTier.CITY):
    return GeoPoint(
        label=f"hop{index}",
        coordinate=Coordinate(lon=lon, lat=lat),
        latency=10.0,
        hop_index=index,
        precision_tier=tier
    )


class TestZoomLadder:
    """Zoom selection from the unpadded span."""
    
    @pytest.mark.parametrize("span,expected", [
        (200, 1.0),
        (120, 1.3),
        (70, 1.8),
        (50, 2.5),
        (20, 3.5),
        (10, 5.0),
        (6, 6.0),
        (3, 7.0),
        (1, 7.0),
        (0, 7.0),
    ])
    def test_ladder_values(self, span, expected):
        assert zoom_for_span(span) == expected
    
    @pytest.mark.parametrize("span,expected", [
        (150.0, 1.3),
        (100.0, 1.8),
        (60.0, 2.5),
        (30.0, 3.5),
        (15.0, 5.0),
        (8.0, 6.0),
        (4.0, 7.0),
    ])
    def test_thresholds_are_exclusive(self, span, expected):
        """A span exactly on a threshold falls to the closer zoom."""
        assert zoom_for_span(span) == expected
    
    @settings(max_examples=200)
    @given(
        a=st.floats(min_value=0, max_value=360, allow_nan=False),
        b=st.floats(min_value=0, max_value=360, allow_nan=False)
    )
    def test_property_zoom_non_increasing(self, a, b):
        """
        Property: Zoom Monotonicity

        A wider span never zooms in further than a narrower one.
        """
        narrow, wide = sorted((a, b))
        assert zoom_for_span(wide) <= zoom_for_span(narrow)


class TestFrameViewport:
    """Bounds, center and zoom of the framed viewport."""
    
    def test_empty_points_default_frame(self):
        frame = frame_viewport([])
        
        assert frame == DEFAULT_FRAME
        assert frame.zoom_level == 1.0
        assert frame.center == Coordinate(lon=0.0, lat=0.0)
    
    def test_single_point_uses_minimum_padding(self):
        frame = frame_viewport([make_point(1, 139.7, 35.7)])
        
        assert frame.zoom_level == SINGLE_POINT_ZOOM
        assert frame.bounds.min_lon == pytest.approx(129.7)
        assert frame.bounds.max_lon == pytest.approx(149.7)
        assert frame.bounds.min_lat == pytest.approx(25.7)
        assert frame.bounds.max_lat == pytest.approx(45.7)
        assert frame.center.lon == pytest.approx(139.7)
        assert frame.center.lat == pytest.approx(35.7)
    
    def test_padding_is_fifteen_percent_per_axis(self):
        frame = frame_viewport([make_point(1, 0.0, 10.0), make_point(2, 100.0, 30.0)])
        
        assert frame.bounds.min_lon == pytest.approx(-15.0)
        assert frame.bounds.max_lon == pytest.approx(115.0)
        assert frame.bounds.min_lat == pytest.approx(7.0)
        assert frame.bounds.max_lat == pytest.approx(33.0)
        assert frame.center.lon == pytest.approx(50.0)
        assert frame.center.lat == pytest.approx(20.0)
        # unpadded span 100 is not above 100
        assert frame.zoom_level == 1.8
    
    def test_zero_span_axis_gets_minimum_padding(self):
        """Points on one meridian still get a non-degenerate box."""
        frame = frame_viewport([make_point(1, 5.0, 10.0), make_point(2, 5.0, 20.0)])
        
        assert frame.bounds.min_lon == pytest.approx(-5.0)
        assert frame.bounds.max_lon == pytest.approx(15.0)
        assert frame.bounds.min_lat == pytest.approx(8.5)
        assert frame.bounds.max_lat == pytest.approx(21.5)
        assert frame.zoom_level == 5.0
    
    def test_identical_points_use_ladder(self):
        """Two points sharing a coordinate are not a single-point view."""
        frame = frame_viewport([make_point(1, 5.0, 10.0), make_point(2, 5.0, 10.0)])
        
        assert frame.zoom_level == 7.0
        assert frame.bounds.max_lon - frame.bounds.min_lon == pytest.approx(20.0)
    
    def test_low_precision_points_are_framed(self):
        frame = frame_viewport([
            make_point(1, 10.0, 10.0, PrecisionTier.CITY),
            make_point(2, 20.0, 20.0, PrecisionTier.COUNTRY),
        ])
        
        assert frame.bounds.min_lon == pytest.approx(8.5)
        assert frame.bounds.max_lon == pytest.approx(21.5)
    
    @settings(max_examples=100)
    @given(coords=st.lists(
        st.tuples(
            st.floats(min_value=-180, max_value=180),
            st.floats(min_value=-90, max_value=90)
        ),
        min_size=1,
        max_size=20
    ))
    def test_property_bounds_contain_every_point(self, coords):
        """
        Property: Viewport Containment

        The padded bounds always contain every point and the center is
        their midpoint.
        """
        points = [make_point(i + 1, lon, lat) for i, (lon, lat) in enumerate(coords)]
        
        frame = frame_viewport(points)
        
        for lon, lat in coords:
            assert frame.bounds.min_lon <= lon <= frame.bounds.max_lon
            assert frame.bounds.min_lat <= lat <= frame.bounds.max_lat
        assert frame.center.lon == pytest.approx((frame.bounds.min_lon + frame.bounds.max_lon) / 2)
        assert frame.center.lat == pytest.approx((frame.bounds.min_lat + frame.bounds.max_lat) / 2)
