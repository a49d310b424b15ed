"""
Pipeline package for the RouteLens console.
Turns raw trace and history records into renderer-ready view models.
"""

from pipeline.classifier import HopClassification, classify_hop, resolve_label, resolve_precision
from pipeline.projector import has_valid_coordinate, project_points
from pipeline.path_builder import build_segments, segment_color
from pipeline.viewport import frame_viewport, zoom_for_span
from pipeline.aggregator import aggregate_metrics, normalize_history
from pipeline.assembler import ViewModelAssembler, assemble_view_model, parse_trace
from pipeline.series import MetricSeries, build_series
from pipeline.hop_table import HopRow, build_hop_table, format_measurement

__all__ = [
    'HopClassification',
    'classify_hop',
    'resolve_label',
    'resolve_precision',
    'has_valid_coordinate',
    'project_points',
    'build_segments',
    'segment_color',
    'frame_viewport',
    'zoom_for_span',
    'aggregate_metrics',
    'normalize_history',
    'ViewModelAssembler',
    'assemble_view_model',
    'parse_trace',
    'MetricSeries',
    'build_series',
    'HopRow',
    'build_hop_table',
    'format_measurement',
]
