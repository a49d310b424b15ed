"""
History series builder for the metrics line chart.
"""

from datetime import datetime
from typing import Optional, Sequence, Tuple

from pydantic import BaseModel, ConfigDict

from models import MetricSample


DEFAULT_SYMBOL_THRESHOLD = 50
AXIS_LABEL_COUNT = 6


class MetricSeries(BaseModel):
    """
    Parallel chart series for one target's history.

    Attributes:
        timestamps: Sample times, None where the sample had none
        latency: Latency per sample in ms, unknown plotted as 0
        loss: Packet loss per sample in percent, unknown plotted as 0
        show_symbols: Whether point markers are drawn on the lines
        label_interval: Number of axis labels skipped between shown ones
    """
    model_config = ConfigDict(frozen=True)

    timestamps: Tuple[Optional[datetime], ...] = ()
    latency: Tuple[float, ...] = ()
    loss: Tuple[float, ...] = ()
    show_symbols: bool = True
    label_interval: int = 0


def build_series(samples: Sequence[MetricSample], symbol_threshold: int = DEFAULT_SYMBOL_THRESHOLD) -> MetricSeries:
    """
    Build chart series from a chronological history.

    Markers are hidden once the history reaches symbol_threshold samples,
    and axis labels are thinned to roughly six across the chart.
    """
    count = len(samples)
    return MetricSeries(
        timestamps=tuple(s.timestamp for s in samples),
        latency=tuple(s.latency_ms or 0.0 for s in samples),
        loss=tuple(s.packet_loss_percent or 0.0 for s in samples),
        show_symbols=count < symbol_threshold,
        label_interval=max(0, count // AXIS_LABEL_COUNT - 1)
    )
