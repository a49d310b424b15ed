"""
Metrics aggregator for the summary tiles.

Reduces a chronological sample history into average latency, average loss
and latest downlink speed. History records may use either the newer
snake_case field names or the older PascalCase ones; both are resolved into
MetricSample before any arithmetic happens.
"""

import logging
from collections.abc import Iterable, Mapping
from typing import Any, List, Optional, Sequence, Tuple

from models import AggregateStats, MetricSample


logger = logging.getLogger(__name__)


def normalize_sample(raw: Any) -> MetricSample:
    """
    Coerce one raw history entry into a MetricSample.

    Entries that are not records become an all-unknown sample, so they
    still count in the blended averages below. Within a record each
    unreadable field becomes unknown on its own.
    """
    if isinstance(raw, MetricSample):
        return raw
    if not isinstance(raw, Mapping):
        logger.warning(f"Ignoring history entry of type {type(raw).__name__}")
        return MetricSample()
    return MetricSample.model_validate(dict(raw))


def normalize_history(raw_history: Any) -> Tuple[MetricSample, ...]:
    """
    Coerce a raw history payload into an ordered tuple of samples.

    Args:
        raw_history: Sequence of samples or dictionaries, oldest first

    Returns:
        Tuple of MetricSample; empty for None or a non-sequence payload
    """
    if raw_history is None:
        return ()
    if isinstance(raw_history, (str, bytes, Mapping)) or not isinstance(raw_history, Iterable):
        logger.warning(f"History payload of type {type(raw_history).__name__} is not a sequence")
        return ()
    return tuple(normalize_sample(entry) for entry in raw_history)


def blended_mean(values: Sequence[Optional[float]]) -> float:
    """
    Mean where unknown values count as zero.

    This is the "blended trend" rollup used by the summary tiles: a sample
    without a measurement pulls the average down instead of being skipped.

    Examples:
        >>> blended_mean([10.0, None, None])
        3.3333333333333335
        >>> blended_mean([])
        0.0
    """
    if not values:
        return 0.0
    return sum(v or 0.0 for v in values) / len(values)


def aggregate_metrics(samples: Sequence[MetricSample]) -> AggregateStats:
    """
    Compute summary statistics for one target's history.

    Args:
        samples: Samples in chronological order

    Returns:
        AggregateStats; all zeros for an empty history
    """
    if not samples:
        return AggregateStats()

    latencies: List[Optional[float]] = [s.latency_ms for s in samples]
    losses: List[Optional[float]] = [s.packet_loss_percent for s in samples]
    latest_speed = samples[-1].speed_down_mbps

    return AggregateStats(
        average_latency=blended_mean(latencies),
        average_loss=blended_mean(losses),
        latest_speed=latest_speed if latest_speed is not None else 0.0
    )
