"""
Per-hop table rows for the trace detail view.

Unlike the map glyphs, the table keeps "unknown" distinct from zero: a hop
that reported no latency shows "N/A", never "0.0 ms".
"""

from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict

from models import Language, PrecisionTier, TraceSnapshot
from pipeline.classifier import classify_hop
from pipeline.projector import has_valid_coordinate


NOT_AVAILABLE = "N/A"


class HopRow(BaseModel):
    """One display row of the hop table; measurements are preformatted."""
    model_config = ConfigDict(frozen=True)

    hop_index: int
    host: str
    ip: str
    label: str
    precision_tier: PrecisionTier
    located: bool
    loss: str
    last: str
    avg: str
    best: str
    worst: str
    asn: str
    isp: str


def format_measurement(value: Optional[float], unit: str = "", precision: int = 1) -> str:
    """
    Format an optional measurement for display.

    Examples:
        >>> format_measurement(None, " ms")
        'N/A'
        >>> format_measurement(0.0, " ms")
        '0.0 ms'
        >>> format_measurement(12.346, "%", precision=2)
        '12.35%'
    """
    if value is None:
        return NOT_AVAILABLE
    return f"{value:.{precision}f}{unit}"


def build_hop_table(trace: Optional[TraceSnapshot], language: Language = Language.PRIMARY) -> Tuple[HopRow, ...]:
    """
    Build table rows for every hop of a trace, located or not.

    Args:
        trace: Parsed snapshot, or None when there is no usable trace
        language: Label language

    Returns:
        Rows in hop order; empty without a trace
    """
    if trace is None:
        return ()

    rows = []
    for hop in trace.hops:
        tier, label = classify_hop(hop, language)
        rows.append(HopRow(
            hop_index=hop.hop_index,
            host=hop.host,
            ip=hop.ip,
            label=label,
            precision_tier=tier,
            located=has_valid_coordinate(hop),
            loss=format_measurement(hop.loss_percent, "%"),
            last=format_measurement(hop.latency_last, " ms"),
            avg=format_measurement(hop.latency_avg, " ms"),
            best=format_measurement(hop.latency_best, " ms"),
            worst=format_measurement(hop.latency_worst, " ms"),
            asn=hop.asn or NOT_AVAILABLE,
            isp=hop.isp or NOT_AVAILABLE
        ))
    return tuple(rows)
