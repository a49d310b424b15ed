"""
Pydantic data models for the RouteLens console pipeline.

These models define the raw telemetry records consumed by the pipeline
(hops, trace snapshots, metric samples) and the derived, renderer-ready
structures it produces (geo points, path segments, viewport frame,
aggregate statistics).
"""

import logging
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator


logger = logging.getLogger(__name__)


class PrecisionTier(str, Enum):
    """Confidence level of a hop's resolved geographic location."""
    CITY = "city"
    SUBDIVISION = "subdivision"
    COUNTRY = "country"
    NONE = "none"


class Language(str, Enum):
    """Two-valued language selector for display labels."""
    PRIMARY = "primary"
    FALLBACK = "fallback"


class SegmentColor(str, Enum):
    """Latency band of a path segment's destination hop."""
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class HopRecord(BaseModel):
    """
    One router hop reported by a traceroute.

    Accepts both snake_case and camelCase keys so records from either
    backend generation validate into the same shape.

    Attributes:
        hop_index: 1-based position along the path
        host: Reverse DNS name (preferred display identity)
        ip: Responding router address
        lon: Longitude, may be missing or non-finite
        lat: Latitude, may be missing or non-finite
        geo_precision: Explicit precision tag, None when it must be inferred
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    hop_index: int = Field(..., ge=1, validation_alias=AliasChoices("hop_index", "hopIndex", "hop"))
    host: str = ""
    ip: str = ""
    lon: Optional[float] = None
    lat: Optional[float] = None
    city: Optional[str] = None
    city_localized: Optional[str] = Field(None, validation_alias=AliasChoices("city_localized", "cityLocalized"))
    subdivision: Optional[str] = None
    subdivision_localized: Optional[str] = Field(
        None, validation_alias=AliasChoices("subdivision_localized", "subdivisionLocalized")
    )
    country: Optional[str] = None
    geo_precision: Optional[PrecisionTier] = Field(
        None, validation_alias=AliasChoices("geo_precision", "geoPrecision", "precision")
    )
    latency_last: Optional[float] = Field(
        None, ge=0.0, validation_alias=AliasChoices("latency_last", "latencyLast", "latency_ms")
    )
    latency_avg: Optional[float] = Field(None, ge=0.0, validation_alias=AliasChoices("latency_avg", "latencyAvg"))
    latency_best: Optional[float] = Field(None, ge=0.0, validation_alias=AliasChoices("latency_best", "latencyBest"))
    latency_worst: Optional[float] = Field(
        None, ge=0.0, validation_alias=AliasChoices("latency_worst", "latencyWorst")
    )
    loss_percent: Optional[float] = Field(None, ge=0.0, validation_alias=AliasChoices("loss_percent", "lossPercent"))
    asn: Optional[str] = None
    isp: Optional[str] = None

    @field_validator('host', 'ip', mode='before')
    @classmethod
    def none_to_empty(cls, v):
        """Treat null identities as empty strings."""
        return "" if v is None else v

    @field_validator('lon', 'lat', mode='before')
    @classmethod
    def unreadable_coordinate_to_none(cls, v):
        """Coordinates that are not numbers are treated as missing."""
        if v is None:
            return None
        try:
            return float(v)
        except (TypeError, ValueError):
            return None

    @field_validator('geo_precision', mode='before')
    @classmethod
    def normalize_precision(cls, v):
        """
        Map free-form precision tags onto the closed tier set.

        Unknown tags become "none"; null or empty tags stay absent so the
        classifier can infer them from the location fields.
        """
        if v is None or isinstance(v, PrecisionTier):
            return v
        if not isinstance(v, str):
            return PrecisionTier.NONE
        tag = v.strip().lower()
        if not tag:
            return None
        try:
            return PrecisionTier(tag)
        except ValueError:
            return PrecisionTier.NONE


class TraceSnapshot(BaseModel):
    """
    Immutable result of one traceroute for one target.

    Hops are kept sorted by hop_index. When two hops share an index the one
    appearing later in the payload replaces the earlier one. A hop that
    fails validation is dropped on its own; the rest of the trace is kept.
    """
    model_config = ConfigDict(frozen=True)

    target: str = ""
    hops: Tuple[HopRecord, ...] = ()
    truncated: bool = False

    @field_validator('target', mode='before')
    @classmethod
    def none_to_empty(cls, v):
        return "" if v is None else v

    @field_validator('hops', mode='before')
    @classmethod
    def drop_invalid_hops(cls, v):
        if v is None:
            return ()
        if not isinstance(v, (list, tuple)):
            return v

        hops = []
        for entry in v:
            if isinstance(entry, HopRecord):
                hops.append(entry)
                continue
            try:
                hops.append(HopRecord.model_validate(entry))
            except ValidationError as e:
                logger.warning(f"Dropping invalid hop from trace: {e.error_count()} errors")
        return tuple(hops)

    @field_validator('hops')
    @classmethod
    def order_hops(cls, v):
        """Sort by hop index, last duplicate wins."""
        by_index: Dict[int, HopRecord] = {}
        for hop in v:
            by_index[hop.hop_index] = hop
        return tuple(by_index[index] for index in sorted(by_index))


# Per-field key priority for history samples. Newer-scheme spellings come
# first, then the older PascalCase names emitted by the first backend.
SAMPLE_FIELD_KEYS: Dict[str, Tuple[str, ...]] = {
    "timestamp": ("timestamp", "created_at", "createdAt", "CreatedAt"),
    "latency_ms": ("latency_ms", "latencyMs", "LatencyMs"),
    "packet_loss_percent": (
        "packet_loss_percent", "packet_loss", "packetLossPercent", "lossPercent", "PacketLoss"
    ),
    "speed_down_mbps": ("speed_down_mbps", "speed_down", "speedDownMbps", "SpeedDown"),
}


def resolve_sample_fields(record: Dict[str, Any]) -> Dict[str, Any]:
    """
    Resolve one raw history record into canonical field names.

    For each field the first key holding a non-null value wins; a field
    with no such key is left out (absent, not zero).

    Args:
        record: Raw sample dictionary in either naming scheme

    Returns:
        Dictionary keyed by canonical MetricSample field names
    """
    resolved = {}
    for field_name, keys in SAMPLE_FIELD_KEYS.items():
        for key in keys:
            value = record.get(key)
            if value is not None:
                resolved[field_name] = value
                break
    return resolved


class MetricSample(BaseModel):
    """
    One periodic measurement for a target.

    Every metric is optional; absence means "unknown" and is never
    silently turned into zero by the model itself. A field that fails
    validation becomes unknown without affecting the other fields.
    """
    model_config = ConfigDict(frozen=True)

    timestamp: Optional[datetime] = None
    latency_ms: Optional[float] = Field(None, ge=0.0)
    packet_loss_percent: Optional[float] = Field(None, ge=0.0)
    speed_down_mbps: Optional[float] = Field(None, ge=0.0)

    @model_validator(mode='before')
    @classmethod
    def resolve_naming_scheme(cls, data):
        if isinstance(data, dict):
            return resolve_sample_fields(data)
        return data

    @field_validator('timestamp', 'latency_ms', 'packet_loss_percent', 'speed_down_mbps', mode='wrap')
    @classmethod
    def invalid_field_to_unknown(cls, v, handler, info):
        try:
            return handler(v)
        except ValidationError:
            logger.warning(f"Invalid {info.field_name} in history sample, treating as unknown")
            return None


class Coordinate(BaseModel):
    """Longitude/latitude pair in degrees."""
    model_config = ConfigDict(frozen=True)

    lon: float
    lat: float


class GeoPoint(BaseModel):
    """Renderable map point derived from one hop with a valid coordinate."""
    model_config = ConfigDict(frozen=True)

    label: str
    coordinate: Coordinate
    latency: float
    hop_index: int
    precision_tier: PrecisionTier


class PathSegment(BaseModel):
    """Colored line between two consecutive high-precision points."""
    model_config = ConfigDict(frozen=True)

    from_coordinate: Coordinate
    to_coordinate: Coordinate
    color: SegmentColor


class Bounds(BaseModel):
    """Axis-aligned bounding box in degrees."""
    model_config = ConfigDict(frozen=True)

    min_lon: float
    max_lon: float
    min_lat: float
    max_lat: float


class ViewportFrame(BaseModel):
    """Map viewport: center, discrete zoom level and padded bounds."""
    model_config = ConfigDict(frozen=True)

    center: Coordinate
    zoom_level: float
    bounds: Bounds


class AggregateStats(BaseModel):
    """Summary tiles for one target's history."""
    model_config = ConfigDict(frozen=True)

    average_latency: float = 0.0
    average_loss: float = 0.0
    latest_speed: float = 0.0


class ViewModel(BaseModel):
    """
    Fully derived structure handed to the rendering collaborator.

    Attributes:
        points: All projected points in hop order
        segments: Path segments between high-precision points
        frame: Viewport framing every drawn point
        stats: Aggregate statistics over the sample history
    """
    model_config = ConfigDict(frozen=True)

    points: Tuple[GeoPoint, ...] = ()
    segments: Tuple[PathSegment, ...] = ()
    frame: ViewportFrame
    stats: AggregateStats = AggregateStats()
