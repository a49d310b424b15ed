"""
View model assembler.

Composes the projector, path builder, viewport framer and metrics
aggregator into one immutable ViewModel per (trace, history, language)
input. The memoized assembler hands back the very same ViewModel object for
unchanged inputs so the renderer never redraws for nothing.
"""

import json
import logging
from collections import OrderedDict
from collections.abc import Mapping
from typing import Any, Optional, Sequence, Tuple

from pydantic import ValidationError

from models import Language, MetricSample, TraceSnapshot, ViewModel
from pipeline.aggregator import aggregate_metrics, normalize_history
from pipeline.path_builder import build_segments
from pipeline.projector import project_points
from pipeline.viewport import frame_viewport


logger = logging.getLogger(__name__)

DEFAULT_CACHE_SIZE = 32


def parse_trace(payload: Any) -> Optional[TraceSnapshot]:
    """
    Interpret a trace payload as a TraceSnapshot.

    Accepts an already parsed snapshot, a mapping, or a JSON document as
    str or bytes. Anything that cannot be read as a structured snapshot is
    treated as "no trace".

    Args:
        payload: Raw trace payload, may be None

    Returns:
        TraceSnapshot, or None when there is no usable trace
    """
    if payload is None or isinstance(payload, TraceSnapshot):
        return payload

    if isinstance(payload, (str, bytes, bytearray)):
        if not payload.strip():
            return None
        try:
            payload = json.loads(payload)
        except (ValueError, UnicodeDecodeError) as e:
            logger.warning(f"Trace payload is not valid JSON, ignoring it: {e}")
            return None

    if not isinstance(payload, Mapping):
        logger.warning(f"Trace payload of type {type(payload).__name__} is not a snapshot, ignoring it")
        return None

    try:
        return TraceSnapshot.model_validate(dict(payload))
    except ValidationError as e:
        logger.warning(f"Trace payload failed validation, ignoring it: {e.error_count()} errors")
        return None


def build_view_model(
    snapshot: Optional[TraceSnapshot],
    samples: Sequence[MetricSample],
    language: Language
) -> ViewModel:
    """Build a ViewModel from already normalized inputs."""
    hops = snapshot.hops if snapshot is not None else ()
    points = project_points(hops, language)
    return ViewModel(
        points=points,
        segments=build_segments(points),
        frame=frame_viewport(points),
        stats=aggregate_metrics(samples)
    )


def assemble_view_model(trace: Any, history: Any, language: Language = Language.PRIMARY) -> ViewModel:
    """
    Assemble a ViewModel from raw inputs without memoization.

    Args:
        trace: Trace payload (snapshot, mapping, JSON text, or None)
        history: Sample history, oldest first
        language: Label language

    Returns:
        ViewModel; never raises for malformed trace or history data

    Raises:
        ValueError: If language is not a Language value. The selector is
            part of the caller contract, not data
    """
    return build_view_model(parse_trace(trace), normalize_history(history), Language(language))


class ViewModelAssembler:
    """
    Memoizing front end to build_view_model.

    Keeps the most recently used view models keyed by their normalized
    inputs. A cache hit returns the identical ViewModel object.

    Attributes:
        cache_size: Maximum number of view models kept
    """

    def __init__(self, cache_size: int = DEFAULT_CACHE_SIZE):
        if cache_size <= 0:
            raise ValueError("cache_size must be positive")
        self.cache_size = cache_size
        self._cache: "OrderedDict[Tuple, ViewModel]" = OrderedDict()

    def assemble(self, trace: Any, history: Any, language: Language = Language.PRIMARY) -> ViewModel:
        """
        Assemble or reuse the ViewModel for the given inputs.

        Args:
            trace: Trace payload (snapshot, mapping, JSON text, or None)
            history: Sample history, oldest first
            language: Label language

        Returns:
            ViewModel, the same object as last time for unchanged inputs

        Raises:
            ValueError: If language is not a Language value
        """
        snapshot = parse_trace(trace)
        samples = normalize_history(history)
        language = Language(language)
        key = (snapshot, samples, language)

        cached = self._cache.get(key)
        if cached is not None:
            self._cache.move_to_end(key)
            return cached

        view_model = build_view_model(snapshot, samples, language)
        self._cache[key] = view_model
        if len(self._cache) > self.cache_size:
            self._cache.popitem(last=False)

        logger.debug(
            f"Assembled view model: {len(view_model.points)} points, "
            f"{len(view_model.segments)} segments, {len(samples)} samples"
        )
        return view_model

    def clear(self) -> None:
        """Drop all cached view models."""
        self._cache.clear()

    def __len__(self) -> int:
        """Return the number of cached view models."""
        return len(self._cache)
