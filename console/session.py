"""
Console session state for the RouteLens dashboard.

Tracks the selected target, the latest trace and history retrieved for it
and the language selector, and re-runs the memoized assembler whenever one
of them changes. Retrieval itself happens elsewhere; every retrieval is
tagged with the RequestToken issued when its target was selected, and
results carrying an outdated token are dropped.
"""

import logging
from typing import Any, NamedTuple, Optional, Tuple

from models import Language, MetricSample, TraceSnapshot, ViewModel
from pipeline.assembler import ViewModelAssembler, parse_trace
from pipeline.aggregator import normalize_history
from pipeline.hop_table import HopRow, build_hop_table
from pipeline.series import DEFAULT_SYMBOL_THRESHOLD, MetricSeries, build_series


logger = logging.getLogger(__name__)


class RequestToken(NamedTuple):
    """Identifies the target selection a retrieval was started for."""
    target: str
    generation: int


class ConsoleSession:
    """
    Reactive state holder for one operator console view.

    Not thread-safe: it is driven from a single event loop, and only the
    retrieval of new data is asynchronous.

    Attributes:
        assembler: Memoizing view model assembler
        language: Current label language
        symbol_threshold: History length at which chart markers are hidden
    """

    def __init__(
        self,
        assembler: Optional[ViewModelAssembler] = None,
        language: Language = Language.PRIMARY,
        symbol_threshold: int = DEFAULT_SYMBOL_THRESHOLD
    ):
        self.assembler = assembler if assembler is not None else ViewModelAssembler()
        self.language = Language(language)
        self.symbol_threshold = symbol_threshold

        self._target: Optional[str] = None
        self._generation = 0
        self._trace: Optional[TraceSnapshot] = None
        self._history: Tuple[MetricSample, ...] = ()
        self._view_model = self._recompute()

    @property
    def target(self) -> Optional[str]:
        return self._target

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def current_token(self) -> Optional[RequestToken]:
        """Token of the current selection, None before the first one."""
        if self._target is None:
            return None
        return RequestToken(self._target, self._generation)

    @property
    def trace(self) -> Optional[TraceSnapshot]:
        return self._trace

    @property
    def history(self) -> Tuple[MetricSample, ...]:
        return self._history

    @property
    def view_model(self) -> ViewModel:
        """Last assembled view model; the same object until an input changes."""
        return self._view_model

    def select_target(self, target: str) -> RequestToken:
        """
        Switch to a target and issue the token for its retrievals.

        Every call bumps the generation, even when the same target is
        selected again, so results of earlier retrievals are discarded.
        The trace and history of the previous selection are cleared.

        Args:
            target: Target key

        Returns:
            Token to hand to the retrieval of this target's data
        """
        self._generation += 1
        self._target = target
        self._trace = None
        self._history = ()
        self._view_model = self._recompute()

        logger.info(f"Selected target {target} (generation {self._generation})")
        return RequestToken(target, self._generation)

    def is_current(self, token: RequestToken) -> bool:
        """Check whether a retrieval token matches the current selection."""
        return token == self.current_token

    def apply_trace(self, token: RequestToken, payload: Any) -> bool:
        """
        Apply a retrieved trace if it belongs to the current selection.

        Args:
            token: Token issued by select_target for this retrieval
            payload: Trace payload in any form parse_trace accepts

        Returns:
            True if applied, False if the result was stale and dropped
        """
        if not self.is_current(token):
            logger.debug(
                f"Discarding stale trace for {token.target} "
                f"(generation {token.generation}, current {self._generation})"
            )
            return False

        self._trace = parse_trace(payload)
        self._view_model = self._recompute()
        return True

    def apply_history(self, token: RequestToken, samples: Any) -> bool:
        """
        Apply a retrieved sample history if it belongs to the current selection.

        Args:
            token: Token issued by select_target for this retrieval
            samples: Samples or raw dictionaries, oldest first

        Returns:
            True if applied, False if the result was stale and dropped
        """
        if not self.is_current(token):
            logger.debug(
                f"Discarding stale history for {token.target} "
                f"(generation {token.generation}, current {self._generation})"
            )
            return False

        self._history = normalize_history(samples)
        self._view_model = self._recompute()
        return True

    def set_language(self, language: Language) -> None:
        """
        Switch the label language and recompute if it changed.

        Raises:
            ValueError: If language is not a Language value
        """
        language = Language(language)
        if language == self.language:
            return
        self.language = language
        self._view_model = self._recompute()
        logger.info(f"Language switched to {language.value}")

    def hop_table(self) -> Tuple[HopRow, ...]:
        """Hop table rows for the current trace."""
        return build_hop_table(self._trace, self.language)

    def series(self) -> MetricSeries:
        """Chart series for the current history."""
        return build_series(self._history, self.symbol_threshold)

    def _recompute(self) -> ViewModel:
        return self.assembler.assemble(self._trace, self._history, self.language)
