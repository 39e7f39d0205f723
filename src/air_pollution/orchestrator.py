"""
Pipeline orchestration.

Drives geocoding, series fetching, validation and statistics as one
sequential run, owns the current session document and publishes state
transitions to presentation subscribers.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Tuple, Union

from .core import constants, LoggerContext
from .core.exceptions import FileLoadError, InvalidInputError, PipelineBusyError
from .models import LocationInfo, SessionDocument
from .processing import StatisticsEngine
from .services import LocationResolver, SeriesFetcher
from .writer import DocumentWriter


class PipelineState(Enum):
    IDLE = "idle"
    RESOLVING_LOCATION = "resolving_location"
    FETCHING_SERIES = "fetching_series"
    VALIDATING = "validating"
    SUMMARIZING = "summarizing"
    READY = "ready"
    ERRORED = "errored"

    @property
    def is_active(self) -> bool:
        return self in ACTIVE_STATES


ACTIVE_STATES = frozenset({
    PipelineState.RESOLVING_LOCATION,
    PipelineState.FETCHING_SERIES,
    PipelineState.VALIDATING,
    PipelineState.SUMMARIZING,
})


@dataclass(frozen=True)
class PipelineEvent:
    """State transition published to subscribers."""

    state: PipelineState
    document: Optional[SessionDocument] = None
    error: Optional[BaseException] = None
    warnings: Tuple[str, ...] = field(default_factory=tuple)


Subscriber = Callable[[PipelineEvent], None]


class Orchestrator:
    """Run the air quality / weather pipeline, one run at a time."""

    def __init__(
        self,
        resolver: LocationResolver,
        fetcher: SeriesFetcher,
        parameters: Iterable[str] = constants.AIR_QUALITY_PARAMETERS,
        source: str = constants.DEFAULT_SOURCE,
        engine: Optional[StatisticsEngine] = None,
        writer: Optional[DocumentWriter] = None,
        output_path: Optional[Union[str, Path]] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize orchestrator.

        Args:
            resolver: Location resolver
            fetcher: Series fetcher
            parameters: Hourly parameters requested on every run
            source: Data source name recorded in documents
            engine: Statistics engine
            writer: Document writer used for loading and saving
            output_path: File written after each successful run; None disables saving
            logger: Logger instance
        """
        self.logger = logger or logging.getLogger(__name__)
        self.resolver = resolver
        self.fetcher = fetcher
        self.parameters = SeriesFetcher.normalize_parameters(parameters)
        self.source = source
        self.engine = engine or StatisticsEngine(self.logger)
        self.writer = writer or DocumentWriter(engine=self.engine, logger=self.logger)
        self.output_path = output_path

        self._state = PipelineState.IDLE
        self._document: Optional[SessionDocument] = None
        self._error: Optional[BaseException] = None
        self._warnings: List[str] = []
        self._subscribers: List[Subscriber] = []

    @property
    def state(self) -> PipelineState:
        return self._state

    @property
    def document(self) -> Optional[SessionDocument]:
        """Current document; only set in the READY state."""
        return self._document

    @property
    def error(self) -> Optional[BaseException]:
        return self._error

    @property
    def warnings(self) -> List[str]:
        return list(self._warnings)

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """
        Register a callback for state transitions.

        Args:
            callback: Called with a PipelineEvent after every transition

        Returns:
            Function removing the subscription
        """
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def _notify(self) -> None:
        event = PipelineEvent(
            state=self._state,
            document=self._document,
            error=self._error,
            warnings=tuple(self._warnings),
        )
        for callback in list(self._subscribers):
            try:
                callback(event)
            except Exception:
                self.logger.exception(f"Subscriber {callback!r} failed on {event.state.value}")

    def _transition(self, state: PipelineState) -> None:
        self.logger.debug(f"Pipeline state: {self._state.value} -> {state.value}")
        self._state = state
        self._notify()

    def _begin(self, state: PipelineState) -> None:
        """Start a new run, dropping the previous document."""
        if self._state.is_active:
            raise PipelineBusyError(
                f"A pipeline run is already in progress ({self._state.value})"
            )
        self._document = None
        self._error = None
        self._warnings = []
        self._transition(state)

    def _fail(self, error: BaseException) -> None:
        self.logger.error(
            f"Pipeline failed during {self._state.value}: {type(error).__name__}: {error}"
        )
        self._error = error
        self._document = None
        self._transition(PipelineState.ERRORED)

    def _succeed(self, document: SessionDocument) -> SessionDocument:
        self._document = document
        self._transition(PipelineState.READY)
        return document

    async def resolve(self, address: str) -> SessionDocument:
        """
        Run the full pipeline for an address.

        Args:
            address: Free-text address

        Returns:
            Session document of the completed run

        Raises:
            PipelineBusyError: If another run is in progress (that run is not affected)
            AirPollutionError: Subclass describing the failed stage
        """
        self._begin(PipelineState.RESOLVING_LOCATION)

        try:
            with LoggerContext(self.logger, f"geocoding of '{address}'"):
                location = await self.resolver.resolve(address)
        except BaseException as e:
            # Cancellation also ends the run, otherwise the pipeline stays busy
            self._fail(e)
            raise

        self._transition(PipelineState.FETCHING_SERIES)
        return await self._run_series_stages(location)

    async def fetch(self, location: LocationInfo) -> SessionDocument:
        """
        Run the pipeline from the series stage for an already resolved location.

        Args:
            location: Location with coordinates

        Returns:
            Session document of the completed run
        """
        self._begin(PipelineState.FETCHING_SERIES)
        return await self._run_series_stages(location)

    async def _run_series_stages(self, location: LocationInfo) -> SessionDocument:
        try:
            if location.coordinates is None:
                raise InvalidInputError(
                    f"Location '{location.display_name}' has no coordinates"
                )

            with LoggerContext(self.logger, f"series fetch for {location.display_name}"):
                payload = await self.fetcher.fetch_raw(location.coordinates, self.parameters)

            self._transition(PipelineState.VALIDATING)
            series = self.fetcher.parse(payload, self.parameters)

            self._transition(PipelineState.SUMMARIZING)
            statistics, warnings = self.engine.summarize_all(series)
            self._warnings.extend(warnings)

            document = SessionDocument.build(
                location=location,
                series=series,
                statistics=statistics,
                source=self.source,
                raw=payload,
            )
        except BaseException as e:
            self._fail(e)
            raise

        self._succeed(document)
        self._save(document)
        return document

    def _save(self, document: SessionDocument) -> None:
        """Write a READY document; a failure is reported as a warning."""
        if self.output_path is None:
            return
        try:
            self.writer.write(document, self.output_path)
        except (OSError, TypeError, ValueError) as e:
            self.logger.error(f"Could not save {self.output_path}: {e}")
            self._warnings.append(f"Could not save file: {e}")
            # Subscribers already rendered READY; publish the new warning
            self._notify()

    def load_document(self, content: Union[bytes, str]) -> SessionDocument:
        """
        Restore a session from persisted file content without network access.

        Args:
            content: File content

        Returns:
            Loaded session document

        Raises:
            PipelineBusyError: If a run is in progress
            InvalidFileFormatError: If the content is not a valid session file
        """
        if self._state.is_active:
            raise PipelineBusyError(
                f"A pipeline run is already in progress ({self._state.value})"
            )
        self._document = None
        self._error = None
        self._warnings = []

        try:
            document = self.writer.deserialize(content)
        except Exception as e:
            self._fail(e)
            raise

        missing = [name for name in document.series if name not in document.statistics]
        self._warnings.extend(f"No values available for parameter '{name}'" for name in missing)
        self.logger.info(f"Loaded session for {document.location.display_name}")
        return self._succeed(document)

    def load_file(self, path: Union[str, Path]) -> SessionDocument:
        """
        Read a persisted file and load it (see load_document).

        Raises:
            FileLoadError: If the file cannot be read
        """
        if self._state.is_active:
            raise PipelineBusyError(
                f"A pipeline run is already in progress ({self._state.value})"
            )
        try:
            content = Path(path).read_bytes()
        except OSError as e:
            error = FileLoadError(f"Cannot read {path}: {e.strerror or e}")
            self._fail(error)
            raise error from e
        return self.load_document(content)
