"""
Presentation collaborators.

Subscribers that turn pipeline events into text panel lines and chart-ready
series. Drawing is left to the GUI layer.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple, Type

from .core import constants, DateUtils
from .core.exceptions import (
    AirPollutionError,
    InvalidInputError,
    NetworkError,
    MalformedResponseError,
    NotFoundError,
    InvalidFileFormatError,
    FileLoadError,
    EmptySeriesError,
    PipelineBusyError,
)
from .models import SessionDocument, is_absent
from .orchestrator import PipelineEvent, PipelineState


ERROR_TITLES: Dict[Type[AirPollutionError], str] = {
    InvalidInputError: "Invalid address",
    NetworkError: "Network error",
    MalformedResponseError: "Unexpected response from the data service",
    NotFoundError: "Address not found",
    FileLoadError: "Error loading file",
    InvalidFileFormatError: "Invalid JSON file format",
    EmptySeriesError: "No data",
    PipelineBusyError: "Busy",
}


def parameter_label(name: str) -> str:
    return constants.PARAMETER_LABELS.get(name, name)


def describe_error(error: BaseException) -> str:
    """User-facing message with a distinct title per error kind."""
    if isinstance(error, asyncio.CancelledError):
        return "Request cancelled"
    for error_type, title in ERROR_TITLES.items():
        if isinstance(error, error_type):
            return f"{title}: {error}"
    return f"Error processing data: {error}"


class TextPanel:
    """Location, statistics and error text for the main window."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)
        self.lines: List[str] = []

    def __call__(self, event: PipelineEvent) -> None:
        if event.state == PipelineState.READY and event.document is not None:
            self.lines = self.render(event.document, event.warnings)
        elif event.state == PipelineState.ERRORED and event.error is not None:
            self.lines = [describe_error(event.error)]

    def render(self, document: SessionDocument, warnings: Tuple[str, ...] = ()) -> List[str]:
        """
        Render a document as text lines.

        Args:
            document: Session document
            warnings: Non-fatal warnings of the run

        Returns:
            Lines of text
        """
        lines = [
            f"Location: {document.location.display_name}",
            f"Station: {document.location.region}",
        ]
        for name in document.series:
            stats = document.statistics.get(name)
            if stats is None:
                continue
            lines.extend([
                parameter_label(name),
                f"  Min: {stats.min:.1f}",
                f"  Max: {stats.max:.1f}",
                f"  Average: {stats.mean:.1f}",
            ])
        lines.extend(f"Warning: {w}" for w in warnings)
        return lines

    def text(self) -> str:
        return "\n".join(self.lines)


@dataclass(frozen=True)
class ChartSeries:
    """Chart-ready line series."""

    parameter_name: str
    title: str
    color: str
    points: Tuple[Tuple[int, float], ...]


class ChartRenderer:
    """Build one chart series per parameter of a ready document."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)
        self.date_utils = DateUtils(self.logger)
        self.charts: List[ChartSeries] = []

    def __call__(self, event: PipelineEvent) -> None:
        # Previous charts never outlive the event that replaced them
        self.charts = []
        if event.state == PipelineState.READY and event.document is not None:
            self.charts = self.render(event.document)

    def render(self, document: SessionDocument) -> List[ChartSeries]:
        """
        Convert each non-empty series to (epoch ms, value) points.

        Absent hours are left out of the line.

        Args:
            document: Session document

        Returns:
            Chart series in parameter order
        """
        timezone_str = document.raw.get("timezone") if document.raw else None
        charts = []
        for name, ts in document.series.items():
            if ts.is_empty:
                continue
            points = tuple(
                (self.date_utils.to_epoch_ms(stamp, timezone_str), value)
                for stamp, value in zip(ts.timestamps, ts.values)
                if not is_absent(value)
            )
            charts.append(ChartSeries(
                parameter_name=name,
                title=f"{parameter_label(name)} - {document.location.display_name}",
                color=constants.PARAMETER_COLORS.get(name, constants.DEFAULT_COLOR),
                points=points,
            ))
        self.logger.debug(f"Prepared {len(charts)} charts")
        return charts
