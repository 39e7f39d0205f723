"""
Session document writer.

Serializes session documents to the JSON file format used for offline review
and restores them again.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

from .core import constants
from .core.exceptions import InvalidFileFormatError
from .models import Coordinates, LocationInfo, ParameterStatistics, SessionDocument
from .processing import SeriesValidator, StatisticsEngine


class DocumentWriter:
    """Write and read session documents."""

    def __init__(
        self,
        validator: Optional[SeriesValidator] = None,
        engine: Optional[StatisticsEngine] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize document writer.

        Args:
            validator: Validator applied to loaded files
            engine: Statistics engine used to recompute loaded statistics
            logger: Logger instance
        """
        self.logger = logger or logging.getLogger(__name__)
        self.validator = validator or SeriesValidator(self.logger)
        self.engine = engine or StatisticsEngine(self.logger)

    def serialize(self, document: SessionDocument) -> bytes:
        """
        Serialize a document to UTF-8 JSON.

        Args:
            document: Session document

        Returns:
            File content
        """
        return json.dumps(document.to_dict(), indent=2, ensure_ascii=False).encode("utf-8")

    def deserialize(self, content: Union[bytes, str]) -> SessionDocument:
        """
        Restore a document from file content.

        Statistics are recomputed from the series; a stored statistics block
        that disagrees is only reported.

        Args:
            content: File content

        Returns:
            Session document

        Raises:
            InvalidFileFormatError: If the content is not a valid session file
        """
        try:
            data = json.loads(content)
        except (ValueError, UnicodeDecodeError) as e:
            raise InvalidFileFormatError(f"File is not valid JSON: {e}") from e

        result = self.validator.validate_file(data)
        if not result.ok:
            raise InvalidFileFormatError(f"Invalid JSON file format: {result.reason}")

        data_key = self.validator.find_data_key(data)
        source = next(
            name for name, key in constants.DATA_BLOCK_KEYS.items() if key == data_key
        )

        location = LocationInfo(
            display_name=data["location"],
            region=data["station"],
            coordinates=self._parse_coordinates(data),
        )

        statistics, _ = self.engine.summarize_all(result.series)
        self._check_stored_statistics(data.get("statistics"), statistics)

        return SessionDocument.build(
            location=location,
            series=result.series,
            statistics=statistics,
            source=source,
            raw=data[data_key],
        )

    def _parse_coordinates(self, data: Dict[str, Any]) -> Optional[Coordinates]:
        """Coordinates block, if the file recorded one."""
        block = data.get("coordinates")
        if block is None:
            return None
        try:
            return Coordinates(latitude=float(block["latitude"]), longitude=float(block["longitude"]))
        except (TypeError, KeyError, ValueError) as e:
            raise InvalidFileFormatError(f"Invalid coordinates block: {e}") from e

    def _check_stored_statistics(
        self,
        stored: Any,
        computed: Dict[str, ParameterStatistics]
    ) -> None:
        if not isinstance(stored, dict):
            return
        for name, stats in computed.items():
            try:
                saved = ParameterStatistics.from_dict(stored[name])
            except (TypeError, KeyError, ValueError):
                self.logger.warning(f"Stored statistics for '{name}' missing or unreadable")
                continue
            if saved != stats:
                self.logger.warning(
                    f"Stored statistics for '{name}' differ from the series, using recomputed values"
                )

    def write(self, document: SessionDocument, path: Union[str, Path]) -> Path:
        """
        Write a document to disk.

        Args:
            document: Session document
            path: Target file

        Returns:
            Path written
        """
        target = Path(path)
        if target.parent and not target.parent.exists():
            target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(self.serialize(document))
        self.logger.info(f"Data saved to {target}")
        return target

    def read(self, path: Union[str, Path]) -> SessionDocument:
        """
        Read a document from disk.

        Args:
            path: Source file

        Returns:
            Session document
        """
        return self.deserialize(Path(path).read_bytes())
