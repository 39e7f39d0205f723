"""
Main entry point for the air pollution app.

Wires the pipeline components together and runs one fetch or file load from
the command line.
"""

import asyncio
import sys
from pathlib import Path
from typing import Optional

from .core import Config, setup_logger, AirPollutionError
from .api import OpenMeteoAPI
from .services import LocationResolver, SeriesFetcher, FetchWindow
from .processing import SeriesValidator, StatisticsEngine
from .writer import DocumentWriter
from .orchestrator import Orchestrator
from .presentation import TextPanel, ChartRenderer
from .models import SessionDocument


class AirPollutionApp:
    """Main application: address in, statistics and charts out."""

    def __init__(
        self,
        config_file: Optional[str] = None,
        source: Optional[str] = None,
        output_file: Optional[str] = None,
        save: Optional[bool] = None
    ):
        """
        Initialize application.

        Args:
            config_file: Path to configuration file
            source: Data source override ('air_quality' or 'weather')
            output_file: Output file override
            save: Whether to save the document after a successful fetch
        """
        self.config = Config(config_file)
        if source:
            self.config.source = source

        self.logger = setup_logger(
            log_file=self.config.log_file,
            log_level=self.config.log_level
        )
        self.logger.info("=" * 60)
        self.logger.info("Air Pollution App")
        self.logger.info("=" * 60)
        self.logger.info(f"Configuration: {self.config}")

        self.output_file = output_file or self.config.output_file
        self.save = self.config.save_output if save is None else save

        self.api_client: Optional[OpenMeteoAPI] = None
        self.orchestrator: Optional[Orchestrator] = None
        self.text_panel = TextPanel(self.logger)
        self.chart_renderer = ChartRenderer(self.logger)

    def initialize_components(self) -> None:
        """Initialize all application components."""
        self.logger.info("Initializing components...")

        self.api_client = OpenMeteoAPI(
            geocoding_url=self.config.geocoding_url,
            timeout=self.config.api_timeout,
            max_retries=self.config.api_max_retries,
            verify_ssl=self.config.api_verify_ssl,
            logger=self.logger
        )

        validator = SeriesValidator(self.logger)
        engine = StatisticsEngine(self.logger)

        fetcher = SeriesFetcher(
            api_client=self.api_client,
            series_url=self.config.series_url,
            window=FetchWindow(
                past_days=self.config.past_days,
                forecast_days=self.config.forecast_days
            ),
            validator=validator,
            logger=self.logger
        )

        self.orchestrator = Orchestrator(
            resolver=LocationResolver(self.api_client, self.logger),
            fetcher=fetcher,
            parameters=self.config.parameters,
            source=self.config.source,
            engine=engine,
            writer=DocumentWriter(validator=validator, engine=engine, logger=self.logger),
            output_path=self.output_file if self.save else None,
            logger=self.logger
        )
        self.orchestrator.subscribe(self.text_panel)
        self.orchestrator.subscribe(self.chart_renderer)

        self.logger.info("All components initialized successfully")

    def run(self, address: str) -> SessionDocument:
        """
        Fetch and summarize data for an address.

        Args:
            address: Free-text address

        Returns:
            Session document
        """
        try:
            self.initialize_components()
            return asyncio.run(self.orchestrator.resolve(address))
        finally:
            if self.api_client:
                self.api_client.close()

    def load(self, path: str) -> SessionDocument:
        """
        Restore a previously saved session.

        Args:
            path: Session file

        Returns:
            Session document
        """
        try:
            self.initialize_components()
            return self.orchestrator.load_file(Path(path))
        finally:
            if self.api_client:
                self.api_client.close()


def main():
    """Main entry point."""
    import argparse

    parser = argparse.ArgumentParser(
        description="Air quality and weather statistics for an address"
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to configuration file"
    )
    group = parser.add_mutually_exclusive_group(required=True)
    group.add_argument(
        "--address",
        type=str,
        help="Address to look up, e.g. 'Kraków, PL'"
    )
    group.add_argument(
        "--load",
        type=str,
        metavar="FILE",
        help="Load a previously saved JSON file instead of fetching"
    )
    parser.add_argument(
        "--source",
        choices=["air_quality", "weather"],
        default=None,
        help="Data source (default from configuration)"
    )
    parser.add_argument(
        "--output",
        type=str,
        default=None,
        help="File the fetched data is saved to"
    )
    parser.add_argument(
        "--no-save",
        action="store_true",
        help="Do not save fetched data"
    )

    args = parser.parse_args()

    app = None
    try:
        app = AirPollutionApp(
            config_file=args.config,
            source=args.source,
            output_file=args.output,
            save=False if args.no_save else None
        )
        if args.load:
            app.load(args.load)
        else:
            app.run(args.address)
    except AirPollutionError as e:
        # The text panel already holds the user-facing message
        print(app.text_panel.text() if app else e)
        sys.exit(1)
    except Exception as e:
        print(f"Application failed: {e}")
        sys.exit(1)

    print(app.text_panel.text())


if __name__ == "__main__":
    main()
