"""
Clinic Locator - find a place, pin it, resolve its address and register it
as a clinic. Command line driver for the place picking flow.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import os
import sys
from typing import List, Optional

import lib.utils as utils
from internal.config.manager import ConfigManager
from internal.services.clinic import DEFAULT_ENDPOINT, ClinicSubmitter
from internal.services.location import Coordinate, GeocodeMapsPlaceProvider, PlacePickerService
from internal.services.location.search import DEFAULT_DEBOUNCE_DELAY
from lib.geocode_maps import GeocodeMapsClient
from lib.logging_utils import initLogging

# Configure basic logging first
logging.basicConfig(format="%(asctime)s - %(name)s - %(levelname)s - %(message)s", level=logging.INFO)
# set higher logging level for httpx to avoid all GET and POST requests being logged
logging.getLogger("httpx").setLevel(logging.WARNING)
logger = logging.getLogger(__name__)


class ClinicLocatorApp:
    """Wires configuration, providers and PlacePickerService together."""

    def __init__(self, configPath: str = "config.toml", configDirs: Optional[List[str]] = None):
        self.configManager = ConfigManager(configPath, configDirs)

        initLogging(self.configManager.getLoggingConfig())

        geocodeConfig = self.configManager.getGeocodeMapsConfig()
        self.geocodeClient = GeocodeMapsClient(
            apiKey=self.configManager.getGeocodeMapsApiKey(),
            requestTimeout=geocodeConfig.get("request-timeout", 10),
            acceptLanguage=geocodeConfig.get("accept-language", None),
            apiBaseUrl=geocodeConfig.get("api-base-url", None),
        )
        self.provider = GeocodeMapsPlaceProvider(self.geocodeClient, searchLimit=geocodeConfig.get("search-limit", 10))

        clinicConfig = self.configManager.getClinicApiConfig()
        self.submitter = ClinicSubmitter(
            endpoint=clinicConfig.get("endpoint", DEFAULT_ENDPOINT),
            requestTimeout=clinicConfig.get("request-timeout", None),
        )
        self.debounceDelay = float(self.configManager.getSearchConfig().get("debounce-delay", DEFAULT_DEBOUNCE_DELAY))

    async def runFlow(
        self,
        searchText: Optional[str],
        pickIndex: Optional[int],
        coordinate: Optional[Coordinate],
        submit: bool,
    ) -> int:
        """Run the flow once and print every step as JSON. Returns exit code."""
        service = PlacePickerService(self.provider, self.provider, self.submitter, debounceDelay=self.debounceDelay)
        service.start()
        try:
            if searchText is not None:
                service.setSearchText(searchText)
                await service.waitIdle()
                places = service.store.state.fetchedPlaces or []
                printJson(
                    "places",
                    [
                        {
                            "index": idx,
                            "name": place.name,
                            "locality": place.locality,
                            "latitude": place.coordinate.latitude,
                            "longitude": place.coordinate.longitude,
                        }
                        for idx, place in enumerate(places)
                    ],
                )

                if pickIndex is not None:
                    if not 0 <= pickIndex < len(places):
                        logger.error(f"No place #{pickIndex} among {len(places)} results")
                        return 1
                    service.pickPlace(places[pickIndex])

            if coordinate is not None:
                service.resolver.onAnnotationDragged(coordinate)

            await service.waitIdle()
            state = service.store.state
            if state.pin is None:
                return 0

            printJson("payload", state.payload)
            if not submit:
                return 0
            if state.payload is None:
                logger.error("Address is not resolved, nothing to submit")
                return 1

            outcome = await service.submitClinic()
            printJson(
                "submission",
                {
                    "delivered": outcome.delivered,
                    "statusCode": outcome.statusCode,
                    "body": outcome.body,
                    "error": outcome.error,
                },
            )
            return 0 if outcome.delivered else 1
        finally:
            await service.close()

    def run(self, args: argparse.Namespace) -> int:
        coordinate = None
        if args.lat is not None and args.lon is not None:
            coordinate = Coordinate(args.lat, args.lon)
        return asyncio.run(self.runFlow(args.search, args.pick, coordinate, args.submit))


def printJson(title: str, data) -> None:
    print(f"=== {title} ===")
    print(utils.jsonDumps(data, indent=2, default=str))


def parse_arguments():
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Clinic Locator - search a place, resolve its address and register a clinic there, dood!"
    )
    parser.add_argument(
        "-c",
        "--config",
        default="config.toml",
        help="Path to configuration file (default: config.toml)",
    )
    parser.add_argument(
        "--config-dir",
        action="append",
        help="Directory to search for .toml config files recursively (can be specified multiple times), dood!",
    )
    parser.add_argument(
        "--print-config",
        action="store_true",
        help="Pretty-print loaded configuration and exit, dood!",
    )
    parser.add_argument("-s", "--search", help="Search text, as typed into search field")
    parser.add_argument("-p", "--pick", type=int, help="Index of search result to put clinic pin on")
    parser.add_argument("--lat", type=float, help="Latitude to drag clinic pin to")
    parser.add_argument("--lon", type=float, help="Longitude to drag clinic pin to")
    parser.add_argument("--submit", action="store_true", help="Register clinic at resolved address")
    args = parser.parse_args()

    if (args.lat is None) != (args.lon is None):
        parser.error("--lat and --lon must be given together")
    if args.pick is not None and args.search is None:
        parser.error("--pick requires --search")

    args.config = os.path.abspath(args.config)
    if args.config_dir:
        args.config_dir = [os.path.abspath(dirPath) for dirPath in args.config_dir]

    return args


def prettyPrintConfig(configManager: ConfigManager):
    """Pretty-print the loaded configuration and exit, dood!"""
    print("=== Clinic Locator Configuration ===")
    print()
    try:
        print(json.dumps(configManager.config, indent=2, ensure_ascii=False, sort_keys=True))
    except (TypeError, ValueError) as e:
        logger.warning(f"Could not serialize config as JSON: {e}")
        for key, value in sorted(configManager.config.items()):
            print(f"{key}: {value}")
    print()
    print("=== Configuration loaded successfully, dood! ===")


def main():
    """Main entry point."""
    args = parse_arguments()

    try:
        if args.print_config:
            prettyPrintConfig(ConfigManager(args.config, args.config_dir))
            sys.exit(0)

        app = ClinicLocatorApp(configPath=args.config, configDirs=args.config_dir)
        sys.exit(app.run(args))
    except KeyboardInterrupt:
        logger.info("Stopped by user")
    except ValueError as e:
        logger.error(f"Invalid input: {e}")
        sys.exit(2)


if __name__ == "__main__":
    main()
