"""Main module entrypoint for local runtime execution.

This module validates startup configuration and launches the FastAPI service,
or prints one owner's analytics for quick inspection.
"""

import argparse
import json
import logging

import uvicorn

from app.api.routers.analytics import (
    api_serialize_performance_summary,
    api_serialize_profile_stats,
    api_serialize_time_series,
)
from app.bootstrap import bootstrap_create_analytics_service, bootstrap_create_application
from app.config import AppSettings, config_load_settings


def main() -> None:
    """Run selected runtime command with validated startup configuration.

    Returns:
        None: This function does not return a runtime value.

    Raises:
        SettingsLoadError: Raised when configuration validation fails.
    """

    argument_parser = argparse.ArgumentParser(description="Interview analytics runtime entrypoint")
    argument_parser.add_argument(
        "command",
        nargs="?",
        default="api",
        choices=("api", "summary"),
        help="Runtime command: `api` starts server, `summary` prints one owner's analytics as JSON",
        type=str,
    )
    argument_parser.add_argument(
        "--owner",
        dest="owner_identity",
        type=str,
        help="Owner identity (for example an email address) for `summary`",
    )
    parsed_arguments = argument_parser.parse_args()

    settings = config_load_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    if parsed_arguments.command == "summary":
        if not (parsed_arguments.owner_identity or "").strip():
            argument_parser.error("--owner is required for `summary`")
        main_print_owner_analytics(parsed_arguments.owner_identity, settings=settings)
        return

    application = bootstrap_create_application(settings=settings)
    uvicorn.run(
        application,
        host=settings.application_host,
        port=settings.application_port,
    )


def main_print_owner_analytics(owner_identity: str, settings: AppSettings | None = None) -> None:
    """Print summary, chart series and profile statistics for one owner.

    Args:
        owner_identity: Owner key such as an email address.
        settings: Optional pre-loaded settings.

    Returns:
        None: Prints JSON to stdout as side effect.

    Raises:
        AnalyticsSourceUnavailableError: Raised when records cannot be loaded.
    """

    analytics_service = bootstrap_create_analytics_service(settings=settings)
    payload = {
        "summary": api_serialize_performance_summary(analytics_service.analytics_summary_for_owner(owner_identity)),
        "time_series": api_serialize_time_series(analytics_service.analytics_time_series_for_owner(owner_identity)),
        "profile": api_serialize_profile_stats(analytics_service.analytics_profile_for_owner(owner_identity)),
    }
    print(json.dumps(payload, indent=2))


if __name__ == "__main__":
    main()
