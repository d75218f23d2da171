"""Command-line interface for the daily_dashboard application."""

from __future__ import annotations

import argparse
import dataclasses
import logging
import pprint
from pathlib import Path
from typing import List, Optional

from .config import load_secrets, parse_app_config
from .runner import ALL_SECTIONS, RunConfig, execute

logger = logging.getLogger(__name__)

MASKED_FIELDS = ("jsonbin_api_key", "jsonbin_bin_id", "sportradar_api_key")


def build_parser() -> argparse.ArgumentParser:
    """Create the CLI argument parser."""
    parser = argparse.ArgumentParser(
        description="Print one section of the personal dashboard as JSON."
    )
    parser.add_argument(
        "--config",
        default="configs/config.xml",
        help="Path to the main configuration XML file.",
    )
    parser.add_argument(
        "--section",
        default="news",
        choices=ALL_SECTIONS,
        help="Dashboard section to build.",
    )
    parser.add_argument(
        "--count",
        type=int,
        default=None,
        help="Number of items to return. Overrides the configured limit.",
    )

    # Overrides for logging/debugging
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (e.g. DEBUG, INFO, WARNING). Overrides config.",
    )
    parser.add_argument(
        "--log-file",
        default=None,
        help="Optional path to a log file. Overrides config.",
    )
    return parser


def configure_logging(level_name: str, log_file: Optional[str] = None) -> None:
    """Initialise logging according to options."""
    log_level = getattr(logging, level_name.upper(), None)
    if not isinstance(log_level, int):
        raise ValueError(f"Unsupported log level: {level_name}")

    formatter = logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")

    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        handler.close()

    root_logger.setLevel(log_level)

    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(formatter)
    root_logger.addHandler(stream_handler)

    if log_file:
        log_path = Path(log_file)
        if log_path.parent and not log_path.parent.exists():
            log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)
        logger.debug(
            "Logger initialised with level %s and file output to %s",
            level_name.upper(),
            log_path,
        )
    else:
        logger.debug(
            "Logger initialised with console output at level %s", level_name.upper()
        )


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        app_config = parse_app_config(args.config)

        # CLI overrides config
        log_level = args.log_level or app_config.logging.level
        log_file = args.log_file or app_config.logging.file
        configure_logging(log_level, log_file)

        secrets = load_secrets(
            app_config.env_file,
            require_coffee_sync=app_config.coffee_sync.enabled and args.section == "coffee",
        )

        config = RunConfig(
            section=args.section,
            count=args.count if args.count is not None else app_config.limit,
            concurrency=app_config.concurrency,
            request_timeout=app_config.request_timeout,
            user_agent=app_config.user_agent,
            direct=app_config.direct,
            proxies=app_config.proxies,
            weather=app_config.weather,
            fixtures=app_config.fixtures,
            sportradar_api_key=secrets.sportradar_api_key,
            coffee_sync_enabled=app_config.coffee_sync.enabled,
            coffee_sync_url=app_config.coffee_sync.base_url,
            jsonbin_bin_id=secrets.jsonbin_bin_id,
            jsonbin_api_key=secrets.jsonbin_api_key,
        )

        config_dict = dataclasses.asdict(config)
        for name in MASKED_FIELDS:
            if config_dict.get(name):
                config_dict[name] = "***MASKED***"
        logger.info("Active Configuration:\n%s", pprint.pformat(config_dict))

        result = execute(config)
    except ValueError as exc:
        parser.error(str(exc))
    except (RuntimeError, FileNotFoundError) as exc:
        logger.error("%s", exc)
        return 1
    except Exception:  # noqa: BLE001
        logger.exception("Unexpected error during execution.")
        return 1

    print(result.output_text)
    return 0
