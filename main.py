"""appstart entrypoint -- loads config, prints the banner, reports startup.

Usage:
    python main.py
    python main.py --config /path/to/config.yaml
    python main.py --banner-mode log
"""

from __future__ import annotations

import argparse
import logging
import sys

from pydantic import ValidationError

from core.application import Application
from core.config import load_config
from core.errors import BannerConfigError, SinkWriteError
from core.models.banner import BannerMode


def setup_logging(level: str) -> None:
    """Configure logging for the application."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="appstart application host")
    parser.add_argument(
        "--config", "-c",
        type=str,
        default=None,
        help="Path to config.yaml (default: ~/.appstart/config.yaml)",
    )
    parser.add_argument(
        "--env",
        type=str,
        default=None,
        help="Path to .env file (default: ~/.appstart/.env)",
    )
    parser.add_argument(
        "--banner-mode",
        type=str,
        default=None,
        choices=[mode.value for mode in BannerMode],
        help="Override banner.mode from config",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logger = logging.getLogger("appstart")

    try:
        config = load_config(config_path=args.config, env_path=args.env)
    except (ValidationError, BannerConfigError) as e:
        setup_logging("INFO")
        logger.error("Invalid configuration: %s", e)
        return 2

    setup_logging(config.logging.level)
    app = Application(banner_mode=args.banner_mode, config=config)
    try:
        context = app.run()
    except SinkWriteError as e:
        logger.error("Startup aborted: %s", e)
        return 1

    logger.info("Registry: %s", context.registry.summary())
    context.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
