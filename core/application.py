"""Application host -- runs the startup sequence and owns the registry.

Startup order:
    1. Load configuration (unless one was passed in)
    2. Build the environment from it
    3. Create a fresh object registry for this run
    4. Print the banner (exactly once)
    5. Log the started line and hand back the context
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Any, TextIO

from core.banner_renderer import BannerRenderer
from core.banners import select_banner
from core.config import AppConfig, load_config
from core.environment import Environment
from core.models.banner import BANNER_REGISTRY_NAME, BannerMode, RenderedBanner
from core.protocols import BannerSource
from core.registry import ObjectRegistry
from core.sinks import sink_for_mode

logger = logging.getLogger(__name__)

BannerPrinter = Callable[[Environment], None]


@dataclass
class ApplicationContext:
    """What a finished startup hands back to the caller."""

    config: AppConfig
    environment: Environment
    registry: ObjectRegistry

    @property
    def banner(self) -> RenderedBanner | None:
        return self.registry.lookup(BANNER_REGISTRY_NAME)

    def contains(self, name: str) -> bool:
        return self.registry.has(name)

    def get(self, name: str) -> Any:
        return self.registry.get(name)

    def close(self) -> None:
        self.registry.clear()


class Application:
    """Bootstraps one application run.

    `banner_printer` is the legacy hook for printing a banner by hand. When
    set it replaces the whole banner step, and nothing is registered under
    'startupBanner'. Overriding print_banner() in a subclass does the same.
    """

    def __init__(
        self,
        source_class: type | None = None,
        *,
        banner: BannerSource | None = None,
        banner_mode: BannerMode | str | None = None,
        config: AppConfig | None = None,
        stream: TextIO | None = None,
        banner_logger: logging.Logger | None = None,
        banner_printer: BannerPrinter | None = None,
    ) -> None:
        self.source_class = source_class
        self._banner = banner
        self._banner_mode = BannerMode.parse(banner_mode) if banner_mode is not None else None
        self._config = config
        self._stream = stream
        self._banner_logger = banner_logger
        self._banner_printer = banner_printer
        self._registry: ObjectRegistry | None = None

    def set_banner(self, banner: BannerSource | None) -> None:
        self._banner = banner

    def set_banner_mode(self, mode: BannerMode | str) -> None:
        self._banner_mode = BannerMode.parse(mode)

    def run(
        self,
        config_path: str | Path | None = None,
        env_path: str | Path | None = None,
    ) -> ApplicationContext:
        """Run the startup sequence and return the resulting context.

        Banner config and sink errors propagate: startup does not continue
        past a broken output channel.
        """
        started = time.monotonic()

        config = self._config or load_config(config_path=config_path, env_path=env_path)
        environment = Environment.from_config(config)
        self._registry = ObjectRegistry()

        self.print_banner(environment)

        name = config.app.name or getattr(self.source_class, "__name__", "application")
        logger.info("Started %s in %.3f seconds", name, time.monotonic() - started)
        return ApplicationContext(
            config=config,
            environment=environment,
            registry=self._registry,
        )

    def banner_mode(self, environment: Environment) -> BannerMode:
        """Explicit mode if one was set, else `banner.mode` from config."""
        if self._banner_mode is not None:
            return self._banner_mode
        return BannerMode.parse(environment.get("banner.mode", BannerMode.CONSOLE))

    def print_banner(self, environment: Environment) -> RenderedBanner | None:
        """Banner step of the startup sequence."""
        if self._banner_printer is not None:
            self._banner_printer(environment)
            return None

        mode = self.banner_mode(environment)
        if mode is BannerMode.OFF:
            return None

        source = select_banner(self._banner, environment, self.source_class)
        renderer = BannerRenderer(self._registry)
        return renderer.render(
            mode,
            source,
            environment,
            self.source_class,
            sink=sink_for_mode(mode, stream=self._stream, logger=self._banner_logger),
        )
