"""Banner renderer -- produces the startup banner, writes it, records it.

Called once by the application during startup. Runs synchronously: one
text lookup, one write, one registry entry.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from core.banners import DefaultBanner, framework_version
from core.errors import ResourceUnavailableError
from core.models.banner import BANNER_REGISTRY_NAME, BannerMode, RenderedBanner
from core.protocols import BannerSink, BannerSource
from core.registry import ObjectRegistry
from core.sinks import sink_for_mode

logger = logging.getLogger(__name__)


class BannerRenderer:
    """Render the banner for one application run.

    Usage:
        renderer = BannerRenderer(registry)
        renderer.render(BannerMode.LOG, my_banner, environment, MyApp)

        registry.lookup("startupBanner").source is my_banner  # True
    """

    def __init__(self, registry: ObjectRegistry | None = None) -> None:
        self._registry = registry

    def render(
        self,
        mode: BannerMode | str,
        source: BannerSource | None,
        environment: Mapping[str, Any],
        source_class: type | None = None,
        sink: BannerSink | None = None,
    ) -> RenderedBanner | None:
        """Write the banner and register the result under 'startupBanner'.

        Returns None (with nothing written or registered) when mode is OFF.
        Raises BannerConfigError for an unknown mode and SinkWriteError when
        the output channel fails.
        """
        mode = BannerMode.parse(mode)
        if mode is BannerMode.OFF:
            return None

        if source is None:
            source = DefaultBanner()

        try:
            text = source.produce(environment, source_class)
        except ResourceUnavailableError as e:
            logger.debug("%s, falling back to default banner", e)
            source = DefaultBanner()
            text = source.produce(environment, source_class)

        if sink is None:
            sink = sink_for_mode(mode)
        sink.write(text)

        version = environment.get("app.version") or framework_version()
        rendered = RenderedBanner(
            source=source,
            text=text,
            mode=mode,
            version=str(version) if version else None,
            source_class=source_class,
        )
        if self._registry is not None:
            self._registry.register(BANNER_REGISTRY_NAME, rendered)
        return rendered
