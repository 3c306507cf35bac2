"""Banner models -- output mode and the record of a rendered banner."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict

from core.errors import BannerConfigError

# Registry key under which the rendered banner is recorded
BANNER_REGISTRY_NAME = "startupBanner"


class BannerMode(str, Enum):
    """Where the startup banner goes, if anywhere."""

    OFF = "off"
    CONSOLE = "console"
    LOG = "log"

    @classmethod
    def parse(cls, value: Any) -> BannerMode:
        """Coerce a config value to a BannerMode.

        YAML reads a bare `off` as False, so False means OFF. Anything
        unrecognized is an error rather than a silent OFF.
        """
        if isinstance(value, cls):
            return value
        if value is False:
            return cls.OFF
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        raise BannerConfigError(
            f"Invalid banner mode: {value!r}. "
            f"Must be one of: {[m.value for m in cls]}"
        )


class RenderedBanner(BaseModel):
    """A banner that has been written during startup.

    Wraps the source that produced it, so the record can be asked to
    produce the banner again later. Identity with a caller-supplied banner
    is checked through `.source`, not the record itself.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    source: Any
    text: str
    mode: BannerMode
    version: str | None = None
    source_class: Any = None

    def produce(self, environment: Any, source_class: Any = None) -> str:
        return self.source.produce(environment, source_class or self.source_class)
