"""Core protocols -- the extension points of the banner subsystem.

All protocols use Python's structural subtyping (typing.Protocol):
if your class has the right methods, it implements the protocol.
No inheritance required.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol, runtime_checkable


# ---------------------------------------------------------------------------
# 1. BannerSource -- produces the banner text
# ---------------------------------------------------------------------------

@runtime_checkable
class BannerSource(Protocol):
    """Produces banner text for the current environment.

    Default implementation: DefaultBanner. ResourceBanner reads a text file,
    CustomBanner returns fixed text. Applications can pass any object with
    a matching `produce` method.
    """

    def produce(self, environment: Mapping[str, Any], source_class: type | None) -> str:
        """Return the banner text.

        `source_class` is only used to locate resources that live next to
        the application code. It may be None.
        """
        ...


# ---------------------------------------------------------------------------
# 2. BannerSink -- destination for the banner text
# ---------------------------------------------------------------------------

@runtime_checkable
class BannerSink(Protocol):
    """Writes banner text to a console stream or a log channel.

    Implementations must raise SinkWriteError when the channel fails.
    """

    def write(self, text: str) -> None:
        ...
