"""Banner sinks -- raw console stream or the banner log channel."""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterator
from typing import TextIO

from core.errors import SinkWriteError
from core.models.banner import BannerMode
from core.protocols import BannerSink

BANNER_LOGGER_NAME = "appstart.banner"


class ConsoleSink:
    """Writes the banner straight to a text stream.

    With no stream given, sys.stdout is looked up at write time so that
    output redirection set up after construction is honoured.
    """

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream

    @property
    def stream(self) -> TextIO:
        return self._stream if self._stream is not None else sys.stdout

    def write(self, text: str) -> None:
        if not text.endswith("\n"):
            text += "\n"
        try:
            self.stream.write(text)
            self.stream.flush()
        except (OSError, ValueError) as e:
            # ValueError: write to a closed file
            raise SinkWriteError(f"Failed to write banner to console: {e}") from e


class LogSink:
    """Emits the banner as a single INFO record.

    Handlers normally report their own emit failures through handleError()
    and carry on. For the banner record a failing handler raises
    SinkWriteError instead.
    """

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self.logger = logger or logging.getLogger(BANNER_LOGGER_NAME)

    def write(self, text: str) -> None:
        logger = self.logger
        if logger.disabled or not logger.isEnabledFor(logging.INFO):
            return

        record = logger.makeRecord(
            logger.name, logging.INFO, __file__, 0, "%s", (text.rstrip("\n"),), None
        )
        if not logger.filter(record):
            return

        for handler in _handler_chain(logger):
            if record.levelno >= handler.level:
                _emit_strict(handler, record)


def _handler_chain(logger: logging.Logger) -> Iterator[logging.Handler]:
    """Handlers a record on `logger` reaches, in Logger.callHandlers order."""
    current: logging.Logger | None = logger
    while current is not None:
        yield from current.handlers
        if not current.propagate:
            break
        current = current.parent


def _emit_strict(handler: logging.Handler, record: logging.LogRecord) -> None:
    """handler.handle(record), raising SinkWriteError if the emit fails."""

    def raise_error(failed: logging.LogRecord) -> None:
        error = sys.exc_info()[1]
        raise SinkWriteError(
            f"Failed to log banner via {type(handler).__name__}: {error}"
        ) from error

    patched = "handleError" in vars(handler)
    original = vars(handler).get("handleError")
    handler.handleError = raise_error
    try:
        handler.handle(record)
    finally:
        if patched:
            handler.handleError = original
        else:
            del handler.handleError


def sink_for_mode(
    mode: BannerMode,
    stream: TextIO | None = None,
    logger: logging.Logger | None = None,
) -> BannerSink | None:
    """Default sink for a mode; OFF has none."""
    if mode is BannerMode.CONSOLE:
        return ConsoleSink(stream)
    if mode is BannerMode.LOG:
        return LogSink(logger)
    return None
