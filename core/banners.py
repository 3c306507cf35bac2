"""Banner sources -- the built-in banner, text resources and custom text."""

from __future__ import annotations

import inspect
import logging
import platform
from collections.abc import Mapping
from importlib import metadata
from pathlib import Path
from typing import Any

from core.environment import Environment
from core.errors import ResourceUnavailableError
from core.protocols import BannerSource

logger = logging.getLogger(__name__)

DISTRIBUTION_NAME = "appstart"
DEFAULT_LOCATION = "banner.txt"

BANNER_ART = r"""
                        _             _
  __ _ _ __  _ __  ___| |_ __ _ _ __| |_
 / _` | '_ \| '_ \/ __| __/ _` | '__| __|
| (_| | |_) | |_) \__ \ || (_| | |  | |_
 \__,_| .__/| .__/|___/\__\__,_|_|   \__|
      |_|   |_|
""".strip("\n")

STRAP_MARKER = " :: App :: "
STRAP_WIDTH = 42


def framework_version() -> str:
    """Version of the installed appstart distribution, or '' when unknown."""
    try:
        return metadata.version(DISTRIBUTION_NAME)
    except metadata.PackageNotFoundError:
        return ""


def _formatted(version: str) -> str:
    return f" (v{version})" if version else ""


class DefaultBanner:
    """The built-in ASCII art banner with a version strap line."""

    def produce(self, environment: Mapping[str, Any], source_class: type | None = None) -> str:
        version = environment.get("app.version") or framework_version()
        formatted = _formatted(version)
        padding = " " * max(0, STRAP_WIDTH - len(STRAP_MARKER) - len(formatted))
        return f"{BANNER_ART}\n{STRAP_MARKER}{padding}{formatted}\n"

    def __repr__(self) -> str:
        return "DefaultBanner()"


class CustomBanner:
    """Fixed caller-supplied text, written exactly as given."""

    def __init__(self, text: str) -> None:
        self.text = text

    def produce(self, environment: Mapping[str, Any], source_class: type | None = None) -> str:
        return self.text

    def __repr__(self) -> str:
        return f"CustomBanner({self.text!r})"


class ResourceBanner:
    """Banner read from a text file, with ${placeholder} substitution.

    A relative location is looked up next to the module defining
    `source_class`, then in the current working directory.

    Besides any environment key, these placeholders are available:
        app.name, app.title, app.version, app.formatted-version,
        appstart.version, appstart.formatted-version, python.version
    """

    def __init__(self, location: str | Path, charset: str = "utf-8") -> None:
        self.location = str(location)
        self.charset = charset

    def __repr__(self) -> str:
        return f"ResourceBanner({self.location!r})"

    def candidates(self, source_class: type | None) -> list[Path]:
        path = Path(self.location).expanduser()
        if path.is_absolute():
            return [path]

        paths: list[Path] = []
        module_dir = _module_dir(source_class)
        if module_dir is not None:
            paths.append(module_dir / path)
        paths.append(Path.cwd() / path)
        return paths

    def resolve(self, source_class: type | None) -> Path | None:
        """First candidate path that exists as a file, or None."""
        for path in self.candidates(source_class):
            if path.is_file():
                return path
        return None

    def exists(self, source_class: type | None) -> bool:
        return self.resolve(source_class) is not None

    def produce(self, environment: Mapping[str, Any], source_class: type | None = None) -> str:
        path = self.resolve(source_class)
        if path is None:
            raise ResourceUnavailableError(self.location)

        try:
            text = path.read_text(encoding=self.charset)
        except (OSError, UnicodeDecodeError, LookupError) as e:
            raise ResourceUnavailableError(self.location, f"could not be read: {e}") from e

        if not isinstance(environment, Environment):
            environment = Environment(environment)
        return environment.resolve_placeholders(
            text, extra=_version_placeholders(environment, source_class)
        )


def _module_dir(source_class: Any) -> Path | None:
    """Directory of the file defining `source_class` (a class or module)."""
    if source_class is None:
        return None
    try:
        return Path(inspect.getfile(source_class)).resolve().parent
    except (TypeError, OSError):
        # builtins and classes defined interactively have no file
        return None


def _version_placeholders(
    environment: Mapping[str, Any],
    source_class: type | None,
) -> dict[str, str]:
    app_version = str(environment.get("app.version") or "")
    app_name = str(environment.get("app.name") or "")
    fw_version = framework_version()
    values = {
        "app.name": app_name,
        "app.title": app_name or getattr(source_class, "__name__", ""),
        "app.version": app_version,
        "app.formatted-version": _formatted(app_version),
        "appstart.version": fw_version,
        "appstart.formatted-version": _formatted(fw_version),
        "python.version": platform.python_version(),
    }
    return {key: value for key, value in values.items() if value}


def select_banner(
    custom: BannerSource | None,
    environment: Mapping[str, Any],
    source_class: type | None = None,
) -> BannerSource:
    """Pick the banner source for this run.

    Order: the custom banner, then the `banner.location` resource if it
    exists, then the default banner.
    """
    if custom is not None:
        return custom

    location = environment.get("banner.location") or DEFAULT_LOCATION
    charset = environment.get("banner.charset") or "utf-8"
    resource = ResourceBanner(location, charset=charset)
    if resource.exists(source_class):
        logger.debug("Using banner resource %s", resource.resolve(source_class))
        return resource

    return DefaultBanner()
