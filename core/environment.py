"""Read-only view of configuration values, keyed by dotted names.

Banners read from it (application name and version, or any config value
referenced by a ${placeholder} in a banner resource).
"""

from __future__ import annotations

import os
import re
from collections.abc import Iterator, Mapping
from typing import Any

from core.config import AppConfig

_PLACEHOLDER = re.compile(r"\$\{([^}:]+)(?::([^}]*))?\}")


def _flatten(data: Mapping[str, Any], prefix: str = "") -> dict[str, Any]:
    """Flatten nested dicts into dotted keys: {"app": {"name": x}} -> {"app.name": x}."""
    flat: dict[str, Any] = {}
    for key, value in data.items():
        dotted = f"{prefix}{key}"
        if isinstance(value, Mapping):
            flat.update(_flatten(value, prefix=f"{dotted}."))
        else:
            flat[dotted] = value
    return flat


def _env_var_name(key: str) -> str:
    """'app.name' -> 'APP_NAME'."""
    return re.sub(r"[.\-]", "_", key).upper()


class Environment(Mapping[str, Any]):
    """Immutable mapping of config values.

    Keys come from the validated config plus explicit overrides. get() also
    falls back to process environment variables, first by exact name, then
    by the upper-cased underscore form (`app.version` -> `APP_VERSION`).
    Iteration only covers the config keys.
    """

    def __init__(self, values: Mapping[str, Any] | None = None) -> None:
        self._values: dict[str, Any] = dict(values or {})

    @classmethod
    def from_config(
        cls,
        config: AppConfig,
        overrides: Mapping[str, Any] | None = None,
    ) -> Environment:
        values = _flatten(config.model_dump(mode="json"))
        values.update(overrides or {})
        return cls(values)

    def __getitem__(self, key: str) -> Any:
        if key in self._values:
            return self._values[key]
        for name in (key, _env_var_name(key)):
            if name in os.environ:
                return os.environ[name]
        raise KeyError(key)

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, str):
            return False
        try:
            self[key]
        except KeyError:
            return False
        return True

    def __repr__(self) -> str:
        return f"Environment({self._values!r})"

    def resolve_placeholders(
        self,
        text: str,
        extra: Mapping[str, Any] | None = None,
    ) -> str:
        """Replace ${key} and ${key:default} references in `text`.

        `extra` takes precedence over the environment. An empty value uses
        the default when one is given. Placeholders that cannot be resolved
        and have no default are left as they are.
        """
        extra = extra or {}

        def replacer(match: re.Match) -> str:
            key, default = match.group(1).strip(), match.group(2)
            if key in extra and extra[key] is not None:
                return str(extra[key])
            value = self.get(key)
            if value is not None and value != "":
                return str(value)
            if default is not None:
                return default
            if value is not None:
                return str(value)
            return match.group(0)

        return _PLACEHOLDER.sub(replacer, text)
