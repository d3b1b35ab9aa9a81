"""Localizable tool strings.

Descriptions and titles are looked up through a translation function with the
signature ``(key, default) -> str``. Tool factories take one as a parameter so
hosts can swap in their own strings.
"""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Callable
from pathlib import Path

TRANSLATION_ENV_PREFIX = "GITHUB_MCP_"
TRANSLATION_CONFIG_FILENAME = "github-mcp-server-config.json"

TranslationFn = Callable[[str, str], str]

logger = logging.getLogger(__name__)


def null_translation(key: str, default: str) -> str:
    """Return the default text for every key."""
    return default


class TranslationHelper:
    """Resolve strings from the environment, a JSON config file, or defaults."""

    def __init__(
        self,
        config_path: Path | str | None = None,
        *,
        env_prefix: str = TRANSLATION_ENV_PREFIX,
    ) -> None:
        self._config_path = Path(config_path or Path.cwd() / TRANSLATION_CONFIG_FILENAME)
        self._env_prefix = env_prefix
        self._resolved: dict[str, str] = {}
        self._file_values = self._read_config()

    def _read_config(self) -> dict[str, str]:
        """Read upper-cased string entries from the JSON config file."""
        try:
            payload = json.loads(self._config_path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            logger.debug("No translation config at %s", self._config_path)
            return {}
        except (OSError, ValueError) as error:
            logger.warning("Could not read translation config %s: %s", self._config_path, error)
            return {}
        if not isinstance(payload, dict):
            logger.warning("Ignoring translation config %s: expected a JSON object.", self._config_path)
            return {}
        return {
            str(key).upper(): value for key, value in payload.items() if isinstance(value, str)
        }

    def __call__(self, key: str, default: str) -> str:
        normalized_key = key.upper()
        if normalized_key in self._resolved:
            return self._resolved[normalized_key]

        env_value = os.getenv(f"{self._env_prefix}{normalized_key}")
        if env_value is not None:
            value = env_value
        else:
            value = self._file_values.get(normalized_key, default)

        self._resolved[normalized_key] = value
        return value

    @property
    def resolved(self) -> dict[str, str]:
        """Return a copy of every key resolved so far."""
        return dict(self._resolved)

    def dump(self, path: Path | str | None = None) -> Path:
        """Write resolved strings as JSON so they can be edited and reloaded."""
        target = Path(path) if path is not None else self._config_path
        target.write_text(
            json.dumps(self._resolved, indent=2, sort_keys=True) + "\n",
            encoding="utf-8",
        )
        return target
