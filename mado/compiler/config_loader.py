"""Configuration loader for mado.

Parses configuration files into ``MadoConfig``. Supported sources, in
discovery order:

1. An explicit path (``--config``), TOML or YAML.
2. The ``MADO_CONFIG_PATH`` environment variable.
3. ``mado.toml`` then ``.mado.toml`` in the working directory.
4. ``pyproject.toml`` with a ``[tool.mado]`` table, searched upward.
5. ``$XDG_CONFIG_HOME/mado/mado.toml`` (``~/.config`` when unset).

When nothing is found the built-in defaults are used.
"""

from __future__ import annotations

import os
import re
import tomllib
from pathlib import Path
from typing import Any

import pydantic
import yaml

from mado.core.logging import get_logger
from mado.kernel.config.models import MadoConfig
from mado.kernel.exceptions import ConfigurationError

logger = get_logger(__name__)

CONFIG_FILE_NAMES = ("mado.toml", ".mado.toml")


class ConfigLoader:
    """Finds, reads and validates mado configuration files."""

    ENV_VAR_PATTERN = re.compile(r"\$\{([^}]+)\}")

    def __init__(self, cwd: Path | None = None) -> None:
        self.cwd = cwd or Path.cwd()

    def load(self, path: str | Path | None = None) -> MadoConfig:
        """Load configuration from ``path`` or by discovery.

        Parameters
        ----------
        path : str | Path | None
            Explicit config file. If None, searches using discovery order.

        Returns
        -------
        MadoConfig
            Validated configuration, or defaults when no file is found

        Raises
        ------
        ConfigurationError
            If an explicit file is missing or any file is malformed
        """
        config_path = self.find_config_file(path)
        if config_path is None:
            logger.debug("No configuration file found, using defaults")
            return MadoConfig()
        return self._load_and_parse(config_path)

    def find_config_file(self, path: str | Path | None = None) -> Path | None:
        """Resolve the file to load, or None to use defaults."""
        if path:
            config_path = Path(path)
            if not config_path.is_file():
                raise ConfigurationError(str(config_path), "file not found")
            return config_path

        if env_path := os.getenv("MADO_CONFIG_PATH"):
            config_path = Path(env_path)
            if config_path.is_file():
                logger.debug("Using config from MADO_CONFIG_PATH: {}", config_path)
                return config_path
            logger.warning("MADO_CONFIG_PATH set but file not found: {}", config_path)

        for name in CONFIG_FILE_NAMES:
            candidate = self.cwd / name
            if candidate.is_file():
                return candidate

        current = self.cwd.resolve()
        for directory in (current, *current.parents):
            pyproject = directory / "pyproject.toml"
            if pyproject.is_file() and "mado" in self._read_toml(pyproject).get("tool", {}):
                return pyproject

        xdg_home = os.getenv("XDG_CONFIG_HOME") or str(Path.home() / ".config")
        user_config = Path(xdg_home) / "mado" / "mado.toml"
        if user_config.is_file():
            return user_config

        return None

    def _load_and_parse(self, config_path: Path) -> MadoConfig:
        logger.debug("Loading configuration from {path}", path=config_path)

        if config_path.suffix in (".yaml", ".yml"):
            data = self._read_yaml(config_path)
        else:
            data = self._read_toml(config_path)
            if config_path.name == "pyproject.toml" or "tool" in data:
                data = data.get("tool", {}).get("mado", {})

        return self.parse(self._substitute_env_vars(data), source=str(config_path))

    def parse(self, data: dict[str, Any], source: str = "<config>") -> MadoConfig:
        """Validate already-loaded configuration data."""
        try:
            return MadoConfig.model_validate(data)
        except pydantic.ValidationError as e:
            problems = "; ".join(
                f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
                for error in e.errors()
            )
            raise ConfigurationError(source, problems) from e

    @staticmethod
    def _read_toml(config_path: Path) -> dict[str, Any]:
        try:
            with config_path.open("rb") as f:
                return tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ConfigurationError(str(config_path), f"invalid TOML: {e}") from e
        except OSError as e:
            raise ConfigurationError(str(config_path), e.strerror or str(e)) from e

    @staticmethod
    def _read_yaml(config_path: Path) -> dict[str, Any]:
        try:
            with config_path.open("r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(str(config_path), f"invalid YAML: {e}") from e
        except OSError as e:
            raise ConfigurationError(str(config_path), e.strerror or str(e)) from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigurationError(
                str(config_path), f"expected a mapping, got {type(data).__name__}"
            )
        return data

    def _substitute_env_vars(self, data: Any) -> Any:
        """Recursively replace ``${VAR}`` in string values with the environment value."""
        if isinstance(data, str):

            def replacer(match: re.Match[str]) -> str:
                var_name = match.group(1)
                value = os.environ.get(var_name)
                if value is None:
                    logger.debug(
                        "Environment variable ${{{var_name}}} not found, keeping placeholder",
                        var_name=var_name,
                    )
                    return match.group(0)
                return value

            return self.ENV_VAR_PATTERN.sub(replacer, data)

        if isinstance(data, dict):
            return {key: self._substitute_env_vars(value) for key, value in data.items()}

        if isinstance(data, list):
            return [self._substitute_env_vars(item) for item in data]

        return data


def load_config(path: str | Path | None = None) -> MadoConfig:
    """Load configuration from file or return defaults.

    Parameters
    ----------
    path : str | Path | None
        Path to configuration file or None to search

    Returns
    -------
    MadoConfig
        Loaded configuration or defaults if no file was found
    """
    return ConfigLoader().load(path)
