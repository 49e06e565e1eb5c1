"""Configuration management for restructure."""

import os
from pathlib import Path
from typing import Any, Mapping, Optional, get_origin

import yaml
from loguru import logger
from pydantic import ValidationError

from restructure.core.exceptions import ConfigError
from restructure.models.config import RestructureConfig


class ConfigManager:
    """Manages restructure configuration with YAML and environment variable support."""

    CONFIG_FILE_NAME = "restructure.yaml"
    ENV_PREFIX = "RESTRUCTURE_"

    def __init__(
        self,
        config_path: Optional[Path] = None,
        environ: Optional[Mapping[str, str]] = None,
    ):
        """Initialize configuration manager.

        Args:
            config_path: Optional path to configuration file.
                        If not provided, uses ~/.restructure/restructure.yaml
            environ: Environment to read overrides from (defaults to os.environ)
        """
        self.environ = dict(os.environ if environ is None else environ)
        self.base_path = Path(
            self.environ.get("RESTRUCTURE_HOME_DIR", str(Path.home() / ".restructure"))
        )
        self.config_path = config_path or self.base_path / self.CONFIG_FILE_NAME
        self._config: Optional[RestructureConfig] = None

    def load(self) -> RestructureConfig:
        """Load configuration from YAML file and environment variables.

        Configuration precedence:
        1. Default values (from Pydantic models)
        2. YAML file values
        3. Environment variables (highest priority)

        Returns:
            RestructureConfig: Loaded configuration

        Raises:
            ConfigError: If configuration is invalid
        """
        if self._config is not None:
            return self._config

        config_dict: dict[str, Any] = {}

        if self.config_path.exists():
            try:
                config_dict = self._load_yaml()
            except (OSError, yaml.YAMLError) as e:
                raise ConfigError(f"Failed to load configuration from {self.config_path}: {e}") from e

        config_dict = self._apply_environment_variables(config_dict)

        try:
            self._config = RestructureConfig(**config_dict)
        except ValidationError as e:
            raise ConfigError(f"Invalid configuration: {e}") from e

        return self._config

    @property
    def config(self) -> RestructureConfig:
        """Get current configuration (load if necessary)."""
        if self._config is None:
            self._config = self.load()
        return self._config

    @property
    def logs_path(self) -> Path:
        """Directory holding the log files."""
        return self.base_path / "logs"

    def _load_yaml(self) -> dict[str, Any]:
        """Load configuration from YAML file."""
        with self.config_path.open() as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ConfigError(f"Configuration root must be a mapping: {self.config_path}")
        return data

    def _apply_environment_variables(self, config_dict: dict[str, Any]) -> dict[str, Any]:
        """Apply environment variables to configuration.

        Environment variables follow the pattern RESTRUCTURE_<SECTION>_<KEY>,
        where KEY may itself contain underscores.

        Examples:
        - RESTRUCTURE_PROMPTS_ASSUME_YES=true
        - RESTRUCTURE_TOOLS_COMMAND_TIMEOUT=600
        - RESTRUCTURE_LAYOUT_LEGACY_PROJECT=Billing
        """
        sections = set(RestructureConfig.model_fields)

        for env_key, env_value in self.environ.items():
            if not env_key.startswith(self.ENV_PREFIX):
                continue

            parts = env_key[len(self.ENV_PREFIX):].lower().split("_", 1)
            if len(parts) != 2 or parts[0] not in sections:
                continue

            section, key = parts
            current = config_dict.setdefault(section, {})
            if not isinstance(current, dict):
                raise ConfigError(f"Configuration section '{section}' must be a mapping")
            annotation = self._field_annotation(section, key)
            if annotation is None:
                logger.warning(f"Ignoring unknown configuration key {env_key}")
                continue
            current[key] = self._convert_env_value(env_value, annotation)

        return config_dict

    def _field_annotation(self, section: str, key: str) -> Any:
        """Annotation of the target field, or None for an unknown key."""
        section_model = RestructureConfig.model_fields[section].annotation
        field = section_model.model_fields.get(key)
        return field.annotation if field else None

    def _convert_env_value(self, value: str, annotation: Any) -> Any:
        """Convert environment variable string for the target field.

        List fields are split on commas, so a single item still becomes a
        one-element list. Everything else is passed through as a string and
        coerced by pydantic against the field type, which keeps digit-only
        values of string fields intact.
        """
        if get_origin(annotation) is list:
            return [v.strip() for v in value.split(",") if v.strip()]
        return value
