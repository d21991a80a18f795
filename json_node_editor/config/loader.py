"""Configuration loader for JSON Node Editor."""

import os
import re
import yaml
from pathlib import Path
from typing import Dict, Any, Optional
from pydantic import ValidationError
from dotenv import load_dotenv

from .models import EditorConfig


ENV_PREFIX = "JSON_EDITOR_"
_ENV_REFERENCE = re.compile(r"\$\{([^}]+)\}")


class ConfigurationError(Exception):
    """Raised when configuration loading or validation fails."""
    pass


class ConfigLoader:
    """Loads and validates configuration from a YAML file, a .env file and the environment."""

    def __init__(self, config_file: Optional[str] = None, env_file: Optional[str] = None):
        """Both paths are relative to the working directory unless absolute."""
        self.config_file = config_file or "config.yaml"
        self.env_file = env_file or ".env"

        self._load_env_file()

    def _load_env_file(self) -> None:
        """Load the .env file, falling back to one beside the config file."""
        for candidate in (Path(self.env_file), Path(self.config_file).parent / ".env"):
            if candidate.exists():
                load_dotenv(candidate)
                return

    def load_config(self) -> EditorConfig:
        """Load configuration from the YAML file and environment variables.

        Environment variables take precedence over the file.

        Returns:
            EditorConfig: Validated editor configuration

        Raises:
            ConfigurationError: If configuration loading or validation fails
        """
        try:
            config_data: Dict[str, Any] = {}

            yaml_config = self._load_yaml_config()
            if yaml_config:
                config_data.update(yaml_config)

            config_data.update(self._load_env_config())

            return EditorConfig(**config_data)

        except ValidationError as e:
            error_details = self._format_validation_errors(e)
            raise ConfigurationError(f"Configuration validation failed:\n{error_details}")
        except ConfigurationError:
            raise
        except Exception as e:
            raise ConfigurationError(f"Failed to load configuration: {str(e)}")

    def _load_yaml_config(self) -> Optional[Dict[str, Any]]:
        """Load configuration from YAML file.

        Returns:
            Dict containing YAML configuration or None if file doesn't exist
        """
        config_path = Path(self.config_file)
        if not config_path.exists():
            return None

        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                content = self._substitute_env_vars(f.read())
                data = yaml.safe_load(content) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in {self.config_file}: {str(e)}")
        except OSError as e:
            raise ConfigurationError(f"Failed to read {self.config_file}: {str(e)}")

        if not isinstance(data, dict):
            raise ConfigurationError(f"Top level of {self.config_file} must be a mapping")
        return data

    def _load_env_config(self) -> Dict[str, Any]:
        """Collect JSON_EDITOR_* environment variables as config fields.

        JSON_EDITOR_INDENT=4 becomes {"indent": 4}.
        """
        config = {}
        for key, value in os.environ.items():
            if key.startswith(ENV_PREFIX) and len(key) > len(ENV_PREFIX):
                config[key[len(ENV_PREFIX):].lower()] = self._convert_env_value(value)
        return config

    def _convert_env_value(self, value: str) -> Any:
        """Read "true"/"false" as bools and numeric strings as numbers."""
        lowered = value.strip().lower()
        if lowered in ('true', 'false'):
            return lowered == 'true'

        for convert in (int, float):
            try:
                return convert(value)
            except ValueError:
                continue
        return value

    def _substitute_env_vars(self, content: str) -> str:
        """Expand ${NAME} and ${NAME:-default} references in YAML text.

        Unset variables without a default are left as written.
        """
        def replace_var(match):
            name, has_default, default = match.group(1).partition(':-')
            value = os.getenv(name.strip())
            if value is not None:
                return value
            return default.strip() if has_default else match.group(0)

        return _ENV_REFERENCE.sub(replace_var, content)

    def _format_validation_errors(self, error: ValidationError) -> str:
        """One indented "field: message" line per pydantic error."""
        return "\n".join(
            f"  {' -> '.join(str(loc) for loc in err['loc'])}: {err['msg']}"
            for err in error.errors()
        )


def load_config(config_file: Optional[str] = None, env_file: Optional[str] = None) -> EditorConfig:
    """Load the editor configuration, raising ConfigurationError when it is invalid."""
    return ConfigLoader(config_file, env_file).load_config()
