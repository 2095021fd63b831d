"""Configuration management for commit-presets."""
from pathlib import Path
from typing import Optional
from pydantic import BaseModel, Field
import tomli
import tomli_w
import os
import re

from .models import PresetName

DEFAULT_CONFIG_FILENAME = ".commitpresets.toml"
CONFIG_SECTION = "commitpresets"
SILENT_ENV_VAR = "SILENT"
FALSY_VALUES = ("", "0", "false", "no", "off")


def silence_requested() -> bool:
    """Return True when the SILENT toggle is explicitly set to a falsy value.

    An unset variable, or any other value, keeps the "validation ignored"
    notice enabled.
    """
    value = os.environ.get(SILENT_ENV_VAR)
    if value is None:
        return False
    return value.strip().lower() in FALSY_VALUES


def _is_safe_path(path: str) -> bool:
    """Check if a log path is safe (no path traversal, no system dirs)."""
    if not path:
        return False

    if '..' in Path(path).parts or '\\' in path:
        return False

    if os.path.isabs(path):
        return False

    return True


class Config(BaseModel):
    """Configuration settings for commit-presets.

    Values come from the config file, then environment variables, then
    keyword arguments (highest precedence).
    """

    preset: str = Field(
        default=PresetName.ANGULAR.value,
        description="Preset used when none is given on the command line"
    )

    quiet: bool = Field(
        default=False,
        description="Suppress the 'validation ignored' notice"
    )

    log_file: Optional[str] = Field(
        default=None,
        description="Optional file that receives a copy of every diagnostic"
    )

    @staticmethod
    def _sanitize_string(value: str) -> str:
        """Strip control characters and surrounding whitespace."""
        if not value:
            return value
        value = re.sub(r'[\x00-\x08\x0B\x0C\x0E-\x1F\x7F]', '', value)
        return value.strip()

    @classmethod
    def load(cls, config_dir: Path) -> 'Config':
        """Load configuration from the config file.

        Args:
            config_dir: Directory holding the config file

        Returns:
            Config: Configuration object with values from file or defaults
        """
        config_path = config_dir / DEFAULT_CONFIG_FILENAME

        if not config_path.exists():
            return cls()

        try:
            with config_path.open('rb') as f:
                config_data = tomli.load(f)
        except (OSError, tomli.TOMLDecodeError) as e:
            print(f"Warning: Error reading config file: {e}")
            return cls()

        section = config_data.get(CONFIG_SECTION, config_data)
        values = {}
        for key in ('preset', 'log_file'):
            if isinstance(section.get(key), str):
                values[key] = cls._sanitize_string(section[key])
        if isinstance(section.get('quiet'), bool):
            values['quiet'] = section['quiet']

        if values.get('log_file') and not _is_safe_path(values['log_file']):
            print(f"Warning: Unsafe log file path '{values['log_file']}', ignoring it")
            values['log_file'] = None

        return cls(_file_values=values)

    def save(self, config_dir: Path) -> Path:
        """Save configuration to the config file.

        Args:
            config_dir: Directory that will hold the config file

        Returns:
            Path: The written config file
        """
        config_path = config_dir / DEFAULT_CONFIG_FILENAME
        config_dict = {k: v for k, v in self.model_dump().items() if v is not None}

        with config_path.open('wb') as f:
            tomli_w.dump({CONFIG_SECTION: config_dict}, f)
        return config_path

    def get_log_file(self) -> Optional[Path]:
        """Get the path to the diagnostics log file, if one is configured."""
        if not self.log_file:
            return None
        if not _is_safe_path(self.log_file):
            print(f"Warning: Unsafe log file path '{self.log_file}', ignoring it")
            return None
        return Path(self.log_file)

    def __init__(self, _file_values: Optional[dict] = None, **data):
        """Initialize config with environment variable support and sanitization."""
        env_data = {}

        env_mapping = {
            'COMMIT_PRESETS_PRESET': 'preset',
            'COMMIT_PRESETS_LOG_FILE': 'log_file',
        }

        for env_var, field_name in env_mapping.items():
            if env_var in os.environ:
                env_data[field_name] = self._sanitize_string(os.environ[env_var])

        if silence_requested():
            env_data['quiet'] = True

        merged_data = {**(_file_values or {}), **env_data, **data}

        super().__init__(**merged_data)
