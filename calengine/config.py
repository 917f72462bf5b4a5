"""
Configuration parser for cmdcal.

Handles TOML file parsing into dataclass sections. Every setting has a
default, so running without a configuration file is fine.
"""

import tomllib
import os
from pathlib import Path
from dataclasses import dataclass, field
from typing import Optional

from .debug import debug_print


def _debug_print(msg: str) -> None:
    debug_print("CONFIG", msg)


@dataclass
class GeneralConfig:
    """General behaviour."""
    auto_decline: bool = False  # Applied when a create command omits --autoDecline


@dataclass
class ExportConfig:
    """Configuration for calendar export."""
    directory: Path = field(default_factory=lambda: Path("."))  # Base for relative file names


@dataclass
class HeadlessConfig:
    """Configuration for batch (headless) runs."""
    halt_on_declined: bool = False  # Also stop on "Failed" results, not just "Error"


def _require_bool(section: str, key: str, value) -> bool:
    if not isinstance(value, bool):
        raise ValueError(f"[{section}] {key} must be true or false, got {value!r}")
    return value


def _require_str(section: str, key: str, value) -> str:
    if not isinstance(value, str) or not value:
        raise ValueError(f"[{section}] {key} must be a non-empty string, got {value!r}")
    return value


@dataclass
class Config:
    """Main configuration container for cmdcal."""

    general: GeneralConfig = field(default_factory=GeneralConfig)
    export: ExportConfig = field(default_factory=ExportConfig)
    headless: HeadlessConfig = field(default_factory=HeadlessConfig)
    source: Optional[Path] = None  # File the settings were read from, if any

    @classmethod
    def get_default_config_path(cls) -> Path:
        """Get the default configuration file path."""
        xdg_config = os.environ.get('XDG_CONFIG_HOME', os.path.expanduser('~/.config'))
        return Path(xdg_config) / 'cmdcal' / 'cmdcal.toml'

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> 'Config':
        """
        Load configuration from a TOML file.

        An explicitly given path must exist. When no path is given and the
        default file is missing, defaults are returned.

        Raises:
            FileNotFoundError: if an explicit config_path does not exist.
            ValueError: if a setting has the wrong type.
            tomllib.TOMLDecodeError: if the file is not valid TOML.
        """
        if config_path is None:
            config_path = cls.get_default_config_path()
            if not config_path.exists():
                _debug_print(f"No configuration at {config_path}, using defaults")
                return cls()

        config_path = Path(config_path)
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        with open(config_path, 'rb') as f:
            data = tomllib.load(f)

        _debug_print(f"TOML data keys: {list(data.keys())}")
        return cls.from_dict(data, source=config_path)

    @classmethod
    def from_dict(cls, data: dict, source: Optional[Path] = None) -> 'Config':
        """Build a Config from already parsed TOML data."""
        # Parse General section
        general_data = data.get('General', {})
        general = GeneralConfig(
            auto_decline=_require_bool(
                'General', 'auto_decline',
                general_data.get('auto_decline', GeneralConfig.auto_decline)
            ),
        )

        # Parse Export section
        export_data = data.get('Export', {})
        directory = export_data.get('directory')
        export = ExportConfig()
        if directory is not None:
            export.directory = Path(os.path.expanduser(_require_str('Export', 'directory', directory)))

        # Parse Headless section
        headless_data = data.get('Headless', {})
        headless = HeadlessConfig(
            halt_on_declined=_require_bool(
                'Headless', 'halt_on_declined',
                headless_data.get('halt_on_declined', HeadlessConfig.halt_on_declined)
            ),
        )

        _debug_print(
            f"auto_decline={general.auto_decline} export_dir={export.directory} "
            f"halt_on_declined={headless.halt_on_declined}"
        )

        return cls(general=general, export=export, headless=headless, source=source)
