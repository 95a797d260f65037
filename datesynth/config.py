"""
Configuration Management Module

Handles loading, validation, and merging of configuration files
with support for presets and user-defined overrides.
"""

import yaml
from pathlib import Path
from typing import Dict, Any, List, Optional, Union
from dataclasses import dataclass, field, asdict, replace
from copy import deepcopy
import logging

logger = logging.getLogger(__name__)


@dataclass
class GenerationConfig:
    """Configuration for data generation parameters"""
    num_rows: int = 1000
    seed: Optional[int] = None
    locale: str = "en"


@dataclass
class TemporalConfig:
    """Default spans used when an entry point is called without one"""
    past_years: int = 1
    future_years: int = 1
    soon_days: int = 1
    recent_days: int = 1
    soon_minutes: int = 1
    recent_minutes: int = 1
    timespan_days: float = 7
    date_format: Optional[str] = None


@dataclass
class Config:
    """Main configuration class combining all sub-configurations"""
    generation: GenerationConfig = field(default_factory=GenerationConfig)
    temporal: TemporalConfig = field(default_factory=TemporalConfig)

    # Column specs for batch generation: {name, method, params, date_format}
    columns: List[Dict[str, Any]] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary"""
        return asdict(self)

    def merge(self, other: 'Config') -> 'Config':
        """
        Merge another configuration into this one (other takes precedence)

        Only fields ``other`` sets away from their defaults are applied, so a
        config built from a partial dict does not reset the base.
        """
        merged = deepcopy(self)

        for key in ['generation', 'temporal']:
            other_config = getattr(other, key)
            merged_config = getattr(merged, key)
            defaults = type(other_config)()

            for field_name, field_value in asdict(other_config).items():
                if field_value is not None and field_value != getattr(defaults, field_name):
                    setattr(merged_config, field_name, field_value)

        if other.columns:
            merged.columns = deepcopy(other.columns)

        return merged

    def apply_overrides(self, overrides: Dict[str, Any]) -> 'Config':
        """
        Copy of this configuration with the keys of ``overrides`` applied

        Unlike :meth:`merge`, a key present in ``overrides`` is applied even
        when its value equals the default.
        """
        merged = deepcopy(self)

        for key in ['generation', 'temporal']:
            section = overrides.get(key) or {}
            setattr(merged, key, replace(getattr(merged, key), **section))

        if 'columns' in overrides:
            merged.columns = deepcopy(list(overrides['columns'] or []))

        return merged


class ConfigLoader:
    """Loads and manages configuration from various sources"""

    def __init__(self, config_dir: Optional[Path] = None):
        """
        Initialize the configuration loader

        Args:
            config_dir: Directory containing preset files
        """
        if config_dir is None:
            self.config_dir = Path(__file__).parent / "data" / "presets"
        else:
            self.config_dir = Path(config_dir)

        self.presets = self._load_presets()

    def _load_presets(self) -> Dict[str, Config]:
        """Load all available preset configurations"""
        presets = {}

        if not self.config_dir.exists():
            logger.warning(f"Config directory not found: {self.config_dir}")
            return presets

        for preset_file in sorted(self.config_dir.glob("*.yaml")):
            preset_name = preset_file.stem
            try:
                presets[preset_name] = self.load_from_file(preset_file)
                logger.debug(f"Loaded preset: {preset_name}")
            except (OSError, TypeError, yaml.YAMLError) as e:
                logger.error(f"Failed to load preset {preset_name}: {e}")

        return presets

    def load_from_file(self, filepath: Union[str, Path]) -> Config:
        """
        Load configuration from a YAML file

        Args:
            filepath: Path to the YAML configuration file

        Returns:
            Config object
        """
        filepath = Path(filepath)

        if not filepath.exists():
            raise FileNotFoundError(f"Configuration file not found: {filepath}")

        with open(filepath, 'r', encoding='utf-8') as f:
            config_dict = yaml.safe_load(f) or {}

        return self._dict_to_config(config_dict)

    def load_from_dict(self, config_dict: Dict[str, Any]) -> Config:
        """
        Load configuration from a dictionary

        Args:
            config_dict: Configuration dictionary

        Returns:
            Config object
        """
        return self._dict_to_config(config_dict)

    def load_preset(self, preset_name: str) -> Config:
        """
        Load a preset configuration by name

        Args:
            preset_name: Name of the preset (e.g., 'default', 'event_log')

        Returns:
            Config object
        """
        if preset_name not in self.presets:
            available = ", ".join(self.presets.keys())
            raise ValueError(f"Preset '{preset_name}' not found. Available: {available}")

        return deepcopy(self.presets[preset_name])

    def _dict_to_config(self, config_dict: Dict[str, Any]) -> Config:
        """Convert dictionary to Config object"""
        config = Config()

        config_mapping = {
            'generation': GenerationConfig,
            'temporal': TemporalConfig,
        }

        for key, config_class in config_mapping.items():
            if config_dict.get(key):
                setattr(config, key, config_class(**config_dict[key]))

        if 'columns' in config_dict:
            config.columns = list(config_dict['columns'] or [])

        return config

    def merge_configs(self, base: Config, override: Union[Config, Dict[str, Any], str]) -> Config:
        """
        Merge configurations with override taking precedence

        Args:
            base: Base configuration
            override: Override configuration (Config object, dict, or preset name)

        Returns:
            Merged Config object
        """
        if isinstance(override, dict):
            return base.apply_overrides(override)
        if isinstance(override, str):
            override = self.load_preset(override)

        return base.merge(override)

    def save_config(self, config: Config, filepath: Union[str, Path]):
        """
        Save configuration to a YAML file

        Args:
            config: Configuration to save
            filepath: Path to save the file
        """
        filepath = Path(filepath)
        filepath.parent.mkdir(parents=True, exist_ok=True)

        with open(filepath, 'w', encoding='utf-8') as f:
            yaml.safe_dump(config.to_dict(), f, default_flow_style=False, sort_keys=False)

        logger.info(f"Configuration saved to: {filepath}")

    def list_presets(self) -> List[str]:
        """Get list of available preset names"""
        return list(self.presets.keys())


class ConfigValidator:
    """Validates configuration parameters"""

    @staticmethod
    def validate(config: Config) -> tuple[bool, List[str]]:
        """
        Validate configuration parameters

        Args:
            config: Configuration to validate

        Returns:
            Tuple of (is_valid, list_of_errors)
        """
        # Imported here: generators import this module
        from .locales import available_locales
        from .generators.temporal import COLUMN_METHODS, REQUIRED_PARAMS

        errors = []

        if config.generation.num_rows <= 0:
            errors.append("num_rows must be positive")

        valid_locales = available_locales()
        if config.generation.locale not in valid_locales:
            errors.append(f"generation.locale must be one of {valid_locales}")

        for name in ['past_years', 'future_years', 'soon_days', 'recent_days',
                     'soon_minutes', 'recent_minutes', 'timespan_days']:
            if getattr(config.temporal, name) < 0:
                errors.append(f"temporal.{name} must not be negative")

        seen = set()
        for i, column in enumerate(config.columns):
            name = column.get('name')
            if not name:
                errors.append(f"columns[{i}]: name is required")
            elif name in seen:
                errors.append(f"columns[{i}]: duplicate column name '{name}'")
            seen.add(name)

            method = column.get('method')
            if method not in COLUMN_METHODS:
                errors.append(f"columns[{i}]: method must be one of {sorted(COLUMN_METHODS)}")

            params = column.get('params') or {}
            if not isinstance(params, dict):
                errors.append(f"columns[{i}]: params must be a mapping")
                continue

            if method in COLUMN_METHODS:
                unknown = set(params) - set(COLUMN_METHODS[method])
                if unknown:
                    errors.append(f"columns[{i}]: unexpected params for '{method}': {sorted(unknown)}")

                missing = [p for p in REQUIRED_PARAMS.get(method, ()) if params.get(p) is None]
                if missing:
                    errors.append(f"columns[{i}]: '{method}' requires params {missing}")

        return len(errors) == 0, errors


# Default configuration instance
def get_default_config() -> Config:
    """Get the default configuration"""
    return Config()
