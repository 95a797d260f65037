"""
Locale Data Module

Loads locale tables (month names, weekday names, time zones) from YAML files
shipped under ``datesynth/data/locales`` and answers dotted-key lookups such
as ``"date.month.wide"`` or ``"address.time_zone"``.

Lookups fall back to the ``en`` tables when the requested locale does not
define a key.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional
import logging

import yaml

logger = logging.getLogger(__name__)

LOCALES_DIR = Path(__file__).parent / "data" / "locales"
DEFAULT_LOCALE = "en"


class LocaleDataError(KeyError):
    """Raised when a locale or a locale key cannot be resolved"""

    def __str__(self) -> str:
        # KeyError repr-quotes its message
        return str(self.args[0]) if self.args else ""


def available_locales(locales_dir: Optional[Path] = None) -> List[str]:
    """List locale names with a data file"""
    directory = Path(locales_dir) if locales_dir else LOCALES_DIR
    return sorted(path.stem for path in directory.glob("*.yaml"))


def _load_tables(locale: str, locales_dir: Path) -> Dict[str, Any]:
    filepath = locales_dir / f"{locale}.yaml"

    if not filepath.exists():
        raise LocaleDataError(
            f"Locale '{locale}' not found. Available: {', '.join(available_locales(locales_dir))}"
        )

    with open(filepath, 'r', encoding='utf-8') as f:
        tables = yaml.safe_load(f) or {}

    logger.debug(f"Loaded locale tables: {filepath}")
    return tables


def _walk(tables: Dict[str, Any], key: str) -> Any:
    node: Any = tables
    for part in key.split("."):
        if not isinstance(node, dict) or part not in node:
            return None
        node = node[part]
    return node


class LocaleData:
    """
    Locale data provider

    Features:
    - Dotted-key lookups over nested tables
    - Fallback locale for keys the primary locale lacks
    - Non-throwing key probe for capability detection
    """

    def __init__(
        self,
        locale: str = DEFAULT_LOCALE,
        fallback: Optional[str] = DEFAULT_LOCALE,
        locales_dir: Optional[Path] = None
    ):
        """
        Initialize locale data

        Args:
            locale: Locale name (e.g. 'en', 'ru')
            fallback: Locale consulted for missing keys (None to disable)
            locales_dir: Directory containing <locale>.yaml files
        """
        directory = Path(locales_dir) if locales_dir else LOCALES_DIR

        self.locale = locale
        self.fallback = fallback if fallback != locale else None
        self._tables = _load_tables(locale, directory)
        self._fallback_tables = (
            _load_tables(self.fallback, directory) if self.fallback else {}
        )

    @classmethod
    def from_dict(
        cls,
        tables: Dict[str, Any],
        locale: str = "custom",
        fallback_tables: Optional[Dict[str, Any]] = None
    ) -> "LocaleData":
        """
        Build a provider from in-memory tables

        Args:
            tables: Nested locale tables
            locale: Name reported for the locale
            fallback_tables: Optional tables used for missing keys
        """
        instance = cls.__new__(cls)
        instance.locale = locale
        instance.fallback = "custom-fallback" if fallback_tables else None
        instance._tables = tables
        instance._fallback_tables = fallback_tables or {}
        return instance

    def has_key(self, key: str, include_fallback: bool = True) -> bool:
        """
        Check whether a key resolves to a value

        Args:
            key: Dotted key, e.g. 'date.month.wide_context'
            include_fallback: Also consult the fallback locale

        Returns:
            True if the key is defined
        """
        if _walk(self._tables, key) is not None:
            return True
        if include_fallback and self._fallback_tables:
            return _walk(self._fallback_tables, key) is not None
        return False

    def get(self, key: str) -> List[str]:
        """
        Get the ordered list stored under a key

        Args:
            key: Dotted key, e.g. 'date.month.wide'

        Returns:
            Non-empty list of strings
        """
        value = _walk(self._tables, key)
        if value is None and self._fallback_tables:
            value = _walk(self._fallback_tables, key)

        if not value:
            raise LocaleDataError(
                f"Locale '{self.locale}' has no entries for key '{key}'"
            )

        if not isinstance(value, list):
            raise LocaleDataError(
                f"Locale key '{key}' is not a list (got {type(value).__name__})"
            )

        return value

    def __repr__(self) -> str:
        return f"LocaleData(locale={self.locale!r}, fallback={self.fallback!r})"
