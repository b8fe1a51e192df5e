"""Handle preferences and the layout configuration built from them"""

import copy
from enum import StrEnum, auto
import logging
from typing import Any, Optional

from tablealign.charsets import BoxCharset, CharsetRegistry
from tablealign.utilities import load_dict_from_json

logger = logging.getLogger(__package__)

DEFAULT_PADDING = 16


class PrefKey(StrEnum):
    """Enum class to store preferences keys."""

    TABLE_PADDING = auto()
    TABLE_FULL_HEIGHT_BAR = auto()
    TABLE_DEFAULT_DIALECT = auto()
    TABLE_CHARSETS = auto()


class Preferences:
    """Handle setting/getting/loading/defaulting preferences.

    Call `set_default` to define each preference's default value. Values
    may be loaded from a JSON file; nothing is ever saved back.

    Attributes:
        dict: dictionary of values for prefs.
        defaults: dictionary of values for defaults.
    """

    def __init__(self) -> None:
        """Initialize preferences class."""
        self.dict: dict[PrefKey, Any] = {}
        self.defaults: dict[PrefKey, Any] = {}

    def get(self, key: PrefKey) -> Any:
        """Get preference value using key.

        Args:
            key: Name of preference.

        Returns:
            Preferences value; default for ``key`` if no preference set;
            ``None`` if no default for ``key``.
        """
        return copy.deepcopy(self.dict.get(key, self.defaults.get(key)))

    def set(self, key: PrefKey, value: Any) -> None:
        """Set preference value.

        Args:
            key: Name of preference.
            value: Value for preference.
        """
        # Deepcopy so that later changes to a caller's list don't leak in
        self.dict[key] = copy.deepcopy(value)

    def set_default(self, key: PrefKey, default: Any) -> None:
        """Set default preference value.

        Args:
            key: Name of preference.
            default: Default value for preference.
        """
        self.defaults[key] = default

    def load(self, prefs_file: Optional[str]) -> None:
        """Load dictionary from JSON file, and use PrefKeys
        to store values in preferences dictionary.

        Args:
            prefs_file: Name of JSON file, or None to use defaults only.
        """
        if prefs_file is None:
            return
        if loaded_dict := load_dict_from_json(prefs_file):
            for key, value in loaded_dict.items():
                try:
                    self.dict[PrefKey(key)] = value
                except ValueError:
                    logger.debug(f"'{key}' is not a valid PrefKey - ignored")



def initialize_preferences(prefs: Preferences) -> None:
    """Set default values for all table layout preferences."""
    prefs.set_default(PrefKey.TABLE_PADDING, DEFAULT_PADDING)
    prefs.set_default(PrefKey.TABLE_FULL_HEIGHT_BAR, False)
    prefs.set_default(PrefKey.TABLE_DEFAULT_DIALECT, "markdown")
    # Extra charsets: {name: {"grid": 12 glyphs, "vertical": 1 glyph}}
    prefs.set_default(PrefKey.TABLE_CHARSETS, {})


class LayoutConfig:
    """Plain configuration values threaded into the layout engine.

    Attributes:
        padding: Fixed padding added to every column width.
        full_height_bar: Whether to draw pipe delimiters as full-height rules.
        charsets: Box charsets that box-drawn tables may use.
        default_dialect: Pipe dialect assumed when a table gives no hint,
          either "markdown" or "org".
    """

    def __init__(
        self,
        padding: int = DEFAULT_PADDING,
        full_height_bar: bool = False,
        charsets: Optional[CharsetRegistry] = None,
        default_dialect: str = "markdown",
    ) -> None:
        if padding < 0:
            raise ValueError(f"Padding must not be negative, got {padding}")
        if default_dialect not in ("markdown", "org"):
            raise ValueError(f"Unknown pipe table dialect '{default_dialect}'")
        self.padding = padding
        self.full_height_bar = full_height_bar
        self.charsets = charsets if charsets is not None else CharsetRegistry()
        self.default_dialect = default_dialect

    @classmethod
    def from_preferences(cls, prefs: Preferences) -> "LayoutConfig":
        """Build configuration from the current preference values."""
        registry = CharsetRegistry()
        for name, spec in prefs.get(PrefKey.TABLE_CHARSETS).items():
            try:
                registry.register(BoxCharset(name, spec["grid"], spec["vertical"]))
            except (KeyError, TypeError, ValueError) as exc:
                logger.error(f"Ignoring invalid box charset '{name}': {exc}")
        return cls(
            padding=int(prefs.get(PrefKey.TABLE_PADDING)),
            full_height_bar=bool(prefs.get(PrefKey.TABLE_FULL_HEIGHT_BAR)),
            charsets=registry,
            default_dialect=prefs.get(PrefKey.TABLE_DEFAULT_DIALECT),
        )


preferences = Preferences()
initialize_preferences(preferences)
