"""Configuration base classes."""

from abc import abstractmethod
from typing import Any, Iterator, Mapping, Optional

from ..core.error import BaseError

TRUE_VALUES = (True, 1, "true", "True", "1")
FALSE_VALUES = (False, 0, "false", "False", "0")


class ConfigError(BaseError):
    """A base exception for all configuration errors."""


class SettingsError(ConfigError):
    """A setting is present but cannot be read as the requested type."""


class BaseSettings(Mapping[str, Any]):
    """Read-only mapping of decoder settings with typed getters.

    Subclasses provide `get_value`, iteration and length; indexing and the
    typed getters are built on those.
    """

    @abstractmethod
    def get_value(self, *var_names, default: Optional[Any] = None) -> Any:
        """Return the value of the first of `var_names` that is set, else `default`."""

    @abstractmethod
    def __iter__(self) -> Iterator:
        """Iterate setting names."""

    @abstractmethod
    def __len__(self) -> int:
        """Count the settings."""

    def get_bool(self, *var_names, default: Optional[bool] = None) -> Optional[bool]:
        """Fetch a setting as a boolean.

        Raises:
            SettingsError: If the value reads as neither true nor false

        """
        value = self.get_value(*var_names, default=default)
        if value is None:
            return None
        if value in TRUE_VALUES:
            return True
        if value in FALSE_VALUES:
            return False
        raise SettingsError(f"Setting {var_names[0]} must be a boolean, got {value!r}")

    def get_str(self, *var_names, default: Optional[str] = None) -> Optional[str]:
        """Fetch a setting as a string."""
        value = self.get_value(*var_names, default=default)
        return None if value is None else str(value)

    def __getitem__(self, name):
        if not isinstance(name, str):
            raise TypeError(f"Setting name {name!r} must be a string")
        missing = object()
        value = self.get_value(name, default=missing)
        if value is missing:
            raise KeyError(f"Undefined setting: {name}")
        return value

    def __repr__(self) -> str:
        items = ", ".join(f"{name}={self[name]!r}" for name in self)
        return f"<{self.__class__.__name__}({items})>"
