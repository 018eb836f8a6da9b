"""Decoder settings and their defaults."""

from typing import Mapping

from .base import BaseSettings

SD_JWT_HASH_ALG = "sd_jwt.hash_alg"
SD_JWT_STRICT_DISCLOSURES = "sd_jwt.strict_disclosures"

DEFAULTS = {
    # used when an SD-JWT payload carries no _sd_alg claim
    SD_JWT_HASH_ALG: "sha-256",
    # reject disclosures that no digest in the payload refers to
    SD_JWT_STRICT_DISCLOSURES: False,
}


class Settings(BaseSettings):
    """Settings held in a private dictionary, seeded with `DEFAULTS`."""

    def __init__(self, values: Mapping[str, object] = None):
        """Initialize a Settings object, overriding the defaults with `values`."""
        self._values = {**DEFAULTS, **(values or {})}

    def get_value(self, *var_names, default=None):
        """Fetch a setting by the first of `var_names` that is defined."""
        for name in var_names:
            if name in self._values:
                return self._values[name]
        return default

    def __contains__(self, name):
        return name in self._values

    def __iter__(self):
        return iter(self._values)

    def __len__(self):
        return len(self._values)


def as_settings(settings: Mapping[str, object] = None) -> BaseSettings:
    """Return `settings` as a `BaseSettings`, filling in defaults for plain mappings."""
    if isinstance(settings, BaseSettings):
        return settings
    return Settings(settings)
