from unittest import TestCase

import pytest

from ..base import SettingsError
from ..settings import (
    SD_JWT_HASH_ALG,
    SD_JWT_STRICT_DISCLOSURES,
    Settings,
    as_settings,
)


class TestSettings(TestCase):
    def setUp(self):
        self.test_key = "TEST"
        self.test_value = "VALUE"
        self.test_settings = {self.test_key: self.test_value}
        self.test_instance = Settings(self.test_settings)

    def test_settings_init(self):
        """Test settings initialization."""
        for key in self.test_settings:
            assert key in self.test_instance
            assert self.test_instance[key] == self.test_settings[key]
            assert (
                self.test_instance.get_value(self.test_key) == self.test_settings[key]
            )
        with self.assertRaises(KeyError):
            self.test_instance["MISSING"]
        assert len(self.test_instance) == 3

    def test_defaults(self):
        """Test decoder defaults are always present."""
        settings = Settings()
        assert settings.get_str(SD_JWT_HASH_ALG) == "sha-256"
        assert settings.get_bool(SD_JWT_STRICT_DISCLOSURES) is False

        overridden = Settings({SD_JWT_HASH_ALG: "sha-512"})
        assert overridden.get_str(SD_JWT_HASH_ALG) == "sha-512"

    def test_get_formats(self):
        """Test retrieval with formatting."""
        assert "Settings" in str(self.test_instance)
        with pytest.raises(TypeError):
            self.test_instance[0]  # cover wrong type

        settings = Settings({"BOOL": "true", "FALSE": "false", "ZERO": 0, "NUM": 5})
        assert settings.get_bool("BOOL") is True
        assert settings.get_bool("FALSE") is False
        assert settings.get_bool("ZERO") is False
        assert settings.get_bool("MISSING") is None
        assert settings.get_str("NUM") == "5"
        assert settings.get_value("MISSING", "NUM") == 5
        assert settings.get_value("MISSING", default="x") == "x"

    def test_get_bool_rejects_other_values(self):
        """Test a value that is neither true nor false is refused."""
        for value in ("yes", 2, "strict"):
            with pytest.raises(SettingsError) as excinfo:
                Settings({SD_JWT_STRICT_DISCLOSURES: value}).get_bool(
                    SD_JWT_STRICT_DISCLOSURES
                )
            assert SD_JWT_STRICT_DISCLOSURES in str(excinfo.value)

    def test_as_settings(self):
        """Test conversion of plain mappings."""
        assert as_settings(self.test_instance) is self.test_instance
        settings = as_settings({SD_JWT_STRICT_DISCLOSURES: True})
        assert isinstance(settings, Settings)
        assert settings.get_bool(SD_JWT_STRICT_DISCLOSURES) is True
        assert as_settings(None).get_str(SD_JWT_HASH_ALG) == "sha-256"
