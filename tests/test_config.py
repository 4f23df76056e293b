"""Unit tests for nas_api.core.config: defaults and validators."""

import unittest
from pathlib import Path

from pydantic import SecretStr, ValidationError

from nas_api.core.config import Settings


def _settings(**overrides: object) -> Settings:
    return Settings(_env_file=None, **overrides)


class TestDefaults(unittest.TestCase):
    def test_session_and_bootstrap_defaults(self) -> None:
        settings = _settings()
        self.assertEqual(settings.SESSION_TTL_HOURS, 24)
        self.assertEqual(settings.API_V1_PREFIX, "/api/v1")
        self.assertEqual(settings.STORAGE_ROOT, Path("/srv/nas"))
        self.assertTrue(settings.uses_default_admin_password)

    def test_cors_origins_split(self) -> None:
        settings = _settings(CORS_ORIGINS="http://a.test, http://b.test,")
        self.assertEqual(settings.cors_origins, ["http://a.test", "http://b.test"])

    def test_rotated_password_detected(self) -> None:
        settings = _settings(BOOTSTRAP_ADMIN_PASSWORD=SecretStr("rotated-secret"))
        self.assertFalse(settings.uses_default_admin_password)

    def test_log_level_normalized(self) -> None:
        self.assertEqual(_settings(LOG_LEVEL="debug").LOG_LEVEL, "DEBUG")


class TestValidators(unittest.TestCase):
    def test_session_ttl_bounds(self) -> None:
        with self.assertRaises(ValidationError):
            _settings(SESSION_TTL_HOURS=0)
        with self.assertRaises(ValidationError):
            _settings(SESSION_TTL_HOURS=169)

    def test_sweep_interval(self) -> None:
        self.assertEqual(_settings(SESSION_SWEEP_INTERVAL_SEC=0).SESSION_SWEEP_INTERVAL_SEC, 0)
        with self.assertRaises(ValidationError):
            _settings(SESSION_SWEEP_INTERVAL_SEC=5)

    def test_bcrypt_rounds_bounds(self) -> None:
        with self.assertRaises(ValidationError):
            _settings(BCRYPT_ROUNDS=3)
        with self.assertRaises(ValidationError):
            _settings(BCRYPT_ROUNDS=17)

    def test_bootstrap_password_non_empty(self) -> None:
        with self.assertRaises(ValidationError):
            _settings(BOOTSTRAP_ADMIN_PASSWORD=SecretStr("  "))

    def test_api_prefix_shape(self) -> None:
        with self.assertRaises(ValidationError):
            _settings(API_V1_PREFIX="api/v1")
        with self.assertRaises(ValidationError):
            _settings(API_V1_PREFIX="/api/v1/")

    def test_log_level_must_exist(self) -> None:
        with self.assertRaises(ValidationError):
            _settings(LOG_LEVEL="LOUD")

    def test_max_upload_bytes_positive(self) -> None:
        with self.assertRaises(ValidationError):
            _settings(MAX_UPLOAD_BYTES=0)
