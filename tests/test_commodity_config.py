import os
import unittest
from unittest.mock import patch

from pydantic import ValidationError

from commodity_gateway.config.settings import Settings
from commodity_gateway.main import build_commodity_service


class TestCommoditySettings(unittest.TestCase):
    def test_empty_env_loads_soft_defaults(self):
        with patch.dict(os.environ, {}, clear=True):
            settings = Settings.from_env()

        self.assertEqual(settings.ALPHAVANTAGE_API_KEY, "")
        self.assertEqual(settings.ALPHAVANTAGE_BASE_URL, "https://www.alphavantage.co/query")
        self.assertEqual(settings.ALPHAVANTAGE_TIMEOUT_SEC, 10.0)
        self.assertEqual(settings.COMMODITY_CORS_ORIGINS, ["*"])
        self.assertEqual(settings.COMMODITY_FETCH_WORKERS, 7)

    def test_api_key_falls_back_to_vite_variable(self):
        with patch.dict(os.environ, {"VITE_ALPHAVANTAGEAPI": "vite-key", "ALPHAVANTAGEAPI": "plain"}, clear=True):
            settings = Settings.from_env()

        self.assertEqual(settings.ALPHAVANTAGE_API_KEY, "vite-key")

    def test_primary_api_key_wins(self):
        env = {"ALPHAVANTAGE_API_KEY": "primary", "VITE_ALPHAVANTAGEAPI": "vite-key"}
        with patch.dict(os.environ, env, clear=True):
            settings = Settings.from_env()

        self.assertEqual(settings.ALPHAVANTAGE_API_KEY, "primary")

    def test_cors_origins_parses_comma_separated_values(self):
        env = {"COMMODITY_CORS_ORIGINS": " https://a.example, https://b.example ,"}
        with patch.dict(os.environ, env, clear=True):
            settings = Settings.from_env()

        self.assertEqual(settings.COMMODITY_CORS_ORIGINS, ["https://a.example", "https://b.example"])

    def test_invalid_timeout_fails_validation(self):
        with patch.dict(os.environ, {"ALPHAVANTAGE_TIMEOUT_SEC": "0"}, clear=True):
            with self.assertRaises(ValidationError):
                Settings.from_env()

    def test_invalid_worker_count_fails_validation(self):
        with patch.dict(os.environ, {"COMMODITY_FETCH_WORKERS": "many"}, clear=True):
            with self.assertRaises(ValidationError):
                Settings.from_env()

    def test_service_is_built_from_settings(self):
        settings = Settings(
            ALPHAVANTAGE_API_KEY="key",
            ALPHAVANTAGE_BASE_URL="https://example.test/query",
            ALPHAVANTAGE_TIMEOUT_SEC=2.5,
            COMMODITY_FETCH_WORKERS=3,
        )

        service = build_commodity_service(settings)

        self.assertTrue(service.has_api_key())
        self.assertEqual(service.max_workers, 3)
        self.assertEqual(service.provider_client.base_url, "https://example.test/query")
        self.assertEqual(service.provider_client.timeout_sec, 2.5)
        self.assertEqual(service.provider_client.api_key, "key")


if __name__ == "__main__":
    unittest.main()
