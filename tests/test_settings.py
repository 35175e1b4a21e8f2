from __future__ import annotations

import os
import sys
import tempfile
from pathlib import Path
import unittest
from unittest import mock

PROJECT_ROOT = Path(__file__).resolve().parent.parent
API_CODE_PATH = PROJECT_ROOT / "api-code"
if str(API_CODE_PATH) not in sys.path:
    sys.path.insert(0, str(API_CODE_PATH))

from env_loader import load_local_env
from settings import DEFAULT_CHAT_MODEL, DEFAULT_GATEWAY_API_BASE, Settings


class SettingsTest(unittest.TestCase):
    def test_defaults(self) -> None:
        settings = Settings.model_validate({})

        self.assertEqual(settings.chat_model, DEFAULT_CHAT_MODEL)
        self.assertEqual(settings.ai_gateway_api_base, DEFAULT_GATEWAY_API_BASE)
        self.assertEqual(settings.allowed_origins, ["*"])
        self.assertEqual(settings.allowed_methods, ["POST", "GET", "OPTIONS"])
        self.assertEqual(settings.upstream_timeout_seconds, 600.0)
        self.assertEqual(
            settings.missing_gateway_settings(),
            ["AI_GATEWAY_ACCOUNT_ID", "AI_GATEWAY_ID", "AI_GATEWAY_TOKEN"],
        )

    def test_gateway_config_is_frozen(self) -> None:
        settings = Settings.model_validate(
            {"AI_GATEWAY_ID": "relay-gw", "AI_GATEWAY_TOKEN": "secret-token"}
        )

        config = settings.gateway_config()

        self.assertEqual(config.gateway_id, "relay-gw")
        self.assertEqual(config.gateway_token, "secret-token")
        with self.assertRaises(Exception):
            config.gateway_id = "other"  # type: ignore[misc]
        self.assertEqual(hash(config), hash(settings.gateway_config()))

    def test_upstream_timeout_from_env(self) -> None:
        settings = Settings.model_validate({"UPSTREAM_TIMEOUT_SECONDS": "120"})
        self.assertEqual(settings.upstream_timeout_seconds, 120.0)

    def test_csv_fields_are_trimmed(self) -> None:
        settings = Settings.model_validate(
            {"CORS_ALLOW_ORIGINS": "https://a.test, https://b.test ,", "CORS_ALLOW_METHODS": "post, get"}
        )

        self.assertEqual(settings.allowed_origins, ["https://a.test", "https://b.test"])
        self.assertEqual(settings.allowed_methods, ["POST", "GET"])


class LoadLocalEnvTest(unittest.TestCase):
    def test_loads_file_without_overriding_environment(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            env_path = Path(tmp) / ".env"
            env_path.write_text(
                "# gateway\n"
                "AI_GATEWAY_ID=from-file\n"
                'export AI_GATEWAY_TOKEN="quoted-token"\n'
                "not a pair\n"
                "RELAY_PORT=9100\n"
            )
            with mock.patch.dict(os.environ, {"RELAY_PORT": "9001"}, clear=True):
                with self.assertLogs("chat-relay.env", level="WARNING"):
                    applied = load_local_env(env_path)

                self.assertEqual(applied, 2)
                self.assertEqual(os.environ["AI_GATEWAY_ID"], "from-file")
                self.assertEqual(os.environ["AI_GATEWAY_TOKEN"], "quoted-token")
                self.assertEqual(os.environ["RELAY_PORT"], "9001")

    def test_missing_file_is_ignored(self) -> None:
        self.assertEqual(load_local_env("/nonexistent/.env"), 0)


if __name__ == "__main__":
    unittest.main()
