import io
import json
import os
import tempfile
import unittest

import _fakes  # noqa: F401

from _config import DEFAULT_PORT, AppConfig, load_config
from _logging import Logger
from modules._mod_base import ConfigError


FULL_ENV = {
    "MOVERY_BASE_URL": "http://movary:80",
    "API_CLIENT_STRING": "Client/1.0",
    "USER_EMAIL": "a@b.c",
    "USER_PASSWORD": " secret ",
    "USER_ID": "1",
    "PORT": "8080",
    "NEXT_DT": "2025-09-13T22:00:00.000Z",
}


class TestLoadConfig(unittest.TestCase):
    def test_reads_environment_mapping(self) -> None:
        cfg = load_config(FULL_ENV)
        self.assertEqual(cfg.base_url, "http://movary:80")
        self.assertEqual(cfg.port, 8080)
        self.assertEqual(cfg.password, " secret ")
        self.assertEqual(cfg.next_dt, "2025-09-13T22:00:00.000Z")
        self.assertEqual(cfg.token_field, "authToken")
        self.assertEqual(cfg.watchlist_field, "watchlist")
        self.assertEqual(cfg.missing(), [])
        self.assertEqual(cfg.credentials.client_identifier, "Client/1.0")

    def test_missing_values_degrade_instead_of_failing(self) -> None:
        cfg = load_config({})
        self.assertEqual(cfg.port, DEFAULT_PORT)
        self.assertIsNone(cfg.next_dt)
        self.assertIsNone(cfg.http_timeout)
        self.assertEqual(
            cfg.missing(),
            ["MOVERY_BASE_URL", "API_CLIENT_STRING", "USER_EMAIL", "USER_PASSWORD", "USER_ID"],
        )

    def test_bad_numbers_raise_config_error(self) -> None:
        with self.assertRaises(ConfigError):
            load_config({"PORT": "eighty"})
        with self.assertRaises(ConfigError):
            load_config({"PORT": "70000"})
        with self.assertRaises(ConfigError):
            load_config({"HTTP_TIMEOUT": "soon"})

    def test_response_fields_are_overridable(self) -> None:
        cfg = load_config({"MOVARY_TOKEN_FIELD": "token", "MOVARY_WATCHLIST_FIELD": "data", "HTTP_TIMEOUT": "10"})
        self.assertEqual((cfg.token_field, cfg.watchlist_field, cfg.http_timeout), ("token", "data", 10.0))

    def test_repr_hides_secrets(self) -> None:
        cfg = load_config(FULL_ENV)
        self.assertNotIn("secret", repr(cfg))
        self.assertNotIn("secret", repr(cfg.credentials))
        self.assertIsInstance(cfg, AppConfig)


class TestLogger(unittest.TestCase):
    def test_level_filter_and_module_tag(self) -> None:
        buf = io.StringIO()
        lg = Logger(stream=buf, level="warn", use_color=False, show_time=False).child("AUTH")
        lg.info("hidden")
        lg.error("shown")
        self.assertEqual(buf.getvalue(), "[!] [AUTH] shown\n")

    def test_success_uses_check_tag_at_info_level(self) -> None:
        buf = io.StringIO()
        lg = Logger(stream=buf, level="info", use_color=False, show_time=False)
        lg.success("configured")
        lg.set_level("warn")
        lg.success("hidden")
        self.assertEqual(buf.getvalue(), "[\u2713] configured\n")

    def test_json_sink(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            path = os.path.join(d, "log.jsonl")
            lg = Logger(stream=io.StringIO(), use_color=False)
            lg.configure(level="debug", json_path=path)
            lg.bind(module="WEB")("hello", level="WARN", extra={"port": 3000})
            lg._json_stream.close()
            with open(path, encoding="utf-8") as f:
                rec = json.loads(f.readline())
        self.assertEqual(rec["level"], "warn")
        self.assertEqual(rec["msg"], "hello")
        self.assertEqual(rec["ctx"], {"module": "WEB"})
        self.assertEqual(rec["extra"], {"port": 3000})


if __name__ == "__main__":
    unittest.main()
