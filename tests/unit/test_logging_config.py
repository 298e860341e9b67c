"""Unit tests for logging setup, request-id handling and settings."""

import json
import logging

from mindflow.api.middleware.request_id import resolve_request_id
from mindflow.config import Settings
from mindflow.logging_config import (
    DevFormatter,
    JsonFormatter,
    RequestIdFilter,
    extra_fields,
    request_id_var,
)


def _record(msg="Curriculum generated", **extra):
    record = logging.LogRecord("mindflow.test", logging.INFO, __file__, 1, msg, (), None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestFormatters:

    def test_json_carries_request_id_and_extras(self):
        record = _record(topic="Photosynthesis", upstream_status=429)
        token = request_id_var.set("req-1")
        try:
            RequestIdFilter("MindFlow").filter(record)
        finally:
            request_id_var.reset(token)

        entry = json.loads(JsonFormatter().format(record))
        assert entry["message"] == "Curriculum generated"
        assert entry["service"] == "MindFlow"
        assert entry["request_id"] == "req-1"
        assert entry["topic"] == "Photosynthesis"
        assert entry["upstream_status"] == 429

    def test_json_omits_missing_request_id(self):
        record = _record()
        RequestIdFilter().filter(record)
        assert "request_id" not in json.loads(JsonFormatter().format(record))

    def test_dev_line_appends_extras(self):
        record = _record(topic="Engines")
        line = DevFormatter().format(record)
        assert "req=-" in line
        assert line.endswith("Curriculum generated topic=Engines")

    def test_unserialisable_extra_is_stringified(self):
        assert extra_fields(_record(when=object))["when"] == str(object)


class TestRequestId:

    def test_well_formed_id_is_kept(self):
        assert resolve_request_id("trace-42.a") == "trace-42.a"

    def test_bad_id_is_replaced(self):
        replaced = resolve_request_id("has spaces\nand newlines")
        assert replaced != "has spaces\nand newlines"
        assert len(replaced) == 36

    def test_missing_id_is_generated(self):
        assert resolve_request_id("")


class TestSettings:

    def test_placeholder_key_is_not_configured(self):
        assert not Settings(perplexity_api_key="pplx-your-key-here").ai_configured
        assert not Settings(perplexity_api_key="  ").ai_configured
        assert Settings(perplexity_api_key="pplx-abc123").ai_configured

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("PERPLEXITY_MODEL", "sonar-pro")
        monkeypatch.setenv("UPSTREAM_TIMEOUT_SECONDS", "5")
        settings = Settings()
        assert settings.perplexity_model == "sonar-pro"
        assert settings.upstream_timeout_seconds == 5.0
        assert settings.api_prefix == "/api"
