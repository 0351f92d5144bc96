"""Tests for environment parsing helpers."""
from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from pixel_scores.core import config, database
from pixel_scores.core.time import isoformat_utc


class TestDatabaseUrl:
    def test_defaults_to_local_sqlite(self):
        url = config.normalize_database_url(None)
        assert url.startswith("sqlite:///")
        assert url.endswith("app.db")

    def test_legacy_postgres_scheme_rewritten(self):
        url = config.normalize_database_url("postgres://u:p@db.example:5432/scores")
        assert url == "postgresql://u:p@db.example:5432/scores"

    def test_other_urls_untouched(self):
        assert config.normalize_database_url(" sqlite:///tmp/x.db ") == "sqlite:///tmp/x.db"


class TestOrigins:
    def test_default_is_wildcard(self):
        assert config.parse_origins(None) == ["*"]
        assert config.parse_origins("") == ["*"]

    def test_wildcard_anywhere_wins(self):
        assert config.parse_origins("https://a.example, *") == ["*"]

    def test_list_is_trimmed_and_deduplicated(self):
        raw = "https://a.example, https://b.example,,https://a.example"
        assert config.parse_origins(raw) == ["https://a.example", "https://b.example"]


class TestEnvHelpers:
    def test_env_int(self, monkeypatch):
        monkeypatch.setenv("PIXEL_TEST_INT", "25")
        assert config._env_int("PIXEL_TEST_INT", 10) == 25

    def test_env_int_default_when_blank(self, monkeypatch):
        monkeypatch.setenv("PIXEL_TEST_INT", " ")
        assert config._env_int("PIXEL_TEST_INT", 10) == 10
        monkeypatch.delenv("PIXEL_TEST_INT")
        assert config._env_int("PIXEL_TEST_INT", 10) == 10

    def test_env_int_invalid(self, monkeypatch):
        monkeypatch.setenv("PIXEL_TEST_INT", "ten")
        with pytest.raises(RuntimeError):
            config._env_int("PIXEL_TEST_INT", 10)

    @pytest.mark.parametrize("raw, expected", [("1", True), ("Yes", True), ("off", False)])
    def test_env_bool(self, monkeypatch, raw, expected):
        monkeypatch.setenv("PIXEL_TEST_BOOL", raw)
        assert config._env_bool("PIXEL_TEST_BOOL") is expected


class TestIsoformat:
    def test_naive_treated_as_utc(self):
        assert isoformat_utc(datetime(2026, 3, 1, 12, 0)) == "2026-03-01T12:00:00Z"

    def test_offset_converted(self):
        plus_two = timezone(timedelta(hours=2))
        value = datetime(2026, 3, 1, 14, 0, tzinfo=plus_two)
        assert isoformat_utc(value) == "2026-03-01T12:00:00Z"


class TestBuildEngine:
    def _capture(self, monkeypatch):
        calls = []
        monkeypatch.setattr(
            database, "create_engine", lambda url, **kwargs: calls.append((url, kwargs))
        )
        return calls

    def test_sslmode_passed_to_postgres(self, monkeypatch):
        calls = self._capture(monkeypatch)
        database.build_engine("postgresql://u:p@db.example/scores", sslmode="require")
        [(_, kwargs)] = calls
        assert kwargs["connect_args"] == {"sslmode": "require"}
        assert kwargs["pool_pre_ping"] is True

    def test_url_sslmode_wins(self, monkeypatch):
        calls = self._capture(monkeypatch)
        database.build_engine(
            "postgresql://u:p@db.example/scores?sslmode=disable", sslmode="require"
        )
        [(_, kwargs)] = calls
        assert "connect_args" not in kwargs

    def test_sqlite_ignores_sslmode(self, monkeypatch, tmp_path):
        calls = self._capture(monkeypatch)
        database.build_engine(f"sqlite:///{tmp_path / 'x.db'}", sslmode="require")
        [(_, kwargs)] = calls
        assert kwargs["connect_args"] == {"check_same_thread": False}
