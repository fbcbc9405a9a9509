import logging

import pytest
from fastapi.testclient import TestClient

from wordsearch.lexicon import Lexicon
from wordsearch.server import create_app
from wordsearch.settings import settings

GRID = ["C", "A", "T", "S",
        "R", "E", "P", "O",
        "B", "O", "N", "E",
        "D", "I", "G", "S"]
WORDS = ["CAT", "CATS", "CAR", "CARE", "BONE", "BONES", "DIG", "DIGS", "SING"]


@pytest.fixture
def client(monkeypatch):
    # Keep the module-level settings and logger level untouched between tests
    for name in ("MIN_WORD_LENGTH", "MAX_RESULTS", "MAX_TILES", "INCLUDE_PATHS", "LOG_LEVEL"):
        monkeypatch.setattr(settings, name, getattr(settings, name))
    logger = logging.getLogger("wordsearch")
    level = logger.level
    yield TestClient(create_app(lexicon=Lexicon(WORDS)))
    logger.setLevel(level)


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok", "lexicon_loaded": True, "word_count": len(WORDS)}


def test_solve(client):
    resp = client.post("/solve", json={"tiles": GRID, "min_length": 3})
    assert resp.status_code == 200
    data = resp.json()
    assert data["grid_size"] == 4
    assert data["board"][0] == ["C", "A", "T", "S"]
    assert data["words"] == ["BONE", "BONES", "CAR", "CARE", "CAT", "CATS", "DIG", "DIGS"]
    assert data["word_count"] == 8
    assert data["score"] == 3 + 2 * 4 + 3
    assert data["paths"]["BONES"] == [8, 9, 10, 11, 15]
    assert "total" in data["stage_timings"]


def test_solve_uses_configured_defaults(client, monkeypatch):
    monkeypatch.setattr(settings, "MIN_WORD_LENGTH", 5)
    monkeypatch.setattr(settings, "INCLUDE_PATHS", False)
    data = client.post("/solve", json={"tiles": GRID}).json()
    assert data["min_length"] == 5
    assert data["words"] == ["BONES"]
    assert "paths" not in data


def test_solve_caps_results(client, monkeypatch):
    monkeypatch.setattr(settings, "MAX_RESULTS", 2)
    data = client.post("/solve", json={"tiles": GRID, "min_length": 3}).json()
    assert data["words"] == ["BONE", "BONES"]
    assert data["word_count"] == 8
    assert set(data["paths"]) == {"BONE", "BONES"}


def test_solve_rejects_non_square_board(client):
    resp = client.post("/solve", json={"tiles": ["A", "B", "C"]})
    assert resp.status_code == 400


def test_solve_rejects_bad_min_length(client):
    resp = client.post("/solve", json={"tiles": GRID, "min_length": 0})
    assert resp.status_code == 400


def test_solve_rejects_huge_board(client, monkeypatch):
    monkeypatch.setattr(settings, "MAX_TILES", 9)
    resp = client.post("/solve", json={"tiles": GRID})
    assert resp.status_code == 413


def test_solve_without_lexicon_is_unavailable():
    client = TestClient(create_app(lexicon=Lexicon()))
    assert client.get("/health").json()["lexicon_loaded"] is False
    resp = client.post("/solve", json={"tiles": GRID})
    assert resp.status_code == 503
    resp = client.post("/score", json={"words": ["CAT"], "min_length": 3})
    assert resp.status_code == 503


def test_check(client):
    data = client.post("/check", json={"tiles": GRID, "word": "bones"}).json()
    assert data == {
        "word": "BONES",
        "valid_word": True,
        "valid_prefix": True,
        "on_board": True,
        "path": [8, 9, 10, 11, 15],
    }
    data = client.post("/check", json={"tiles": GRID, "word": "SING"}).json()
    assert data["valid_word"] is True
    assert data["on_board"] is False
    assert data["path"] == []


def test_score(client):
    resp = client.post("/score", json={"words": ["CAT", "BONES"], "min_length": 3})
    assert resp.status_code == 200
    assert resp.json()["score"] == 4


def test_settings_roundtrip(client):
    resp = client.get("/api/settings")
    assert resp.status_code == 200
    assert resp.json()["field_types"]["MAX_RESULTS"] == "int"

    resp = client.post("/api/settings", json={"MAX_RESULTS": 5})
    assert resp.status_code == 200
    assert resp.json()["updated"]["MAX_RESULTS"] == 5
    assert settings.MAX_RESULTS == 5

    resp = client.post("/api/settings", json={"PORT": 1})
    assert resp.status_code == 400
    assert "PORT" in resp.json()["errors"]


def test_settings_log_level_applies_to_logger(client):
    logger = logging.getLogger("wordsearch")
    logger.setLevel(logging.WARNING)
    resp = client.post("/api/settings", json={"LOG_LEVEL": "error"})
    assert resp.status_code == 200
    assert resp.json()["updated"]["LOG_LEVEL"] == "ERROR"
    assert logger.getEffectiveLevel() == logging.ERROR

    resp = client.post("/api/settings", json={"LOG_LEVEL": "LOUD"})
    assert resp.status_code == 400
    assert logger.getEffectiveLevel() == logging.ERROR


def test_removed_debug_setting_is_rejected(client):
    resp = client.post("/api/settings", json={"DEBUG": True})
    assert resp.status_code == 400
    assert "DEBUG" in resp.json()["errors"]


def test_search_endpoints_run_off_the_event_loop():
    import inspect

    application = create_app(lexicon=Lexicon(WORDS))
    endpoints = {route.path: route.endpoint for route in application.routes if hasattr(route, "endpoint")}
    assert not inspect.iscoroutinefunction(endpoints["/solve"])
    assert not inspect.iscoroutinefunction(endpoints["/check"])
