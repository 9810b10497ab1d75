import json
import logging

from chess_coach.core.logging import JsonFormatter, bind_game_id
from chess_coach.main import app
from chess_coach.services.game_analysis import analyze_game
from fastapi.testclient import TestClient

client = TestClient(app)


def test_request_id_headers_and_logs(caplog):
    caplog.set_level(logging.INFO)
    response = client.get(
        "/api/health",
        headers={"X-Request-ID": "req-123", "X-Correlation-ID": "corr-456"},
    )
    assert response.status_code == 200
    assert response.headers["X-Request-ID"] == "req-123"
    assert response.headers["X-Correlation-ID"] == "corr-456"

    matching = [
        record for record in caplog.records if getattr(record, "request_id", None) == "req-123"
    ]
    assert matching


def test_request_id_is_generated_when_missing():
    response = client.get("/api/health")
    request_id = response.headers["X-Request-ID"]
    assert request_id
    assert response.headers["X-Correlation-ID"] == request_id


def test_analysis_logs_carry_game_id(caplog):
    caplog.set_level(logging.DEBUG, logger="chess_coach.analysis")
    analyze_game("1. e4 Zz9 e5", "a", "b", "*", "", "", "game-42", 0)

    events = {getattr(record, "event", None): record for record in caplog.records}
    assert events["analysis.start"].game_id == "game-42"
    assert events["analysis.complete"].game_id == "game-42"
    assert events["analysis.complete"].skipped == 1
    assert events["analysis.token_skipped"].token == "Zz9"


def test_json_formatter_includes_context_and_extra():
    logger = logging.getLogger("chess_coach.test")
    with bind_game_id("game-7"):
        record = logger.makeRecord(
            logger.name,
            logging.INFO,
            __file__,
            1,
            "analysis.start",
            (),
            None,
            extra={"event": "analysis.start", "tokens": 4},
        )

    payload = json.loads(JsonFormatter().format(record))
    assert payload["message"] == "analysis.start"
    assert payload["level"] == "INFO"
    assert payload["logger"] == "chess_coach.test"
    assert payload["game_id"] == "game-7"
    assert payload["event"] == "analysis.start"
    assert payload["tokens"] == 4
