"""Tests for request validation before any Notion call."""

import pytest

from src.config import Settings
from src.tools.validator import RequestRejected, check_method, check_configuration, parse_evaluation


@pytest.mark.parametrize("method", ["GET", "PUT", "DELETE", "OPTIONS"])
def test_check_method_rejects(method):
    with pytest.raises(RequestRejected) as exc_info:
        check_method(method)
    assert exc_info.value.status_code == 405
    assert exc_info.value.body == {"message": "Method Not Allowed"}


def test_check_method_accepts_post():
    check_method("POST")


def test_check_configuration(test_settings):
    check_configuration(test_settings)

    with pytest.raises(RequestRejected) as exc_info:
        check_configuration(Settings(_env_file=None, NOTION_TOKEN="", NOTION_DATABASE_ID="db-1"))
    assert exc_info.value.status_code == 500
    assert exc_info.value.body["status"] == "error"


def test_parse_valid(test_settings, valid_payload):
    evaluation = parse_evaluation(valid_payload, test_settings)

    assert evaluation.inspiration_content == "Build a faster cache"
    assert evaluation.priority_result == "high"
    assert evaluation.suggestion_detail == "Prototype an LRU layer"


def test_parse_ignores_extra_fields(test_settings, valid_payload):
    evaluation = parse_evaluation({**valid_payload, "conversation_id": "abc"}, test_settings)
    assert evaluation.priority_result == "high"


@pytest.mark.parametrize("body", [
    None,
    "plain text",
    ["inspiration_content"],
    {},
    {"inspiration_content": "idea", "priority_result": "high", "suggestion_detail": None},
    {"inspiration_content": "idea", "priority_result": 1, "suggestion_detail": "do it"},
    {"inspiration_content": "", "priority_result": "high", "suggestion_detail": "do it"},
])
def test_parse_rejects_and_echoes(test_settings, body):
    with pytest.raises(RequestRejected) as exc_info:
        parse_evaluation(body, test_settings)

    assert exc_info.value.status_code == 400
    assert exc_info.value.body["received"] == body


def test_strict_priority(valid_payload):
    cfg = Settings(_env_file=None, NOTION_TOKEN="t", NOTION_DATABASE_ID="d", STRICT_PRIORITY=True)

    assert parse_evaluation({**valid_payload, "priority_result": "中"}, cfg).priority_result == "中"
    with pytest.raises(RequestRejected) as exc_info:
        parse_evaluation({**valid_payload, "priority_result": "HIGH"}, cfg)
    assert exc_info.value.status_code == 400
