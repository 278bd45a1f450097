"""Tests for structured log context."""
from agentcrm.core.structured_logging import build_log_context


def test_build_log_context_skips_empty_values():
    assert build_log_context() == {}
    assert build_log_context(route="/contacts", principal_id=None, role="") == {
        "route": "/contacts",
    }


def test_build_log_context_includes_request_fields():
    context = build_log_context(
        principal_id=7,
        role="agent",
        request_id="abc",
        route="/tasks",
        method="POST",
        status_code=201,
    )
    assert context == {
        "principal_id": 7,
        "role": "agent",
        "request_id": "abc",
        "route": "/tasks",
        "method": "POST",
        "status_code": 201,
    }


def test_build_log_context_keeps_zero_principal_id():
    assert build_log_context(principal_id=0) == {"principal_id": 0}
