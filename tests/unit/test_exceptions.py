"""Tests for exceptions."""

from mcp_gocd.exceptions import (
    GoCDApiError,
    GoCDAuthError,
    GoCDError,
    GoCDNotFoundError,
    GoCDWriteDisabledError,
)


def test_api_error():
    e = GoCDApiError(500, "Internal Server Error", "something broke")
    assert e.status_code == 500
    assert e.response is None
    assert "500" in str(e)
    assert "something broke" in str(e)


def test_auth_error_401():
    e = GoCDAuthError(401)
    assert e.status_code == 401
    assert "Unauthorized" in str(e)


def test_auth_error_403():
    e = GoCDAuthError(403)
    assert e.status_code == 403
    assert "Forbidden" in str(e)


def test_not_found_error():
    e = GoCDNotFoundError("pipeline not found")
    assert e.status_code == 404
    assert isinstance(e, GoCDApiError)


def test_write_disabled():
    e = GoCDWriteDisabledError()
    assert isinstance(e, GoCDError)
    assert "GOCD_READ_ONLY" in str(e)
