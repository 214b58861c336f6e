"""
Pytest configuration and fixtures for the Apps Script tools tests.

HTTP is mocked with pytest-httpx (`httpx_mock`); OAuth uses a static
token so no refresh request ever leaves the process.
"""
import os
import pytest
from typing import Any
from unittest.mock import patch

# Set test environment variables before importing anything
os.environ.setdefault("LOG_LEVEL", "DEBUG")

from oauth_helper import OAuthHelper, reset_oauth_helper

TEST_SCRIPT_ID = "1i4qaE4iLJRAjcoirYxKjOmHf27U-kXjHBZBEJw_LxFgaJiwWf1REvSxH"
TEST_TOKEN = "ya29.test-access-token-0123456789"


# ========== Response Assertion Helpers ==========

class ResponseAssertions:
    """Helper class for asserting tool result structures."""

    @staticmethod
    def assert_error(result: dict, code: str | None = None) -> dict:
        """Assert result is an error envelope and return its details.

        Args:
            result: The tool result to check
            code: Optional ErrorCode value to verify

        Returns:
            The details dict from the envelope
        """
        assert result.get("error") is True, f"Expected error envelope, got: {result}"
        assert isinstance(result.get("message"), str)
        assert set(result) == {"error", "message", "details", "rawError"}
        assert set(result["rawError"]) == {"name", "stack"}
        details = result["details"]
        if code:
            assert details.get("code") == code, \
                f"Expected error code {code}, got {details.get('code')}"
        return details

    @staticmethod
    def assert_success(result: dict, expected: Any) -> None:
        """Assert result is the remote body, unmodified."""
        assert result == expected, f"Expected pass-through body, got: {result}"


@pytest.fixture
def assertions():
    """Fixture providing result assertion helpers."""
    return ResponseAssertions()


@pytest.fixture
def script_id() -> str:
    return TEST_SCRIPT_ID


@pytest.fixture
def oauth() -> OAuthHelper:
    """OAuthHelper holding a static token."""
    return OAuthHelper(access_token=TEST_TOKEN)


@pytest.fixture
def global_oauth(oauth):
    """Route the global helper (used when a tool gets no helper) to the static one."""
    with patch("core.base_tool.get_oauth_helper", return_value=oauth):
        yield oauth


@pytest.fixture(autouse=True)
def _reset_oauth_singleton():
    reset_oauth_helper()
    yield
    reset_oauth_helper()


@pytest.fixture
def api_responses() -> dict[str, Any]:
    """Predefined Apps Script API response bodies"""
    return {
        "run.success": {
            "done": True,
            "response": {
                "@type": "type.googleapis.com/google.apps.script.v1.ExecutionResponse",
                "result": {"sum": 3},
            },
        },
        "run.with_logs": {
            "done": True,
            "response": {
                "@type": "type.googleapis.com/google.apps.script.v1.ExecutionResponse",
                "result": "ok",
                "executionMetadata": {"log": "line 1\nline 2"},
            },
        },
        "run.script_error": {
            "done": True,
            "error": {
                "code": 3,
                "message": "ScriptError",
                "details": [
                    {
                        "@type": "type.googleapis.com/google.apps.script.v1.ExecutionError",
                        "errorMessage": "TypeError: Cannot read properties of undefined",
                        "errorType": "ScriptError",
                        "scriptStackTraceElements": [{"function": "f", "lineNumber": 3}],
                    }
                ],
            },
        },
        "versions.page1": {
            "versions": [
                {
                    "scriptId": TEST_SCRIPT_ID,
                    "versionNumber": 1,
                    "description": "first",
                    "createTime": "2025-01-01T00:00:00.000Z",
                },
                {
                    "scriptId": TEST_SCRIPT_ID,
                    "versionNumber": 2,
                    "description": "second",
                    "createTime": "2025-02-01T00:00:00.000Z",
                },
            ],
            "nextPageToken": "page-2",
        },
        "versions.empty": {},
        "project": {
            "scriptId": TEST_SCRIPT_ID,
            "title": "Test Project",
            "createTime": "2025-01-01T00:00:00.000Z",
            "updateTime": "2025-03-01T12:00:00.000Z",
        },
        "error.404": {
            "error": {
                "code": 404,
                "message": "Requested entity was not found.",
                "status": "NOT_FOUND",
            }
        },
        "error.403": {
            "error": {
                "code": 403,
                "message": "The caller does not have permission",
                "status": "PERMISSION_DENIED",
            }
        },
    }
