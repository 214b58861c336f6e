"""
Tests for the script_run tool (scripts.run).
"""
import json
import pytest
import httpx
from unittest.mock import AsyncMock, MagicMock

from lib.errors import AuthError
from tools.script_run import ScriptRunTool


def _request_json(request: httpx.Request) -> dict:
    return json.loads(request.content)


class TestScriptRunRequest:
    """Tests for URL, query, headers and body construction."""

    @pytest.mark.asyncio
    async def test_round_trip_request_shape(self, httpx_mock, oauth, api_responses):
        """Should POST {function, parameters, devMode} to /v1/scripts/X:run"""
        httpx_mock.add_response(json=api_responses["run.success"])

        await ScriptRunTool(oauth)(scriptId="X", functionName="f", parameters=[1, 2])

        request = httpx_mock.get_request()
        assert request.method == "POST"
        assert request.url.host == "script.googleapis.com"
        assert request.url.path == "/v1/scripts/X:run"
        assert _request_json(request) == {"function": "f", "parameters": [1, 2], "devMode": True}

    @pytest.mark.asyncio
    async def test_default_query_and_headers(self, httpx_mock, oauth, api_responses, script_id):
        """Should send alt=json and prettyPrint=true by default, with bearer auth"""
        httpx_mock.add_response(json=api_responses["run.success"])

        await ScriptRunTool(oauth)(scriptId=script_id, functionName="main")

        request = httpx_mock.get_request()
        assert list(request.url.params.multi_items()) == [("alt", "json"), ("prettyPrint", "true")]
        assert request.headers["Authorization"] == "Bearer ya29.test-access-token-0123456789"
        assert request.headers["Content-Type"] == "application/json"
        assert _request_json(request)["parameters"] == []

    @pytest.mark.asyncio
    async def test_display_options_forwarded_auth_params_not(self, httpx_mock, oauth, api_responses):
        """fields/quotaUser go in the query; key/access_token/oauth_token never do"""
        httpx_mock.add_response(json=api_responses["run.success"])

        await ScriptRunTool(oauth)(
            scriptId="X",
            functionName="f",
            fields="done,response",
            quotaUser="user-1",
            prettyPrint=False,
            key="api-key",
            access_token="tok-a",
            oauth_token="tok-b",
        )

        params = list(httpx_mock.get_request().url.params.multi_items())
        assert params == [
            ("fields", "done,response"),
            ("alt", "json"),
            ("prettyPrint", "false"),
            ("quotaUser", "user-1"),
        ]

    @pytest.mark.asyncio
    async def test_dev_mode_false(self, httpx_mock, oauth, api_responses):
        httpx_mock.add_response(json=api_responses["run.success"])

        await ScriptRunTool(oauth)(scriptId="X", functionName="f", devMode=False)

        assert _request_json(httpx_mock.get_request())["devMode"] is False

    @pytest.mark.asyncio
    async def test_dev_mode_string_coerced(self, httpx_mock, oauth, api_responses):
        httpx_mock.add_response(json=api_responses["run.success"])

        await ScriptRunTool(oauth)(scriptId="X", functionName="f", devMode="false")

        assert _request_json(httpx_mock.get_request())["devMode"] is False

    @pytest.mark.asyncio
    async def test_parameters_json_string_decoded(self, httpx_mock, oauth, api_responses):
        """A JSON array passed as a string is sent as an array"""
        httpx_mock.add_response(json=api_responses["run.success"])

        await ScriptRunTool(oauth)(scriptId="X", functionName="f", parameters='[1, "two", {"k": 3}]')

        assert _request_json(httpx_mock.get_request())["parameters"] == [1, "two", {"k": 3}]

    @pytest.mark.asyncio
    async def test_script_id_cannot_add_path_segments(self, httpx_mock, oauth, api_responses):
        httpx_mock.add_response(json=api_responses["run.success"])

        await ScriptRunTool(oauth)(scriptId="a/../b", functionName="f")

        raw_path = httpx_mock.get_request().url.raw_path.split(b"?")[0]
        assert raw_path == b"/v1/scripts/a%2F..%2Fb:run"

    @pytest.mark.asyncio
    async def test_uses_global_helper_when_none_given(self, httpx_mock, global_oauth, api_responses):
        httpx_mock.add_response(json=api_responses["run.success"])

        result = await ScriptRunTool()(scriptId="X", functionName="f")

        assert result == api_responses["run.success"]
        assert httpx_mock.get_request().headers["Authorization"].startswith("Bearer ")


class TestScriptRunResults:
    """Tests for success pass-through and error envelopes."""

    @pytest.mark.asyncio
    async def test_success_body_unmodified(self, httpx_mock, oauth, api_responses, assertions):
        httpx_mock.add_response(json=api_responses["run.success"])

        result = await ScriptRunTool(oauth)(scriptId="X", functionName="f")

        assertions.assert_success(result, api_responses["run.success"])

    @pytest.mark.asyncio
    async def test_script_error_passes_through(self, httpx_mock, oauth, api_responses, assertions):
        """A 200 carrying an execution error is still the raw body"""
        httpx_mock.add_response(json=api_responses["run.script_error"])

        result = await ScriptRunTool(oauth)(scriptId="X", functionName="f")

        assertions.assert_success(result, api_responses["run.script_error"])

    @pytest.mark.asyncio
    async def test_execution_logs_are_logged(self, httpx_mock, oauth, api_responses, capsys):
        httpx_mock.add_response(json=api_responses["run.with_logs"])

        await ScriptRunTool(oauth)(scriptId="X", functionName="f")

        err = capsys.readouterr().err
        assert "Script execution logs:" in err
        assert "line 1" in err

    @pytest.mark.asyncio
    async def test_non_2xx_returns_envelope(self, httpx_mock, oauth, api_responses, assertions):
        """Message is the serialized remote error body"""
        httpx_mock.add_response(status_code=404, json=api_responses["error.404"])

        result = await ScriptRunTool(oauth)(scriptId="X", functionName="f")

        details = assertions.assert_error(result, "API_ERROR")
        assert json.loads(result["message"]) == api_responses["error.404"]
        assert details["status"] == 404
        assert details["scriptId"] == "X"
        assert details["errorType"] == "ApiError"
        assert result["rawError"]["name"] == "ApiError"
        assert "duration" not in details

    @pytest.mark.asyncio
    async def test_non_json_error_body(self, httpx_mock, oauth, assertions):
        httpx_mock.add_response(status_code=500, text="Internal Server Error")

        result = await ScriptRunTool(oauth)(scriptId="X", functionName="f")

        assertions.assert_error(result, "API_ERROR")
        assert json.loads(result["message"]) == {"message": "Internal Server Error"}

    @pytest.mark.asyncio
    async def test_invalid_json_success_body(self, httpx_mock, oauth, assertions):
        httpx_mock.add_response(status_code=200, text="<html>not json</html>")

        result = await ScriptRunTool(oauth)(scriptId="X", functionName="f")

        assertions.assert_error(result, "INVALID_JSON")

    @pytest.mark.asyncio
    async def test_transport_error(self, httpx_mock, oauth, assertions):
        httpx_mock.add_exception(httpx.ConnectError("connection refused"))

        result = await ScriptRunTool(oauth)(scriptId="X", functionName="f")

        details = assertions.assert_error(result, "TRANSPORT_ERROR")
        assert result["message"] == "connection refused"
        assert details["errorType"] == "ConnectError"

    @pytest.mark.asyncio
    async def test_auth_failure_issues_no_request(self, httpx_mock, assertions):
        oauth = MagicMock()
        oauth.get_auth_headers = AsyncMock(side_effect=AuthError("no credentials"))

        result = await ScriptRunTool(oauth)(scriptId="X", functionName="f")

        assertions.assert_error(result, "AUTH_ERROR")
        assert httpx_mock.get_requests() == []


class TestScriptRunValidation:
    """Tests for required fields: no request is issued when one is missing."""

    @pytest.mark.asyncio
    async def test_missing_script_id(self, httpx_mock, oauth, assertions):
        result = await ScriptRunTool(oauth)(functionName="f")

        assertions.assert_error(result, "BAD_REQUEST")
        assert result["message"] == "scriptId is required"
        assert httpx_mock.get_requests() == []

    @pytest.mark.asyncio
    async def test_blank_script_id(self, httpx_mock, oauth, assertions):
        result = await ScriptRunTool(oauth)(scriptId="   ", functionName="f")

        assertions.assert_error(result, "BAD_REQUEST")
        assert httpx_mock.get_requests() == []

    @pytest.mark.asyncio
    async def test_missing_function_name(self, httpx_mock, oauth, assertions):
        result = await ScriptRunTool(oauth)(scriptId="X")

        assertions.assert_error(result, "BAD_REQUEST")
        assert result["message"] == "functionName is required"
        assert httpx_mock.get_requests() == []

    @pytest.mark.asyncio
    async def test_invalid_dev_mode(self, httpx_mock, oauth, assertions):
        result = await ScriptRunTool(oauth)(scriptId="X", functionName="f", devMode="maybe")

        assertions.assert_error(result, "BAD_REQUEST")
        assert httpx_mock.get_requests() == []

    @pytest.mark.asyncio
    async def test_function_alias_accepted(self, httpx_mock, oauth, api_responses):
        httpx_mock.add_response(json=api_responses["run.success"])

        await ScriptRunTool(oauth)(scriptId="X", function="g")

        assert _request_json(httpx_mock.get_request())["function"] == "g"


class TestScriptRunBuilders:
    """Pure request builders."""

    def test_build_body(self):
        body = ScriptRunTool.build_body({"functionName": "f", "parameters": [1, 2], "devMode": True})
        assert body == {"function": "f", "parameters": [1, 2], "devMode": True}

    def test_build_url(self):
        url = ScriptRunTool(MagicMock()).build_url("X")
        assert url == "https://script.googleapis.com/v1/scripts/X:run"

    def test_parse_args_defaults(self):
        params = ScriptRunTool(MagicMock()).parse_args({"scriptId": "X", "functionName": "f"})
        assert params["parameters"] == []
        assert params["devMode"] is True
        assert params["prettyPrint"] is True
        assert params["alt"] == "json"
