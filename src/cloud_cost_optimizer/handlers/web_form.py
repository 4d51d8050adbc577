"""
Web Form Lambda Handler.

Serves the resource form, runs analyses and stores the API key preference.
Receives requests via Lambda Function URL.
"""

from __future__ import annotations

import base64
import binascii
import json
from datetime import UTC, datetime
from typing import Any
from urllib.parse import parse_qs

from cloud_cost_optimizer.analysis.pipeline import (
    AnalysisSession,
    OptimizationPipeline,
    SessionState,
)
from cloud_cost_optimizer.analysis.samples import SAMPLE_RESOURCES, sample_resources_json
from cloud_cost_optimizer.config.loader import get_cached_config
from cloud_cost_optimizer.config.schema import Config
from cloud_cost_optimizer.errors import (
    CostOptimizerError,
    InvalidCredentialError,
    MissingCredentialError,
    ParseError,
    ShapeError,
)
from cloud_cost_optimizer.storage.credentials import create_preference_store, resolve_api_key
from cloud_cost_optimizer.storage.preferences import Preferences
from cloud_cost_optimizer.web.formatter import ReportFormatter

# HTTP status for each pipeline failure on the JSON API
ERROR_STATUS: dict[type[CostOptimizerError], int] = {
    ParseError: 400,
    ShapeError: 400,
    MissingCredentialError: 401,
    InvalidCredentialError: 401,
}
DEFAULT_ERROR_STATUS = 502


class WebFormApp:
    """Routes Function URL requests for the web form."""

    def __init__(
        self,
        config: Config,
        preferences: Preferences,
        pipeline: OptimizationPipeline | None = None,
        secrets_client: Any | None = None,
    ):
        """
        Args:
            config: Application configuration.
            preferences: Loaded API key preference.
            pipeline: Analysis pipeline. If None, creates one from config.
            secrets_client: Optional boto3 Secrets Manager client for key fallback.
        """
        self.config = config
        self.preferences = preferences
        self.pipeline = pipeline or OptimizationPipeline(config)
        self.secrets_client = secrets_client
        self.formatter = ReportFormatter()

    def handle(self, event: dict[str, Any]) -> dict[str, Any]:
        """Dispatch one Function URL event to its route."""
        http = event.get("requestContext", {}).get("http", {})
        method = http.get("method", "GET").upper()
        path = event.get("rawPath") or http.get("path") or "/"

        body = event.get("body") or ""
        if event.get("isBase64Encoded"):
            try:
                body = base64.b64decode(body, validate=True).decode("utf-8")
            except (binascii.Error, UnicodeDecodeError) as e:
                print(f"Failed to decode request body: {e}")
                return _error_response(400, "Invalid body encoding")

        print(f"{method} {path}")

        if path == "/" and method == "GET":
            return self._render_page(SessionState(), sample_resources_json())
        if path == "/analyze" and method == "POST":
            return self._analyze_form(body)
        if path == "/api/analyze" and method == "POST":
            return self._analyze_api(body)
        if path == "/api/sample" and method == "GET":
            return _json_response(200, SAMPLE_RESOURCES)
        if path == "/api/api-key" and method == "GET":
            return _json_response(200, {"configured": self.preferences.has_api_key})
        if path == "/api/api-key" and method == "PUT":
            return self._save_api_key_api(body)
        if path == "/api-key" and method == "POST":
            return self._save_api_key_form(body)

        return _error_response(404, f"No route for {method} {path}")

    # =========================================================================
    # Analysis
    # =========================================================================

    def _api_key(self) -> str | None:
        """Resolve the API key, treating an unreadable secret as no key."""
        try:
            return resolve_api_key(self.preferences, self.config, self.secrets_client)
        except RuntimeError as e:
            print(f"Could not resolve API key: {e}")
            return None

    def _new_session(self) -> AnalysisSession:
        return AnalysisSession(
            self.pipeline, discard_superseded=self.config.session.discard_superseded
        )

    def _analyze_form(self, body: str) -> dict[str, Any]:
        """Run an analysis from the HTML form and render the page."""
        form = parse_qs(body, keep_blank_values=True)
        resources_text = form.get("resources", [""])[0]

        session = self._new_session()
        session.run(resources_text, self._api_key())
        return self._render_page(session.state, resources_text)

    def _analyze_api(self, body: str) -> dict[str, Any]:
        """Run an analysis from a JSON request and return the report as JSON."""
        try:
            payload = json.loads(body or "{}")
        except json.JSONDecodeError as e:
            print(f"Failed to parse JSON body: {e}")
            return _error_response(400, "Invalid JSON")
        if not isinstance(payload, dict):
            return _error_response(400, "Request body must be a JSON object")

        resources = payload.get("resources", "")
        if not isinstance(resources, str):
            resources = json.dumps(resources)
        api_key = payload.get("api_key")
        if api_key is not None and not isinstance(api_key, str):
            return _error_response(400, "api_key must be a string")
        api_key = api_key or self._api_key()

        try:
            report = self.pipeline.analyze(resources, api_key)
        except CostOptimizerError as e:
            status = ERROR_STATUS.get(type(e), DEFAULT_ERROR_STATUS)
            print(f"Analysis failed with {e.error_type}")
            return _json_response(
                status, {"error": {"type": e.error_type, "message": e.user_message}}
            )

        return _json_response(200, report.to_api_dict())

    # =========================================================================
    # API key preference
    # =========================================================================

    def _save_api_key_api(self, body: str) -> dict[str, Any]:
        try:
            payload = json.loads(body or "{}")
        except json.JSONDecodeError:
            return _error_response(400, "Invalid JSON")
        api_key = payload.get("api_key") if isinstance(payload, dict) else None
        if not isinstance(api_key, str):
            return _error_response(400, "api_key must be a string")

        self.preferences.set_api_key(api_key)
        print(f"API key preference {'saved' if self.preferences.has_api_key else 'cleared'}")
        return _json_response(200, {"configured": self.preferences.has_api_key})

    def _save_api_key_form(self, body: str) -> dict[str, Any]:
        form = parse_qs(body, keep_blank_values=True)
        self.preferences.set_api_key(form.get("api_key", [""])[0])
        print(f"API key preference {'saved' if self.preferences.has_api_key else 'cleared'}")
        return {"statusCode": 303, "headers": {"Location": "/"}, "body": ""}

    def _render_page(self, state: SessionState, resources_text: str) -> dict[str, Any]:
        return {
            "statusCode": 200,
            "headers": {"Content-Type": "text/html; charset=utf-8"},
            "body": self.formatter.format_page(
                state, resources_text, self.preferences.has_api_key
            ),
        }


_APP: WebFormApp | None = None


def _get_app() -> WebFormApp:
    """Build the app once per container; preferences load at startup."""
    global _APP
    if _APP is None:
        config = get_cached_config()
        preferences = Preferences(
            create_preference_store(config),
            api_key_name=config.credentials.preference_key,
        ).load()
        _APP = WebFormApp(config, preferences)
    return _APP


def handler(event: dict[str, Any], context: Any) -> dict[str, Any]:
    """
    Lambda handler for the web form.

    Environment variables:
    - PREFERENCES_TABLE: DynamoDB table for the API key preference
    - LLM_API_KEY_SECRET: Optional Secrets Manager secret with {provider}_api_key
    - LLM_PROVIDER: gemini, anthropic or openai
    - CONFIG_ENV: Deployment environment (dev/staging/prod)

    Args:
        event: Lambda Function URL event.
        context: Lambda context.

    Returns:
        HTTP response dict with statusCode, headers and body.
    """
    print(f"Web form handler invoked at {datetime.now(UTC).isoformat()}")
    return _get_app().handle(event)


def _json_response(status_code: int, payload: Any) -> dict[str, Any]:
    return {
        "statusCode": status_code,
        "headers": {"Content-Type": "application/json"},
        "body": json.dumps(payload),
    }


def _error_response(status_code: int, message: str) -> dict[str, Any]:
    """Build an error response."""
    return _json_response(status_code, {"error": message})
