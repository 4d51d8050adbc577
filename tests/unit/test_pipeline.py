"""Tests for the analysis pipeline and session state."""

import threading

import pytest

from cloud_cost_optimizer.analysis.models import OptimizationReport
from cloud_cost_optimizer.analysis.pipeline import AnalysisSession, OptimizationPipeline
from cloud_cost_optimizer.analysis.report_builder import build_report
from cloud_cost_optimizer.analysis.response_parser import parse_recommendations
from cloud_cost_optimizer.config.schema import Config
from cloud_cost_optimizer.errors import (
    AnalysisFailedError,
    InvalidCredentialError,
    InvalidResponseError,
    MissingCredentialError,
    ParseError,
    ShapeError,
)
from cloud_cost_optimizer.llm.errors import LLMProviderError


def report_for(resource_id: str, savings: float) -> OptimizationReport:
    """Helper to build a one-card report."""
    return build_report(
        parse_recommendations(
            f'[{{"resourceId": "{resource_id}", "issue": "Idle", "recommendation": "Stop",'
            f' "estimatedMonthlySavings": {savings}, "confidence": "LOW"}}]'
        )
    )


class TestOptimizationPipeline:
    """Tests for OptimizationPipeline.analyze."""

    def test_scenario(self, config, fake_provider, scenario_input, scenario_response):
        """Test the single-VM scenario end to end."""
        fake_provider.content = scenario_response
        report = OptimizationPipeline(config).analyze(scenario_input, "test-key")

        assert [card.resource_id for card in report.cards] == ["x"]
        assert report.formatted_total == "$12.50"
        assert '"cpuUsagePercent": 2' in fake_provider.calls[0]["messages"][1].content

    def test_invalid_json_never_reaches_provider(self, config, fake_provider):
        """Test 'not json' is rejected before any network call or key use."""
        with pytest.raises(ParseError):
            OptimizationPipeline(config).analyze("not json", "test-key")
        assert fake_provider.calls == []
        assert fake_provider.api_keys == []

    def test_empty_array_never_reaches_provider(self, config, fake_provider):
        """Test an empty array is rejected before any network call."""
        with pytest.raises(ShapeError):
            OptimizationPipeline(config).analyze("[]", "test-key")
        assert fake_provider.calls == []

    def test_missing_credential(self, config, fake_provider, scenario_input):
        """Test a valid input without a key fails before dispatch."""
        with pytest.raises(MissingCredentialError):
            OptimizationPipeline(config).analyze(scenario_input, None)
        assert fake_provider.calls == []

    def test_blank_reply(self, config, fake_provider, scenario_input):
        """Test a blank reply gives an empty report."""
        fake_provider.content = "  "
        report = OptimizationPipeline(config).analyze(scenario_input, "test-key")
        assert report.is_empty
        assert report.formatted_total == "$0.00"

    def test_invalid_reply(self, config, fake_provider, scenario_input):
        """Test a non-JSON reply raises InvalidResponseError."""
        fake_provider.content = "I could not analyze these resources."
        with pytest.raises(InvalidResponseError):
            OptimizationPipeline(config).analyze(scenario_input, "test-key")

    def test_credential_rejection(self, config, fake_provider, scenario_input):
        """Test a rejected key is reported distinctly."""
        fake_provider.error = LLMProviderError("API key not valid", "gemini", status_code=400)
        with pytest.raises(InvalidCredentialError):
            OptimizationPipeline(config).analyze(scenario_input, "bad-key")

    def test_strict_resources(self, fake_provider, scenario_input):
        """Test strict mode rejects records missing required fields."""
        config = Config(validation={"strict_resources": True})
        with pytest.raises(ShapeError):
            OptimizationPipeline(config).analyze(scenario_input, "test-key")
        assert fake_provider.calls == []

    def test_exactly_one_call(self, config, fake_provider, scenario_input):
        """Test each analysis makes one provider call."""
        fake_provider.error = LLMProviderError("overloaded", "gemini", status_code=503)
        pipeline = OptimizationPipeline(config)
        with pytest.raises(AnalysisFailedError):
            pipeline.analyze(scenario_input, "test-key")
        assert len(fake_provider.calls) == 1


class TestAnalysisSession:
    """Tests for AnalysisSession state handling."""

    def test_run_success(self, config, fake_provider, scenario_input, scenario_response):
        """Test a successful run fills the report slots."""
        fake_provider.content = scenario_response
        session = AnalysisSession(OptimizationPipeline(config))

        assert session.run(scenario_input, "test-key") is True
        state = session.state
        assert state.is_loading is False
        assert state.error is None
        assert [r.resource_id for r in state.recommendations] == ["x"]
        assert state.report.formatted_total == "$12.50"

    def test_failure_replaces_prior_report(
        self, config, fake_provider, scenario_input, scenario_response
    ):
        """Test an error replaces an earlier report."""
        fake_provider.content = scenario_response
        session = AnalysisSession(OptimizationPipeline(config))
        session.run(scenario_input, "test-key")

        session.run("not json", "test-key")
        state = session.state
        assert state.recommendations == []
        assert state.report is None
        assert state.error.startswith("Invalid JSON format")

    def test_begin_clears_state(self, config):
        """Test that starting an analysis clears results and sets loading."""
        session = AnalysisSession(OptimizationPipeline(config))
        first = session.begin()
        session.resolve(first, report_for("a", 1))

        session.begin()
        state = session.state
        assert state.is_loading is True
        assert state.recommendations == []
        assert state.error is None

    def test_superseded_result_is_discarded(self, config):
        """Test the later-started analysis wins even if it resolves first."""
        session = AnalysisSession(OptimizationPipeline(config), discard_superseded=True)
        first = session.begin()
        second = session.begin()

        assert session.resolve(second, report_for("second", 2)) is True
        assert session.resolve(first, report_for("first", 1)) is False

        state = session.state
        assert [r.resource_id for r in state.recommendations] == ["second"]
        assert state.is_loading is False

    def test_superseded_does_not_clear_loading(self, config):
        """Test a stale completion leaves the newer analysis loading."""
        session = AnalysisSession(OptimizationPipeline(config))
        first = session.begin()
        session.begin()

        assert session.reject(first, AnalysisFailedError()) is False
        assert session.state.is_loading is True
        assert session.state.error is None

    def test_last_resolution_wins_without_discarding(self, config):
        """Test that without discarding, whichever resolves last is displayed."""
        session = AnalysisSession(OptimizationPipeline(config), discard_superseded=False)
        first = session.begin()
        second = session.begin()

        assert session.resolve(second, report_for("second", 2)) is True
        assert session.resolve(first, report_for("first", 1)) is True

        assert [r.resource_id for r in session.state.recommendations] == ["first"]

    def test_overlapping_runs(self, config):
        """Test two overlapping threaded runs where the first finishes last."""
        first_started = threading.Event()
        release_first = threading.Event()

        class SlowFirstPipeline:
            def analyze(self, raw_text, api_key):
                if raw_text == "first":
                    first_started.set()
                    release_first.wait(timeout=5)
                return report_for(raw_text, 1)

        session = AnalysisSession(SlowFirstPipeline())
        results = {}

        thread = threading.Thread(
            target=lambda: results.setdefault("first", session.run("first", "key"))
        )
        thread.start()
        assert first_started.wait(timeout=5)

        results["second"] = session.run("second", "key")
        release_first.set()
        thread.join(timeout=5)

        assert results == {"first": False, "second": True}
        assert [r.resource_id for r in session.state.recommendations] == ["second"]

    def test_unexpected_error_is_recorded_and_raised(self, config):
        """Test programming errors surface but leave a generic message."""

        class BrokenPipeline:
            def analyze(self, raw_text, api_key):
                raise KeyError("boom")

        session = AnalysisSession(BrokenPipeline())
        with pytest.raises(KeyError):
            session.run("[]", "key")
        assert session.state.is_loading is False
        assert session.state.error == AnalysisFailedError.user_message
