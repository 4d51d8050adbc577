"""
The analysis pipeline and the session state it feeds.

Stages run in order: input validation, credential check, one model
request, response validation and aggregation. Any stage failure aborts
the whole invocation with one pipeline error.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Any, Callable

from cloud_cost_optimizer.analysis.input_validator import parse_resource_input
from cloud_cost_optimizer.analysis.models import OptimizationRecommendation, OptimizationReport
from cloud_cost_optimizer.analysis.report_builder import build_report
from cloud_cost_optimizer.analysis.response_parser import parse_recommendations
from cloud_cost_optimizer.config.schema import Config, LLMConfig
from cloud_cost_optimizer.errors import AnalysisFailedError, CostOptimizerError
from cloud_cost_optimizer.llm.client import LLMClient


class OptimizationPipeline:
    """Runs one analysis from raw form text to a rendered report."""

    def __init__(
        self,
        config: Config,
        client_factory: Callable[[LLMConfig, str | None], Any] = LLMClient,
    ):
        """
        Args:
            config: Application configuration.
            client_factory: Builds the request client from (llm_config, api_key).
                Must raise MissingCredentialError for a missing key.
        """
        self.config = config
        self.client_factory = client_factory

    def analyze(self, raw_text: str, api_key: str | None) -> OptimizationReport:
        """
        Analyze the resources described by ``raw_text``.

        Args:
            raw_text: Text expected to hold a JSON array of resources.
            api_key: API key for the model provider.

        Returns:
            The report for the model's recommendations.

        Raises:
            CostOptimizerError: The classified failure of whichever stage failed.
        """
        resources = parse_resource_input(
            raw_text, strict=self.config.validation.strict_resources
        )

        client = self.client_factory(self.config.llm, api_key)
        response_text = client.request_recommendations(resources)

        recommendations = parse_recommendations(
            response_text, enforce_confidence=self.config.validation.enforce_confidence
        )
        print(f"Analysis produced {len(recommendations)} recommendation(s)")
        return build_report(recommendations)


@dataclass
class SessionState:
    """Snapshot of the UI state slots."""

    recommendations: list[OptimizationRecommendation] = field(default_factory=list)
    report: OptimizationReport | None = None
    is_loading: bool = False
    error: str | None = None


class AnalysisSession:
    """
    Transient UI state for a sequence of analyses.

    Each ``begin()`` starts a new generation. With ``discard_superseded``
    only the newest generation may write results, so a slow earlier call
    cannot overwrite a later one. Without it every completion writes and
    the last one to finish wins.
    """

    def __init__(self, pipeline: OptimizationPipeline, discard_superseded: bool = True):
        self.pipeline = pipeline
        self.discard_superseded = discard_superseded
        self._lock = threading.Lock()
        self._generation = 0
        self._state = SessionState()

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def state(self) -> SessionState:
        """Copy of the current state."""
        with self._lock:
            return SessionState(
                recommendations=list(self._state.recommendations),
                report=self._state.report,
                is_loading=self._state.is_loading,
                error=self._state.error,
            )

    def begin(self) -> int:
        """Start an analysis: clear results and error, set loading."""
        with self._lock:
            self._generation += 1
            self._state = SessionState(is_loading=True)
            return self._generation

    def _may_write(self, generation: int) -> bool:
        return not self.discard_superseded or generation == self._generation

    def resolve(self, generation: int, report: OptimizationReport) -> bool:
        """
        Publish a finished report.

        Returns:
            True if the state was updated, False if the result was superseded.
        """
        with self._lock:
            if not self._may_write(generation):
                print(f"Discarding superseded analysis {generation} (current {self._generation})")
                return False
            self._state = SessionState(
                recommendations=list(report.recommendations),
                report=report,
                is_loading=False,
                error=None,
            )
            return True

    def reject(self, generation: int, error: CostOptimizerError) -> bool:
        """
        Publish a failure, replacing any prior report.

        Returns:
            True if the state was updated, False if the failure was superseded.
        """
        with self._lock:
            if not self._may_write(generation):
                print(f"Discarding superseded failure {generation} (current {self._generation})")
                return False
            self._state = SessionState(is_loading=False, error=error.user_message)
            return True

    def run(self, raw_text: str, api_key: str | None) -> bool:
        """
        Run one full analysis and publish its outcome.

        Returns:
            True if this run's outcome is now the displayed state.
        """
        generation = self.begin()
        try:
            report = self.pipeline.analyze(raw_text, api_key)
        except CostOptimizerError as e:
            print(f"Analysis {generation} failed: {e.error_type}")
            return self.reject(generation, e)
        except Exception as e:
            self.reject(generation, AnalysisFailedError(str(e)))
            raise
        return self.resolve(generation, report)
