"""Resource validation, response validation and report aggregation."""

from cloud_cost_optimizer.analysis.input_validator import parse_resource_input
from cloud_cost_optimizer.analysis.models import (
    CloudResource,
    Confidence,
    OptimizationRecommendation,
    OptimizationReport,
    RecommendationCard,
    ResourceType,
)
from cloud_cost_optimizer.analysis.pipeline import AnalysisSession, OptimizationPipeline, SessionState
from cloud_cost_optimizer.analysis.report_builder import build_report, total_savings
from cloud_cost_optimizer.analysis.response_parser import parse_recommendations
from cloud_cost_optimizer.analysis.samples import SAMPLE_RESOURCES, sample_resources_json

__all__ = [
    "CloudResource",
    "Confidence",
    "OptimizationRecommendation",
    "OptimizationReport",
    "RecommendationCard",
    "ResourceType",
    "AnalysisSession",
    "OptimizationPipeline",
    "SessionState",
    "SAMPLE_RESOURCES",
    "build_report",
    "parse_recommendations",
    "parse_resource_input",
    "sample_resources_json",
    "total_savings",
]
