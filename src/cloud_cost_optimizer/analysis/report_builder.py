"""Aggregate recommendations into the report shown to the user."""

from __future__ import annotations

from cloud_cost_optimizer.analysis.models import (
    OptimizationRecommendation,
    OptimizationReport,
    RecommendationCard,
    format_currency,
)


def total_savings(recommendations: list[OptimizationRecommendation]) -> float:
    """Sum of estimated monthly savings, unrounded."""
    return sum((r.estimated_monthly_savings for r in recommendations), 0.0)


def build_card(recommendation: OptimizationRecommendation) -> RecommendationCard:
    """Map one recommendation to its display card."""
    level = recommendation.confidence_level
    return RecommendationCard(
        resource_id=recommendation.resource_id,
        issue=recommendation.issue,
        recommendation=recommendation.recommendation,
        savings_display=format_currency(recommendation.estimated_monthly_savings),
        confidence=recommendation.confidence,
        confidence_style=level.value.lower() if level else "unknown",
    )


def build_report(recommendations: list[OptimizationRecommendation]) -> OptimizationReport:
    """
    Build the report for a list of recommendations.

    Order is preserved; every recommendation gets exactly one card.
    """
    return OptimizationReport(
        recommendations=list(recommendations),
        total_savings=total_savings(recommendations),
        cards=[build_card(r) for r in recommendations],
    )
