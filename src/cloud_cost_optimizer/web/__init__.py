"""Browser-facing rendering for Cloud Cost Optimizer."""

from cloud_cost_optimizer.web.formatter import ReportFormatter

__all__ = ["ReportFormatter"]
