"""
Prompts for the resource optimization task.

The user prompt embeds the validated resource records verbatim so the model
sees exactly what was submitted.
"""

import json
from typing import Any

OPTIMIZATION_FOCUS = """1.  Idle Resources: High idleHoursPerDay.
2.  Over-provisioned Resources: Low cpuUsagePercent or memoryUsagePercent. Suggest downsizing.
3.  Wrong Service Tiers: Consider if a different storage class or database type would be cheaper for the given usage."""


def build_optimization_prompt(resources: list[dict[str, Any]]) -> str:
    """
    Build the prompt asking for cost-saving recommendations.

    Args:
        resources: Validated resource records, in submission order.
    """
    return f"""Analyze the following JSON array of cloud resources. Identify opportunities for cost savings and provide actionable recommendations.
Focus on:
{OPTIMIZATION_FOCUS}

Resource Data:
{json.dumps(resources, indent=2)}
"""
