"""LLM prompts for cost optimization."""

from cloud_cost_optimizer.llm.prompts.system_prompt import SYSTEM_PROMPT
from cloud_cost_optimizer.llm.prompts.optimization_prompts import (
    OPTIMIZATION_FOCUS,
    build_optimization_prompt,
)

__all__ = [
    "SYSTEM_PROMPT",
    "OPTIMIZATION_FOCUS",
    "build_optimization_prompt",
]
