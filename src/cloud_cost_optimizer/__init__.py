"""
Cloud Cost Optimizer - AI-powered cost recommendations for cloud resources.

A small web form that:
- Validates a JSON inventory of cloud resources
- Asks a generative model for schema-constrained cost-saving recommendations
- Renders the recommendations as cards with the total estimated savings
"""

__version__ = "0.1.0"
