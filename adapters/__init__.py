"""
Adapters package - External service connections.
HTTP clients for Mealie and Instacart, and the Anthropic planning oracle.
"""

from adapters.mealie_client import MealieClient
from adapters.instacart_client import InstacartClient
from adapters.planning_oracle import AnthropicPlanningOracle

__all__ = [
    "MealieClient",
    "InstacartClient",
    "AnthropicPlanningOracle",
]
