from .aggregation_scenario import AggregationScenario
from .core import eventually

__all__ = [
    "AggregationScenario",
    "eventually",
]
