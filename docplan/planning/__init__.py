"""Documentation build planning: eligibility, links, descriptors and aggregation."""

from .aggregator import PlanAggregator
from .descriptor import BuildDescriptorBuilder, PlanningError
from .eligibility import EligibilityFilter
from .links import LinkResolver
from .ordering import dependency_order, find_stale_links

__all__ = [
    "BuildDescriptorBuilder",
    "EligibilityFilter",
    "LinkResolver",
    "PlanAggregator",
    "PlanningError",
    "dependency_order",
    "find_stale_links",
]
