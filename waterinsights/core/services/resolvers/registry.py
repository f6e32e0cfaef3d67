"""
Resolver registry - the closed set of insight generators and how often each
one runs.
"""

from dataclasses import dataclass
from datetime import timedelta

from waterinsights.core.ports.data_service import DataService
from waterinsights.core.services.resolvers.base import RecommendationResolver
from waterinsights.core.services.resolvers.insight_a1 import InsightA1Resolver


@dataclass(frozen=True)
class ResolverEntry:
    """A registered resolver type and its generation period."""

    name: str
    resolver_class: type[RecommendationResolver]
    period: timedelta = timedelta(days=1)

    def create(self, data_service: DataService) -> RecommendationResolver:
        return self.resolver_class(data_service)


RESOLVERS: dict[str, ResolverEntry] = {
    "insight-a1": ResolverEntry(
        name="insight-a1",
        resolver_class=InsightA1Resolver,
        period=timedelta(days=1),
    ),
}


def get_resolver(name: str) -> ResolverEntry:
    """Look up a registered resolver, raising KeyError for unknown names."""
    try:
        return RESOLVERS[name]
    except KeyError:
        raise KeyError(f"Unknown resolver '{name}'. Known: {sorted(RESOLVERS)}") from None
