"""Cache layer for chart lookups."""

from numberones.application.cache.chart_cache import ChartCache

__all__ = ["ChartCache"]
