"""Domain entities."""

from numberones.domain.entities.chart_entry import ChartEntry

__all__ = ["ChartEntry"]
