"""Persistence: the durable chart cache document."""

from numberones.infrastructure.persistence.chart_store import JsonChartStore

__all__ = ["JsonChartStore"]
