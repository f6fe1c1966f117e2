"""Infrastructure layer: HTTP, persistence and observability."""
