"""Application layer: cache snapshot and lookup/backfill services."""
