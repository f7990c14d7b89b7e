"""Domain entities and pure helpers (no filesystem access)."""
