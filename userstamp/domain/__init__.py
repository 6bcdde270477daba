"""Domain layer for user stamping."""
