"""Application layer for user stamping."""
