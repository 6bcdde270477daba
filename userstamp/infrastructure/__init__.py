"""SQLAlchemy integration for user stamping."""
