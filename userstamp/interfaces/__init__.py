"""Integrations with host application frameworks."""
