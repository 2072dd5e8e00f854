"""Shared infrastructure for the platform services."""
