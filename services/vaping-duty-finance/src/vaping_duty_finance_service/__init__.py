"""Vaping duty finance service."""
