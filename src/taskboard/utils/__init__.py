"""Utility helpers shared across the taskboard package."""
