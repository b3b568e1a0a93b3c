"""Utility packages for wayfinder."""
