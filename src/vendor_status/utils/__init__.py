"""Utility packages for Vendor Status."""
