"""Shared helpers used across reportcard packages."""
