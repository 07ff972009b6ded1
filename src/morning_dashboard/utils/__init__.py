"""Formatting helpers and static content."""
