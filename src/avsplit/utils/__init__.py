"""Helpers around external tools."""
