"""Logging for smartimage."""
