"""Observability — logging setup and in-process metrics."""
