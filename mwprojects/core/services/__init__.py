"""Core services — matching, resolution, templates and caching."""
