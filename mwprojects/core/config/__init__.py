"""Configuration — catalog loading and resolver settings."""
