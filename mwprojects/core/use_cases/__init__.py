"""Use cases — operations composed from core services for the UI layer."""
