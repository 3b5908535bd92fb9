"""Core — catalog models, resolvers, configuration and observability."""
