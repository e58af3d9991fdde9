"""Core utilities: configuration, logging and the hook system."""
