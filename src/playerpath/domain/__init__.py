"""Domain layer - invitation entities and notification services."""
