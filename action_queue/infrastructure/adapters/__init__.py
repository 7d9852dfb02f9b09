"""External adapters for the action queue."""
