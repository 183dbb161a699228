"""Desktop frontend: pygame window, input mapping and frame driver."""
