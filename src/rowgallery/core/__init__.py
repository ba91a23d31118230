"""Pure layout computations."""
