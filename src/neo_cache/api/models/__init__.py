"""API models."""
