"""Cache engine application layer: services, key builders, validators and metrics."""
