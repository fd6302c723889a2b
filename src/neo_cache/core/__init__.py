"""Cache engine core: entities, value objects, events, protocols and exceptions."""
