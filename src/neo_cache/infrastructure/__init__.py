"""Cache engine infrastructure: clients, locks, notifications, serializers and loaders."""
