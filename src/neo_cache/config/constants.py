"""Cache engine constants.

Shared defaults for key naming, double-delete timing and lock leases so the
algorithms never carry magic numbers of their own.
"""

DEFAULT_CACHE_KEY_SEPARATOR = ":"

TENANT_CONFIG_CACHE_DOMAIN = "tenant-config"
TENANT_CONFIG_CACHE_TTL_SECONDS = 300

DEFAULT_DOUBLE_DELETE_DELAY_MS = 100
DEFAULT_REDIS_LOCK_TTL_MS = 1_000

# Lock resource prefixes
INVALIDATION_LOCK_PREFIX = "lock:invalidate"
LOAD_LOCK_PREFIX = "lock:load"

# Notification topics
INVALIDATION_TOPIC = "cache.invalidation"
LOCK_CONTENTION_TOPIC = "cache.lock-contention"
PREFETCH_TOPIC = "cache.prefetch"
