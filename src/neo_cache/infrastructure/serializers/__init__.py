"""Cache serializers."""

from .json_serializer import JSONCacheSerializer, serialize, deserialize

__all__ = ["JSONCacheSerializer", "serialize", "deserialize"]
