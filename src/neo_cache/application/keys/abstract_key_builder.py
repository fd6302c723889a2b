"""Abstract cache key builder.

ONLY key composition - joins namespace, ordered parts and an optional
suffix into a cache key, rejecting blank segments.

Following maximum separation architecture - one file = one purpose.
"""

import logging
import re
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

from ...config.constants import DEFAULT_CACHE_KEY_SEPARATOR
from ...core.exceptions import InvalidKeySegment

logger = logging.getLogger(__name__)

Segment = Union[str, int]

_WHITESPACE = re.compile(r"\s+")


class AbstractCacheKeyBuilder(ABC):
    """Base class for cache key builders.

    Subclasses supply the namespace and the key parts for a payload; the
    base class validates every segment and joins them with the separator.
    Building is deterministic and has no side effects besides logging.
    """

    def build(self, payload: Optional[Mapping[str, Any]] = None, **fields: Any) -> str:
        """Build the full cache key.

        Args:
            payload: Business payload, merged with keyword fields

        Returns:
            Joined cache key

        Raises:
            InvalidKeySegment: If the namespace, a part or the separator is blank
        """
        data: Dict[str, Any] = dict(payload or {})
        data.update(fields)

        segments: List[Any] = [self.get_namespace(data)]
        segments.extend(self.get_key_parts(data))
        suffix = self.get_suffix(data)
        if suffix:
            segments.append(suffix)

        return self._join_segments(segments, data)

    def build_from_segments(self, segments: Sequence[Segment]) -> str:
        """Build a key from arbitrary segments with the same rules."""
        if not segments:
            raise InvalidKeySegment.no_segments()
        return self._join_segments(list(segments), None)

    @abstractmethod
    def get_namespace(self, payload: Dict[str, Any]) -> str:
        """Namespace or key prefix for the payload."""
        ...

    @abstractmethod
    def get_key_parts(self, payload: Dict[str, Any]) -> List[Any]:
        """Ordered key parts for the payload."""
        ...

    def get_suffix(self, payload: Dict[str, Any]) -> Optional[str]:
        return None

    def get_separator(self) -> str:
        return DEFAULT_CACHE_KEY_SEPARATOR

    def _join_segments(self, raw_segments: List[Any], payload: Optional[Dict[str, Any]]) -> str:
        separator = self.get_separator()
        if not separator:
            raise InvalidKeySegment.empty_separator()

        segments = []
        for index, segment in enumerate(raw_segments):
            normalized = self._normalize_segment(segment, index)
            if _WHITESPACE.search(normalized):
                logger.warning(
                    "Cache key segment contains whitespace, stripping it",
                    extra={"segment": normalized, "payload": payload},
                )
                normalized = _WHITESPACE.sub("", normalized)
            segments.append(normalized)

        return separator.join(segments)

    @staticmethod
    def _normalize_segment(segment: Any, index: int) -> str:
        if segment is None:
            raise InvalidKeySegment.empty_segment(index)

        normalized = str(segment).strip()
        if not normalized:
            raise InvalidKeySegment.empty_segment(index)

        return normalized
