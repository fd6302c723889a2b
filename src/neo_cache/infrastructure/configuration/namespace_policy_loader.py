"""Namespace policy file loader.

ONLY policy hot reload - reads namespace policies from a YAML or JSON file
and pushes them into the registry whenever the file changes.

Following maximum separation architecture - one file = one purpose.
"""

import asyncio
import json
import logging
from pathlib import Path
from typing import Any, List, Optional, Union

import yaml
from pydantic import ValidationError

from ...application.services.cache_namespace_registry import CacheNamespaceRegistry
from ...config.settings import NamespacePolicyConfig

logger = logging.getLogger(__name__)


class NamespacePolicyFileLoader:
    """Loads namespace policies from a file into the registry.

    The file holds either a list of policies or a mapping with a
    ``namespace_policies`` list. A file that fails to parse or validate is
    logged and the previous policy set stays active.
    """

    def __init__(self, file_path: Union[str, Path], registry: CacheNamespaceRegistry):
        self.file_path = Path(file_path)
        self.registry = registry
        self._last_mtime: Optional[float] = None

    def load(self) -> List[NamespacePolicyConfig]:
        """Read and validate policies from the file.

        Raises:
            FileNotFoundError: If the file does not exist
            ValueError: If the format is unsupported or the content malformed
            ValidationError: If a policy fails validation
        """
        if not self.file_path.exists():
            raise FileNotFoundError(f"Namespace policy file not found: {self.file_path}")

        with open(self.file_path, "r", encoding="utf-8") as f:
            suffix = self.file_path.suffix.lower()
            if suffix in [".yaml", ".yml"]:
                data = yaml.safe_load(f)
            elif suffix == ".json":
                data = json.load(f)
            else:
                raise ValueError(f"Unsupported policy file format: {self.file_path.suffix}")

        return [NamespacePolicyConfig.model_validate(item) for item in self._extract_policies(data)]

    def reload_if_changed(self) -> bool:
        """Replace registry policies if the file changed since the last load.

        Returns:
            True when new policies were applied
        """
        try:
            mtime = self.file_path.stat().st_mtime
        except FileNotFoundError:
            logger.warning(f"Namespace policy file {self.file_path} disappeared, keeping current policies")
            return False

        if self._last_mtime is not None and mtime == self._last_mtime:
            return False

        try:
            policies = self.load()
        except (OSError, ValueError, ValidationError, yaml.YAMLError) as e:
            logger.error(f"Failed to reload namespace policies from {self.file_path}: {e}")
            self._last_mtime = mtime
            return False

        self._last_mtime = mtime
        self.registry.replace_policies(policies)
        logger.info(f"Loaded {len(policies)} namespace policies from {self.file_path}")
        return True

    async def watch(self, interval_seconds: float = 5.0) -> None:
        """Poll the file until cancelled."""
        logger.info(f"Watching namespace policy file {self.file_path} every {interval_seconds}s")
        while True:
            self.reload_if_changed()
            await asyncio.sleep(interval_seconds)

    @staticmethod
    def _extract_policies(data: Any) -> List[Any]:
        if data is None:
            return []
        if isinstance(data, dict):
            data = data.get("namespace_policies", [])
        if not isinstance(data, list):
            raise ValueError("Namespace policy file must contain a list of policies")
        return data
