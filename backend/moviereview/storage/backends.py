import json
import logging
import os
import shutil
import tempfile
from typing import Dict, Optional

import redis

from ..core.config import Settings, get_settings
from ..core.enums import StorageKind
from ..core.interfaces import StorageBackend

logger = logging.getLogger(__name__)


class MemoryStorage(StorageBackend):
    """Plain dict, lives as long as the process"""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self.items: Dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> Optional[str]:
        return self.items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self.items[key] = value

    def remove_item(self, key: str) -> None:
        self.items.pop(key, None)


class FileStorage(StorageBackend):
    """One JSON object on disk mapping keys to string values"""

    def __init__(self, path: str):
        self.path = path

    def _load(self) -> Dict[str, str]:
        if not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                content = f.read().strip()
            data = json.loads(content) if content else {}
        except (OSError, ValueError) as e:
            logger.warning(f"Unreadable storage file {self.path}: {str(e)}")
            return {}
        return data if isinstance(data, dict) else {}

    def _save(self, items: Dict[str, str]) -> None:
        """Atomic write through a temp file in the same directory"""
        directory = os.path.dirname(os.path.abspath(self.path))
        os.makedirs(directory, exist_ok=True)
        tmp_fd, tmp_path = tempfile.mkstemp(dir=directory)
        os.close(tmp_fd)
        try:
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(items, f, indent=2, ensure_ascii=False)
            shutil.move(tmp_path, self.path)
        finally:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)

    def get_item(self, key: str) -> Optional[str]:
        value = self._load().get(key)
        return value if isinstance(value, str) else None

    def set_item(self, key: str, value: str) -> None:
        items = self._load()
        items[key] = value
        self._save(items)

    def remove_item(self, key: str) -> None:
        items = self._load()
        if key in items:
            del items[key]
            self._save(items)


class RedisStorage(StorageBackend):
    """Redis string keys under a common prefix"""

    def __init__(self, url: Optional[str] = None, prefix: str = "moviereview:", client=None):
        self.redis = client or redis.Redis.from_url(url or get_settings().REDIS_URL, decode_responses=False)
        self.prefix = prefix

    def _key(self, key: str) -> str:
        return f"{self.prefix}{key}"

    def get_item(self, key: str) -> Optional[str]:
        try:
            data = self.redis.get(self._key(key))
        except redis.RedisError as e:
            logger.error(f"Redis read failed for {key}: {str(e)}")
            return None
        if data is None:
            return None
        if isinstance(data, bytes):
            try:
                return data.decode("utf-8")
            except UnicodeDecodeError:
                return None
        return data

    def set_item(self, key: str, value: str) -> None:
        self.redis.set(self._key(key), value.encode("utf-8"))

    def remove_item(self, key: str) -> None:
        self.redis.delete(self._key(key))


def create_storage(settings: Optional[Settings] = None) -> StorageBackend:
    """Build the backend named by STORAGE_BACKEND"""
    settings = settings or get_settings()
    kind = StorageKind(settings.STORAGE_BACKEND.lower())
    if kind is StorageKind.FILE:
        return FileStorage(settings.STORAGE_PATH)
    if kind is StorageKind.REDIS:
        return RedisStorage(settings.REDIS_URL, prefix=settings.STORAGE_PREFIX)
    return MemoryStorage()
