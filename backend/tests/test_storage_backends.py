"""
Tests for the storage backends behind LocalStore.
"""

import pytest
import redis

from moviereview.storage import FileStorage, LocalStore, MemoryStorage, RedisStorage, create_storage


class FakeRedis:
    def __init__(self):
        self.data = {}

    def get(self, key):
        return self.data.get(key)

    def set(self, key, value):
        self.data[key] = value

    def delete(self, key):
        return 1 if self.data.pop(key, None) is not None else 0


class BrokenRedis(FakeRedis):
    def get(self, key):
        raise redis.ConnectionError("redis is down")


def test_file_storage_persists_across_instances(tmp_path):
    path = tmp_path / "state" / "local_storage.json"
    LocalStore(FileStorage(str(path))).set_watchlist([27205, 155])

    reopened = LocalStore(FileStorage(str(path)))

    assert reopened.get_watchlist() == [27205, 155]
    assert path.exists()


def test_file_storage_remove(tmp_path):
    storage = FileStorage(str(tmp_path / "s.json"))
    storage.set_item("theme", "light")
    storage.remove_item("theme")
    storage.remove_item("missing")
    assert storage.get_item("theme") is None


@pytest.mark.parametrize("content", ["", "{broken", "[1, 2, 3]"])
def test_file_storage_tolerates_corrupt_file(tmp_path, content):
    path = tmp_path / "s.json"
    path.write_text(content)
    storage = FileStorage(str(path))

    assert storage.get_item("watchlist") is None
    storage.set_item("theme", "light")
    assert storage.get_item("theme") == "light"


def test_redis_storage_prefixes_keys():
    fake = FakeRedis()
    storage = RedisStorage(prefix="mr:", client=fake)

    storage.set_item("theme", "light")

    assert fake.data == {"mr:theme": b"light"}
    assert storage.get_item("theme") == "light"
    storage.remove_item("theme")
    assert storage.get_item("theme") is None


def test_redis_read_failure_falls_back_to_defaults():
    store = LocalStore(RedisStorage(client=BrokenRedis()))
    assert store.get_watchlist() == []
    assert store.get_review(1) is None


def test_create_storage_memory(settings):
    assert isinstance(create_storage(settings), MemoryStorage)


def test_create_storage_file(settings, tmp_path):
    configured = settings.model_copy(update={"STORAGE_BACKEND": "file", "STORAGE_PATH": str(tmp_path / "x.json")})
    storage = create_storage(configured)
    assert isinstance(storage, FileStorage)
    assert storage.path == str(tmp_path / "x.json")


def test_create_storage_redis(settings, monkeypatch):
    seen = {}

    def from_url(url, **kwargs):
        seen["url"] = url
        return FakeRedis()

    monkeypatch.setattr(redis.Redis, "from_url", staticmethod(from_url))
    configured = settings.model_copy(update={"STORAGE_BACKEND": "redis", "REDIS_URL": "redis://cache:6379/2"})

    storage = create_storage(configured)

    assert isinstance(storage, RedisStorage)
    assert seen["url"] == "redis://cache:6379/2"
    assert storage.prefix == configured.STORAGE_PREFIX


def test_create_storage_rejects_unknown_backend(settings):
    with pytest.raises(ValueError):
        create_storage(settings.model_copy(update={"STORAGE_BACKEND": "sqlite"}))
