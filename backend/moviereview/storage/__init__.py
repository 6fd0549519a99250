from .backends import MemoryStorage, FileStorage, RedisStorage, create_storage
from .local_store import LocalStore

__all__ = ['MemoryStorage', 'FileStorage', 'RedisStorage', 'create_storage', 'LocalStore']
