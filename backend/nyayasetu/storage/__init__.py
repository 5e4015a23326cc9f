"""Storage backends"""
from .base import Storage
from .filters import AdvocateFilter
from .memory import MemoryStorage
from .mongo import MongoStorage

__all__ = ["Storage", "AdvocateFilter", "MemoryStorage", "MongoStorage"]
