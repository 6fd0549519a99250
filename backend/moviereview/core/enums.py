from enum import Enum

class SortKey(str, Enum):
    """Sort orders offered by the sort selector"""
    POPULARITY = "popularity.desc"
    RATING = "vote_average.desc"
    RELEASE_DATE = "release_date.desc"
    REVENUE = "revenue.desc"

class Theme(str, Enum):
    DARK = "dark"
    LIGHT = "light"

    @property
    def opposite(self) -> "Theme":
        return Theme.LIGHT if self is Theme.DARK else Theme.DARK

class LoadMode(str, Enum):
    """Which upstream query a load issues"""
    POPULAR = "popular"
    SEARCH = "search"
    FILTERED = "filtered"

class StatusType(str, Enum):
    INFO = "info"
    ERROR = "error"

class StorageKind(str, Enum):
    MEMORY = "memory"
    FILE = "file"
    REDIS = "redis"
