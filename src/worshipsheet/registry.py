from .exceptions import UnsupportedSourceError
from .sources.api import ApiSongSource
from .sources.base import SongSource
from .sources.local import LocalSongSource

_SOURCES: list[type[SongSource]] = [
    ApiSongSource,
    LocalSongSource,
]


def get_source(location: str) -> SongSource:
    """Return an instantiated song source for *location*.

    Raises UnsupportedSourceError if no source matches.
    """
    if location:
        for cls in _SOURCES:
            if cls.can_handle(location):
                return cls(location)
    raise UnsupportedSourceError(location)
