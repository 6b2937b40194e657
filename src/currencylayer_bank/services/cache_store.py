from __future__ import annotations

import os
from pathlib import Path
from typing import Callable, Protocol, Union, runtime_checkable


class CurrencylayerBankError(Exception):
    pass


class InvalidCache(CurrencylayerBankError):
    def __init__(self, message: str = "Cache target is not writable", *, target: object | None = None) -> None:
        super().__init__(message)
        self.target = target


@runtime_checkable
class RateCacheStore(Protocol):
    def read(self) -> str | None: ...

    def write(self, text: str) -> None: ...


CacheHook = Callable[[Union[str, None]], Union[str, None]]
CacheTarget = Union[None, str, os.PathLike, CacheHook, RateCacheStore]


class NullCacheStore(RateCacheStore):
    def read(self) -> str | None:
        return None

    def write(self, text: str) -> None:
        return None


class FileCacheStore(RateCacheStore):
    def __init__(self, path: str | os.PathLike[str]) -> None:
        self.path = Path(path)

    def read(self) -> str | None:
        if not self.path.is_file():
            return None
        # Undecodable bytes become replacement characters and fail JSON parsing downstream.
        return self.path.read_bytes().decode("utf-8", errors="replace")

    def write(self, text: str) -> None:
        # The parent directory is not created; an unusable target must surface.
        try:
            with self.path.open("w", encoding="utf-8") as handle:
                handle.write(text)
        except OSError as exc:
            raise InvalidCache(f"Cannot write rates cache to {self.path}", target=self.path) from exc

    def __repr__(self) -> str:
        return f"FileCacheStore({str(self.path)!r})"


class CallbackCacheStore(RateCacheStore):
    """Delegates to a single hook: ``hook(None)`` reads, ``hook(text)`` writes.

    The hook owns any locking needed when several banks share it.
    """

    def __init__(self, hook: CacheHook) -> None:
        self.hook = hook

    def read(self) -> str | None:
        value = self.hook(None)
        if value is None:
            return None
        if isinstance(value, bytes):
            return value.decode("utf-8", errors="replace")
        return str(value)

    def write(self, text: str) -> None:
        self.hook(text)


class InMemoryCacheStore(RateCacheStore):
    """Process-local store meant to be passed to several banks; last writer wins."""

    def __init__(self, initial: str | None = None) -> None:
        self._text = initial
        self.writes = 0

    def read(self) -> str | None:
        return self._text

    def write(self, text: str) -> None:
        self._text = text
        self.writes += 1


def build_cache_store(target: CacheTarget) -> RateCacheStore:
    if target is None:
        return NullCacheStore()
    if isinstance(target, (str, os.PathLike)):
        return FileCacheStore(target)
    if isinstance(target, RateCacheStore):
        return target
    if callable(target):
        return CallbackCacheStore(target)
    msg = f"Unsupported cache target {type(target).__name__}; expected a path, a callable or a RateCacheStore"
    raise TypeError(msg)


__all__ = [
    "CacheHook",
    "CacheTarget",
    "CallbackCacheStore",
    "CurrencylayerBankError",
    "FileCacheStore",
    "InMemoryCacheStore",
    "InvalidCache",
    "NullCacheStore",
    "RateCacheStore",
    "build_cache_store",
]
