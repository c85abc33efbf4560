# /modules/_mod_base.py
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Mapping, Optional, Protocol

# ---------- Logging

class Logger(Protocol):
    def __call__(
        self,
        message: str,
        *,
        level: str = "INFO",
        module: Optional[str] = None,
        extra: Optional[Mapping[str, Any]] = None,
    ) -> None: ...
    def debug(self, *parts: Any, extra: Optional[Mapping[str, Any]] = None) -> None: ...
    def info(self, *parts: Any, extra: Optional[Mapping[str, Any]] = None) -> None: ...
    def warn(self, *parts: Any, extra: Optional[Mapping[str, Any]] = None) -> None: ...
    def error(self, *parts: Any, extra: Optional[Mapping[str, Any]] = None) -> None: ...
    def bind(self, **ctx: Any) -> "Logger": ...
    def child(self, name: str) -> "Logger": ...

# ---------- Movary entities

@dataclass(frozen=True)
class Credentials:
    email: str
    password: str
    client_identifier: str

    def __repr__(self) -> str:
        # keep the password out of logs and tracebacks
        return f"Credentials(email={self.email!r}, client_identifier={self.client_identifier!r})"

@dataclass(frozen=True)
class Movie:
    title: Optional[str] = None
    release_date: Optional[str] = None
    overview: Optional[str] = None
    poster_path: Optional[str] = None

    @property
    def year(self) -> str:
        return self.release_date[:4] if self.release_date else "N/A"

@dataclass(frozen=True)
class WatchlistEntry:
    movie: Optional[Movie]
    added_at: Optional[str] = None

# ---------- Pipeline result

class FetchStatus(Enum):
    OK = auto()
    NO_TOKEN = auto()
    NO_ENTRY = auto()
    FAILED = auto()

@dataclass(frozen=True)
class FetchResult:
    status: FetchStatus
    entry: Optional[WatchlistEntry] = None
    reason: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status is FetchStatus.OK

# ---------- Display state

class DisplayKind(Enum):
    FOUND = auto()
    EMPTY = auto()
    ERROR = auto()

@dataclass(frozen=True)
class DisplayState:
    kind: DisplayKind
    entry: Optional[WatchlistEntry] = None
    message: Optional[str] = None

    @classmethod
    def found(cls, entry: WatchlistEntry) -> "DisplayState":
        return cls(DisplayKind.FOUND, entry=entry)

    @classmethod
    def empty(cls) -> "DisplayState":
        return cls(DisplayKind.EMPTY)

    @classmethod
    def error(cls, message: str) -> "DisplayState":
        return cls(DisplayKind.ERROR, message=message)

    @classmethod
    def from_result(cls, result: FetchResult) -> "DisplayState":
        """
        OK with a movie -> FOUND; NO_TOKEN / NO_ENTRY (or OK without movie) -> EMPTY;
        FAILED -> ERROR.
        """
        if result.status is FetchStatus.FAILED:
            return cls.error(result.reason or "unexpected error")
        entry = result.entry
        if result.ok and entry is not None and entry.movie is not None:
            return cls.found(entry)
        return cls.empty()

# ---------- Errors

class ModuleError(RuntimeError): ...
class RecoverableModuleError(ModuleError): ...
class ConfigError(ModuleError): ...

__all__ = [
    "Logger", "Credentials", "Movie", "WatchlistEntry",
    "FetchStatus", "FetchResult", "DisplayKind", "DisplayState",
    "ModuleError", "RecoverableModuleError", "ConfigError",
]
