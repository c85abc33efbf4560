# /modules/_mod_MOVARY.py
from __future__ import annotations

__VERSION__ = "0.2.0"

from dataclasses import dataclass
from typing import Callable, Optional

import requests

from _auth_helper import movary_request_token
from _config import AppConfig
from _logging import log as default_root_log
from _watchlist import fetch_last_added

from ._mod_base import FetchResult, FetchStatus, Logger


@dataclass(frozen=True)
class ModuleInfo:
    name: str
    version: str = __VERSION__
    description: str = ""


SessionFactory = Callable[[], requests.Session]


class MovaryModule:
    """
    Stateless Authenticate -> Fetch pipeline.
    One instance serves every request; each run() uses its own HTTP session.
    """
    info = ModuleInfo(
        name="MOVARY",
        description="Newest movie on a Movary watchlist",
    )

    def __init__(
        self,
        config: AppConfig,
        logger: Optional[Logger] = None,
        session_factory: Optional[SessionFactory] = None,
    ) -> None:
        self.cfg = config
        self.log = logger or default_root_log.child(self.info.name)
        self._session_factory = session_factory or requests.Session

    def validate_config(self) -> bool:
        """Warn about unset required variables; requests still run and degrade to 'no data'."""
        missing = self.cfg.missing()
        if missing:
            self.log.warn("Missing environment variables: " + ", ".join(missing))
            return False
        return True

    def run(self) -> FetchResult:
        session = self._session_factory()
        try:
            return self._run(session)
        except Exception as e:
            self.log.error(f"Pipeline failed: {type(e).__name__}: {e}")
            return FetchResult(FetchStatus.FAILED, reason=f"{type(e).__name__}: {e}")
        finally:
            close = getattr(session, "close", None)
            if callable(close):
                close()

    def _run(self, session: requests.Session) -> FetchResult:
        token = movary_request_token(self.cfg, session=session, log=self.log.child("AUTH"))
        if not token:
            self.log.info("Failed to obtain a token. Skipping movie data fetch.")
            return FetchResult(FetchStatus.NO_TOKEN, reason="no token")

        entry = fetch_last_added(self.cfg, token, session=session, log=self.log.child("WATCHLIST"))
        if entry is None:
            return FetchResult(FetchStatus.NO_ENTRY, reason="no entry")
        if entry.movie is None:
            self.log.warn("Newest watchlist entry has no movie object.")
            return FetchResult(FetchStatus.NO_ENTRY, entry=entry, reason="entry without movie")

        self.log.debug(f"newest watchlist movie: {entry.movie.title!r} (added {entry.added_at})")
        return FetchResult(FetchStatus.OK, entry=entry)
