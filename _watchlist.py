# _watchlist.py
# Watchlist logic for the Next Feature display: newest Movary watchlist entry only

from __future__ import annotations
from typing import Any, Dict, Mapping, Optional

import requests

from _config import AppConfig
from _logging import log as root_log
from modules._mod_base import Logger, Movie, RecoverableModuleError, WatchlistEntry

UA = "Next-Feature/Watchlist"
MOVARY_WATCHLIST_PATH = "/api/users/{user_id}/watchlist/movies"
MAX_BODY_LOG = 300

# newest first, one item
LAST_ADDED_PARAMS: Dict[str, Any] = {
    "page": 1,
    "limit": 1,
    "sortBy": "addedAt",
    "sortOrder": "desc",
}


def _watchlist_headers(token: str) -> Dict[str, str]:
    return {
        "accept": "application/json",
        "User-Agent": UA,
        "X-Movary-Token": token,
    }

def movary_watchlist_url(cfg: AppConfig) -> str:
    return cfg.api_base + MOVARY_WATCHLIST_PATH.format(user_id=cfg.user_id)

def _get_json(
    session: requests.Session,
    url: str,
    headers: Mapping[str, str],
    params: Mapping[str, Any],
    timeout: Optional[float],
) -> Any:
    r = session.get(url, headers=dict(headers), params=dict(params), timeout=timeout)
    if not 200 <= r.status_code < 300:
        raise RecoverableModuleError(f"HTTP {r.status_code}: {(r.text or '')[:MAX_BODY_LOG]}")
    try:
        return r.json()
    except ValueError:
        raise RecoverableModuleError(f"non-JSON response: {(r.text or '')[:MAX_BODY_LOG]}")


# -------- Normalization --------
def _s(v: Any) -> Optional[str]:
    if v is None:
        return None
    return v if isinstance(v, str) else str(v)

def normalize_movie(raw: Any) -> Optional[Movie]:
    """Map a Movary movie object to Movie; anything but a dict is treated as absent."""
    if not isinstance(raw, dict):
        return None
    return Movie(
        title=_s(raw.get("title")),
        release_date=_s(raw.get("releaseDate")),
        overview=_s(raw.get("overview")),
        poster_path=_s(raw.get("posterPath")),
    )

def normalize_entry(raw: Any) -> Optional[WatchlistEntry]:
    if not isinstance(raw, dict):
        return None
    return WatchlistEntry(movie=normalize_movie(raw.get("movie")), added_at=_s(raw.get("addedAt")))

def first_entry(js: Any, field: str) -> Optional[WatchlistEntry]:
    """First element of the configured list field, normalized; missing/empty list -> None."""
    if not isinstance(js, dict):
        return None
    items = js.get(field)
    if not isinstance(items, list) or not items:
        return None
    return normalize_entry(items[0])


# -------- Public: newest entry --------
def fetch_last_added(
    cfg: AppConfig,
    token: str,
    session: Optional[requests.Session] = None,
    log: Optional[Logger] = None,
) -> Optional[WatchlistEntry]:
    """
    Fetch the most recently added movie on the user's watchlist.
    Returns None when the list is empty or the call fails (failures are logged, not raised).
    """
    lg = log or root_log.child("WATCHLIST")
    s = session or requests.Session()
    try:
        js = _get_json(s, movary_watchlist_url(cfg), _watchlist_headers(token), LAST_ADDED_PARAMS, cfg.http_timeout)
    except RecoverableModuleError as e:
        lg.error("Failed to fetch watchlist data.")
        lg.error(str(e))
        return None
    except Exception as e:
        lg.error("Failed to fetch watchlist data.")
        lg.error(f"{type(e).__name__}: {e}")
        return None
    finally:
        if session is None:
            s.close()

    if not (isinstance(js, dict) and isinstance(js.get(cfg.watchlist_field), list)):
        lg.warn(f"Watchlist response has no '{cfg.watchlist_field}' list (check MOVARY_WATCHLIST_FIELD).")
        return None
    entry = first_entry(js, cfg.watchlist_field)
    if entry is None:
        lg.info("Watchlist is empty.")
    return entry
