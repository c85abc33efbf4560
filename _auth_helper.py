#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Auth helper for Movary
- Exchanges email + password for a short-lived API token (POST /api/authentication/token).
- Every page request authenticates again; tokens are never cached.

Requires: requests
"""

from __future__ import annotations
from typing import Any, Dict, Mapping, Optional

import requests

from _config import AppConfig
from _logging import log as root_log
from modules._mod_base import Credentials, Logger, RecoverableModuleError

__VERSION__ = "0.2.0"
UA = f"Next-Feature/{__VERSION__}"

MOVARY_TOKEN_PATH = "/api/authentication/token"
MAX_BODY_LOG = 300


def _auth_headers(client_identifier: str) -> Dict[str, str]:
    return {
        "Content-Type": "application/json",
        "Accept": "application/json",
        "User-Agent": UA,
        "X-Movary-Client": client_identifier,
    }

def _error_body(r: Any) -> str:
    try:
        return (r.text or "")[:MAX_BODY_LOG]
    except Exception:
        return ""

def movary_token_url(cfg: AppConfig) -> str:
    return f"{cfg.api_base}{MOVARY_TOKEN_PATH}"

def _post_json(
    session: requests.Session,
    url: str,
    payload: Mapping[str, Any],
    headers: Mapping[str, str],
    timeout: Optional[float],
) -> Any:
    r = session.post(url, json=dict(payload), headers=dict(headers), timeout=timeout)
    if not 200 <= r.status_code < 300:
        raise RecoverableModuleError(f"HTTP {r.status_code}: {_error_body(r)}")
    try:
        return r.json()
    except ValueError:
        raise RecoverableModuleError(f"non-JSON response: {_error_body(r)}")

def extract_token(js: Any, field: str) -> Optional[str]:
    """Read the token from the configured response field; blank or non-string -> None."""
    if not isinstance(js, dict):
        return None
    tok = js.get(field)
    if isinstance(tok, str) and tok.strip():
        return tok
    return None


def movary_request_token(
    cfg: AppConfig,
    session: Optional[requests.Session] = None,
    log: Optional[Logger] = None,
) -> Optional[str]:
    """
    Returns the Movary API token, or None when authentication fails for any reason.
    Failures are logged with the upstream error body; nothing is raised.
    """
    lg = log or root_log.child("AUTH")
    creds: Credentials = cfg.credentials
    s = session or requests.Session()
    payload = {"email": creds.email, "password": creds.password, "rememberMe": True}
    try:
        js = _post_json(s, movary_token_url(cfg), payload, _auth_headers(creds.client_identifier), cfg.http_timeout)
    except RecoverableModuleError as e:
        lg.error("Authentication failed. Check your credentials.")
        lg.error(str(e))
        return None
    except Exception as e:
        # transport errors and anything raised while building the request
        lg.error("Authentication failed. Check your credentials.")
        lg.error(f"{type(e).__name__}: {e}")
        return None
    finally:
        if session is None:
            s.close()

    token = extract_token(js, cfg.token_field)
    if token is None:
        lg.error(f"Authentication response has no '{cfg.token_field}' field (check MOVARY_TOKEN_FIELD).")
        lg.debug(f"response keys: {sorted(js.keys()) if isinstance(js, dict) else type(js).__name__}")
        return None
    lg.debug("obtained Movary token")
    return token
