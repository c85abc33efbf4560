#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Web UI backend (FastAPI)

One page: the newest movie on a Movary watchlist, shown as a card.
Every request logs in again, fetches one entry and renders the page. Always HTTP 200.
"""
from __future__ import annotations
from typing import Optional

import uvicorn
from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.responses import HTMLResponse

from _config import AppConfig, load_config
from _dates import format_next_dt, resolve_tz
from _logging import log as root_log
from _page import error_fragment, page_shell, render_page
from modules._mod_base import DisplayState, Logger
from modules._mod_MOVARY import MovaryModule, SessionFactory

__VERSION__ = "0.2.0"


def create_app(
    cfg: AppConfig,
    session_factory: Optional[SessionFactory] = None,
    log: Optional[Logger] = None,
) -> FastAPI:
    lg = log or root_log.child("WEB")
    movary = MovaryModule(cfg, logger=lg.child("MOVARY"), session_factory=session_factory)
    display_tz = resolve_tz(cfg.display_tz)

    app = FastAPI(title="Next Feature", version=__VERSION__, docs_url=None, redoc_url=None, openapi_url=None)
    app.state.movary = movary

    @app.get("/", response_class=HTMLResponse)
    def index() -> HTMLResponse:
        try:
            showing = format_next_dt(cfg.next_dt, display_tz)
            result = movary.run()
            body = render_page(DisplayState.from_result(result), showing, cfg.poster_base_url)
        except Exception as e:
            lg.error(f"Server error: {type(e).__name__}: {e}")
            body = page_shell(error_fragment())
        return HTMLResponse(body, status_code=200)

    return app


# ---- Main ----
def main() -> None:
    load_dotenv()
    cfg = load_config()
    root_log.configure(level=cfg.log_level, json_path=cfg.log_json)
    lg = root_log.child("WEB")

    app = create_app(cfg, log=lg)
    if app.state.movary.validate_config():
        lg.success(f"Configured for Movary user {cfg.user_id} at {cfg.api_base}")

    lg.info(f"Web server listening on http://localhost:{cfg.port}")
    lg.info(f"Open a browser and navigate to http://localhost:{cfg.port} to view the page.")
    if cfg.port < 1024:
        lg.warn(f"Port {cfg.port} may require elevated permissions.")
    uvicorn.run(app, host=cfg.host, port=cfg.port, log_level="warning" if cfg.log_level in ("warn", "error", "silent") else "info")

if __name__ == "__main__":
    main()
