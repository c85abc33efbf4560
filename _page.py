# _page.py
# Renders the full HTML for the Next Feature page. Keep this file self-contained.

from __future__ import annotations
from html import escape
from typing import Optional

from modules._mod_base import DisplayKind, DisplayState, WatchlistEntry

PAGE_TITLE = "📣 The Next Nest Feature 🍿"

NO_DATA_TEXT = "Could not retrieve movie data or no movies found."
ERROR_TITLE = "Server Error"
ERROR_TEXT = "An unexpected error occurred while processing your request."

STYLE = r"""
  body{
    font-family: Arial, sans-serif;
    background-color:#000000; color:#D3D3D3;
    display:flex; justify-content:center; align-items:center;
    height:100vh; margin:0;
  }
  .movie-card{
    background-color:#1A1A1A; padding:2.5rem; border-radius:12px;
    box-shadow:0 4px 15px rgba(0,0,0,.5);
    text-align:center; max-width:500px; width:90%;
  }
  .message, .error-message{
    background-color:#1A1A1A; padding:2rem; font-size:1.2rem; color:#D3D3D3;
    border-radius:12px; box-shadow:0 4px 15px rgba(0,0,0,.5);
    text-align:center; max-width:500px; width:90%;
  }
  .error-message{ color:#a51a1a; border:1px solid #a51a1a; }
  .movie-title{ font-size:2.5rem; color:#D3D3D3; margin-bottom:.5rem; }
  .movie-info{ font-size:1.2rem; color:#D3D3D3; margin:.5rem 0; }
  .movie-overview{ color:#A9A9A9; }
  .movie-poster{ max-width:100%; height:auto; border-radius:8px; margin-bottom:1rem; }
  .custom-message{ font-size:1.5rem; font-weight:bold; color:#D3D3D3; margin-bottom:1rem; }
"""


def _text(s: Optional[str]) -> str:
    return escape(s or "", quote=False)

def _attr(s: Optional[str]) -> str:
    return escape(s or "", quote=True)

def poster_url(path: Optional[str], base: Optional[str] = None) -> str:
    """Relative poster paths get POSTER_BASE_URL in front when one is configured."""
    p = path or ""
    if base and p and not p.startswith(("http://", "https://", "//")):
        return base.rstrip("/") + "/" + p.lstrip("/")
    return p


def movie_card(entry: WatchlistEntry, showing: str, poster_base: Optional[str] = None) -> str:
    m = entry.movie
    if m is None:
        raise ValueError("movie card needs an entry with a movie")
    return f"""
    <div class="movie-card">
        <img src="{_attr(poster_url(m.poster_path, poster_base))}" alt="{_attr(m.title)} Poster" class="movie-poster">
        <h1 class="movie-title">🎥 {_text(m.title)}</h1>
        <p class="movie-info">{_text(m.year)}</p><hr>
        <p class="movie-info movie-overview">{_text(m.overview)}</p><hr>
        <p class="custom-message">Showing: {_text(showing)}</p>
    </div>
"""

def no_data_fragment() -> str:
    return f"""
    <div class="message">
        <p>{NO_DATA_TEXT}</p>
    </div>
"""

def error_fragment() -> str:
    # never include exception details here
    return f"""
    <div class="error-message">
        <h1>{ERROR_TITLE}</h1>
        <p>{ERROR_TEXT}</p>
    </div>
"""

def render_fragment(state: DisplayState, showing: str, poster_base: Optional[str] = None) -> str:
    if state.kind is DisplayKind.FOUND and state.entry is not None:
        return movie_card(state.entry, showing, poster_base)
    if state.kind is DisplayKind.ERROR:
        return error_fragment()
    return no_data_fragment()

def page_shell(fragment: str) -> str:
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="UTF-8">
<meta name="viewport" content="width=device-width, initial-scale=1.0">
<title>{PAGE_TITLE}</title>
<style>{STYLE}</style>
</head>
<body>
{fragment}
</body>
</html>
"""

def render_page(state: DisplayState, showing: str, poster_base: Optional[str] = None) -> str:
    return page_shell(render_fragment(state, showing, poster_base))
