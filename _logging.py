# _logging.py
from __future__ import annotations
import sys, datetime, json, threading
from typing import Any, Dict, Mapping, Optional, TextIO

RESET = "\033[0m"
DIM = "\033[90m"
RED = "\033[91m"
GREEN = "\033[92m"
YELLOW = "\033[33m"
BLUE = "\033[94m"

LEVELS = {"silent": 60, "error": 40, "warn": 30, "info": 20, "debug": 10}
LEVEL_TAG = {"debug": "[debug]", "info": "[i]", "warn": "[!]", "error": "[!]", "success": "[✓]"}
TAG_COLOR = {"[i]": BLUE, "[debug]": YELLOW, "[✓]": GREEN, "[!]": RED}

class Logger:
    """Stdout logger with colored level tags, an optional JSON-lines sink and bound context."""
    def __init__(
        self,
        stream: TextIO = sys.stdout,
        level: str = "info",
        use_color: bool = True,
        show_time: bool = True,
        time_fmt: str = "%Y-%m-%d %H:%M:%S",
        *,
        _context: Optional[Dict[str, Any]] = None,
        _json_stream: Optional[TextIO] = None,
        _lock: Optional[threading.Lock] = None,
    ):
        self.stream = stream
        self.level_no = LEVELS.get((level or "info").lower(), 20)
        self.use_color = use_color
        self.show_time = show_time
        self.time_fmt = time_fmt
        self._context: Dict[str, Any] = dict(_context or {})
        self._json_stream = _json_stream
        self._lock = _lock or threading.Lock()

    # ----- config
    def set_level(self, level: str) -> None:
        self.level_no = LEVELS.get((level or "").lower(), self.level_no)

    def enable_json(self, file_path: str) -> None:
        self._json_stream = open(file_path, "a", encoding="utf-8")

    def configure(self, level: Optional[str] = None, json_path: Optional[str] = None) -> None:
        """Apply LOG_LEVEL / LOG_JSON style settings in one call."""
        if level:
            self.set_level(level)
        if json_path:
            self.enable_json(json_path)
        if not getattr(self.stream, "isatty", lambda: False)():
            self.use_color = False

    @property
    def level_name(self) -> str:
        for k, v in LEVELS.items():
            if v == self.level_no:
                return k
        return "info"

    # ----- context
    def bind(self, **ctx: Any) -> "Logger":
        new_ctx = dict(self._context); new_ctx.update(ctx)
        child = Logger(
            stream=self.stream,
            level=self.level_name,
            use_color=self.use_color,
            show_time=self.show_time,
            time_fmt=self.time_fmt,
            _context=new_ctx,
            _json_stream=self._json_stream,
            _lock=self._lock,
        )
        return child

    def child(self, name: str) -> "Logger":
        return self.bind(module=name)

    # ----- formatting
    def _fmt_text(self, level: str, msg: str) -> str:
        tag = LEVEL_TAG.get(level, "[i]")
        module = self._context.get("module")
        if self.use_color:
            tag = f"{TAG_COLOR.get(tag, '')}{tag}{RESET}"
        line = f"{tag} [{module}] {msg}" if module else f"{tag} {msg}"
        if self.show_time:
            ts = datetime.datetime.now().strftime(self.time_fmt)
            prefix = f"{DIM}[{ts}]{RESET}" if self.use_color else f"[{ts}]"
            return f"{prefix} {line}"
        return line

    def _emit(self, level: str, parts: tuple, extra: Optional[Mapping[str, Any]]) -> None:
        threshold = "info" if level == "success" else level
        if self.level_no > LEVELS[threshold]:
            return
        msg = " ".join(str(p) for p in parts)
        text = self._fmt_text(level, msg)
        with self._lock:
            self.stream.write(text + "\n")
            self.stream.flush()
            if self._json_stream:
                payload: Dict[str, Any] = {
                    "ts": datetime.datetime.now(datetime.timezone.utc).isoformat(timespec="milliseconds"),
                    "level": threshold,
                    "msg": msg,
                    "ctx": self._context,
                }
                if extra:
                    payload["extra"] = dict(extra)
                self._json_stream.write(json.dumps(payload, ensure_ascii=False, default=str) + "\n")
                self._json_stream.flush()

    # ----- public API
    def debug(self, *parts: Any, extra: Optional[Mapping[str, Any]] = None) -> None:
        self._emit("debug", parts, extra)

    def info(self, *parts: Any, extra: Optional[Mapping[str, Any]] = None) -> None:
        self._emit("info", parts, extra)

    def warn(self, *parts: Any, extra: Optional[Mapping[str, Any]] = None) -> None:
        self._emit("warn", parts, extra)

    def error(self, *parts: Any, extra: Optional[Mapping[str, Any]] = None) -> None:
        self._emit("error", parts, extra)

    def success(self, *parts: Any, extra: Optional[Mapping[str, Any]] = None) -> None:
        self._emit("success", parts, extra)

    # callable adapter: logger("text", level="INFO", extra={...})
    def __call__(
        self,
        message: str,
        *,
        level: str = "INFO",
        module: Optional[str] = None,
        extra: Optional[Mapping[str, Any]] = None,
    ) -> None:
        target = self.bind(module=module) if module else self
        lvl = (level or "INFO").lower()
        if   lvl == "debug":   target.debug(message, extra=extra)
        elif lvl in ("warn", "warning"): target.warn(message, extra=extra)
        elif lvl == "error":   target.error(message, extra=extra)
        else:                  target.info(message, extra=extra)

# default instance
log = Logger()

__all__ = ["Logger", "log", "LEVELS", "RESET", "DIM", "RED", "GREEN", "YELLOW", "BLUE"]
