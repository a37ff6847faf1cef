import logging
import os
import traceback
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Union

from userauth.core.config import settings


# (title, width) for each column of the log file
_COLUMNS = (
    ("#", 6),
    ("Date", 12),
    ("Time", 10),
    ("Level", 8),
    ("User ID", 8),
    ("Username", 24),
    ("Module/Function", 25),
    ("Event", 40),
)
_SEP = " | "
_EVENT_WIDTH = _COLUMNS[-1][1]
_INDENT = " " * (_COLUMNS[0][1] + len(_SEP))
_RULE_WIDTH = sum(width for _, width in _COLUMNS) + len(_SEP) * (len(_COLUMNS) - 1)


def _row(values) -> str:
    return _SEP.join(f"{str(v):<{width}}" for v, (_, width) in zip(values, _COLUMNS))


def resolve_log_level(level: Union[str, int]) -> int:
    """Map a level name like "debug" to its number, falling back to INFO"""
    if isinstance(level, int):
        return level
    value = logging.getLevelName(str(level).strip().upper())
    return value if isinstance(value, int) else logging.INFO


class StructuredFileHandler(logging.FileHandler):
    """Writes one fixed-width row per record, with the auth user context.

    Rows are numbered; the numbering continues across restarts by reading
    the last row of an existing file.
    """

    def __init__(self, log_file_path: str):
        super().__init__(log_file_path, mode="a", encoding="utf-8")
        self.log_counter = self._next_serial()
        self._write_header()

    def _next_serial(self) -> int:
        if not os.path.exists(self.baseFilename):
            return 1
        try:
            with open(self.baseFilename, "r", encoding="utf-8") as f:
                lines = f.readlines()
        except OSError:
            return 1
        for line in reversed(lines):
            first = line.split(_SEP, 1)[0].strip()
            if first.isdigit():
                return int(first) + 1
        return 1

    def _write_header(self):
        if os.path.getsize(self.baseFilename) > 0:
            return
        with open(self.baseFilename, "w", encoding="utf-8") as f:
            f.write("=" * _RULE_WIDTH + "\n")
            f.write(f"{'USER AUTH API — OPERATION LOG':^{_RULE_WIDTH}}\n")
            f.write("=" * _RULE_WIDTH + "\n")
            f.write(_row(title for title, _ in _COLUMNS) + "\n")
            f.write("-" * _RULE_WIDTH + "\n")

    def emit(self, record: logging.LogRecord):
        try:
            when = datetime.fromtimestamp(record.created)
            message = record.getMessage()
            event = message if len(message) <= _EVENT_WIDTH else message[:_EVENT_WIDTH - 3] + "..."

            lines = [_row((
                self.log_counter,
                when.strftime("%Y-%m-%d"),
                when.strftime("%H:%M:%S"),
                record.levelname,
                getattr(record, "user_id", None) or "-",
                getattr(record, "username", None) or "-",
                f"{record.module}.{record.funcName}",
                event,
            ))]
            if record.levelno >= logging.WARNING and event != message:
                lines.append(f"{_INDENT}Details: {message}")
            if record.exc_info:
                lines.append(f"{_INDENT}Exception: " + "".join(traceback.format_exception(*record.exc_info)))
            if record.levelno >= logging.ERROR:
                lines.append("-" * _RULE_WIDTH)

            with open(self.baseFilename, "a", encoding="utf-8") as f:
                f.write("\n".join(lines) + "\n")
            self.log_counter += 1
        except Exception:
            self.handleError(record)


def setup_file_logging(log_level: Union[str, int] = logging.INFO, log_dir: Optional[str] = None) -> logging.Logger:
    """Configure structured file + console logging.

    The file only receives WARNING and above; the console gets *log_level*.
    """
    level = resolve_log_level(log_level)
    log_path = Path(log_dir or settings.LOG_DIR)
    log_path.mkdir(parents=True, exist_ok=True)

    file_handler = StructuredFileHandler(str(log_path / "logs.txt"))
    file_handler.setLevel(logging.WARNING)
    file_handler.setFormatter(logging.Formatter("%(message)s"))

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(
        logging.Formatter("%(asctime)s | %(levelname)s | %(name)s | %(message)s")
    )

    logging.basicConfig(level=level, handlers=[file_handler, console_handler], force=True)

    logger = logging.getLogger(__name__)
    logger.warning("User Auth API SESSION STARTED at %s", datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S UTC"))
    return logger


def log_auth_event(
    event: str,
    success: bool = True,
    detail: Optional[str] = None,
    user_id: Optional[int] = None,
    username: Optional[str] = None,
):
    """Log an authentication event with user context (id + username).

    Failures go out at WARNING so they always reach the log file; successes
    are INFO and only show on the console.
    """
    _log = logging.getLogger("auth_events")
    extra = {"user_id": user_id or "-", "username": username or "-"}

    if success:
        _log.info("%s OK%s", event, f" — {detail}" if detail else "", extra=extra)
    else:
        _log.warning("%s FAILED%s", event, f" — {detail}" if detail else "", extra=extra)
