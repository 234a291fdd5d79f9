"""Utility helpers shared by the provisioner steps.

- init_logging: configure console + file logging with run-id.
- status_pass/status_fail/status_line: concise console lines.
- log: debug-level logger for normal progress lines (file-oriented).
- strip_ansi: drop terminal color codes from captured tool output.
"""

import logging
import os
import re
import uuid
from logging.handlers import RotatingFileHandler
from pathlib import Path

from provisioner.config import LOG_DIR


_RUN_ID = ""
ANSI_RE = re.compile(r"\x1B\[[0-?]*[ -/]*[@-~]")


def _gen_run_id() -> str:
    return uuid.uuid4().hex[:8]


def init_logging(run_id: str | None = None, debug: bool = False) -> str:
    """Initialize logging with console + rotating file handlers.

    - Console: CRITICAL only unless debug is set, then DEBUG+.
    - File: DEBUG+, rich format, written to LOG_DIR/wp-valet-<rid>.log
    Returns the run-id used.
    """
    global _RUN_ID
    rid = run_id or _RUN_ID or os.environ.get("WP_VALET_RID") or _gen_run_id()
    _RUN_ID = rid

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)

    log_dir = Path(LOG_DIR)
    try:
        log_dir.mkdir(parents=True, exist_ok=True)
        logfile = log_dir / f"wp-valet-{rid}.log"
    except OSError:
        logfile = Path.cwd() / f"wp-valet-{rid}.log"

    console_level = logging.DEBUG if debug else logging.CRITICAL

    # Quiet (or open up) any pre-existing console handlers
    for h in root.handlers:
        if isinstance(h, logging.StreamHandler) and not isinstance(h, logging.FileHandler):
            h.setLevel(console_level)

    has_file = any(
        isinstance(h, RotatingFileHandler) and h.baseFilename == str(logfile.absolute())
        for h in root.handlers
    )
    if not has_file:
        fh = RotatingFileHandler(logfile, maxBytes=5 * 1024 * 1024, backupCount=3)
        fh.setLevel(logging.DEBUG)
        ffmt = logging.Formatter(
            fmt="%(asctime)s %(levelname)s %(name)s: %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S",
        )
        fh.setFormatter(ffmt)
        root.addHandler(fh)

    has_console = any(
        isinstance(h, logging.StreamHandler) and not isinstance(h, logging.FileHandler)
        for h in root.handlers
    )
    if not has_console:
        ch = logging.StreamHandler()
        ch.setLevel(console_level)
        ch.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
        root.addHandler(ch)

    logging.debug("Logging initialized. run_id=%s file=%s", rid, logfile)
    os.environ["WP_VALET_RID"] = rid
    return rid


def _rid() -> str:
    return _RUN_ID or os.environ.get("WP_VALET_RID", "--------")


def status_pass(msg: str) -> None:
    print(f"PASS: {msg} [{_rid()}]")


def status_fail(msg: str) -> None:
    print(f"FAIL: {msg} [{_rid()}]", flush=True)


def status_line(msg: str) -> None:
    print(msg, flush=True)


def log(msg: str) -> None:
    # File-oriented normal progress; stays out of console noise.
    logging.debug(msg)


def strip_ansi(text: str) -> str:
    return ANSI_RE.sub("", text)
