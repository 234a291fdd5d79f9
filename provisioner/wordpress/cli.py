# cli.py
# Invariants:
# - All WP-CLI access goes through wp(); callers never build argv by hand.
# - argv is a list (no shell); options are rendered as --key=value or --flag.
# - Every call is scoped to the site with --path and runs with cwd at the site.
# - Logs: debug line before and after each call; stderr logged on failure.

from __future__ import annotations

import logging
import os
import subprocess
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Sequence

from provisioner.config import WP_CLI_PATH
from provisioner.errors import DelegatedCommandError
from provisioner.utils import log, strip_ansi

os.environ.setdefault("WP_CLI_DISABLE_AUTO_CHECK_UPDATE", "1")


@dataclass(frozen=True)
class WpResult:
    command: str
    return_code: int
    stdout: str
    stderr: str


def _render_assoc(assoc_args: Mapping[str, Any]) -> list[str]:
    flags: list[str] = []
    for key, value in assoc_args.items():
        if value is None or value is False:
            continue
        if value is True:
            flags.append(f"--{key}")
            continue
        flags.append(f"--{key}={value}")
    return flags


def build_argv(
    site_path: Path,
    command: str,
    positional: Sequence[str] = (),
    assoc_args: Mapping[str, Any] | None = None,
) -> list[str]:
    parts = [WP_CLI_PATH, f"--path={site_path}"]
    parts += command.split()
    parts += [str(p) for p in positional]
    parts += _render_assoc(assoc_args or {})
    if "--no-color" not in parts:
        parts.append("--no-color")
    return parts


def _fmt_cmd_for_log(args: list[str]) -> str:
    if not args:
        return ""
    # replace absolute binary path with 'wp' for readability
    return " ".join(["wp"] + args[1:])


def wp(
    site_path: Path,
    command: str,
    positional: Sequence[str] = (),
    assoc_args: Mapping[str, Any] | None = None,
) -> WpResult:
    """Run a WP-CLI command against site_path; raise on non-zero exit."""
    log(f"Running 'wp {command}' ...")
    args = build_argv(site_path, command, positional, assoc_args)

    t0 = time.monotonic()
    try:
        proc = subprocess.run(
            args,
            cwd=str(site_path),
            text=True,
            capture_output=True,
            env=os.environ.copy(),
            encoding="utf-8",
            errors="replace",
        )
    except OSError as err:
        logging.error("wp %s could not start: %s", _fmt_cmd_for_log(args), err)
        raise DelegatedCommandError(command, 127, str(err)) from err
    dt = time.monotonic() - t0

    result = WpResult(
        command=_fmt_cmd_for_log(args),
        return_code=proc.returncode,
        stdout=proc.stdout or "",
        stderr=proc.stderr or "",
    )
    log(f"Completed {result.command} ({dt:.1f}s)")

    if result.return_code != 0:
        clean_err = strip_ansi(result.stderr).strip()
        logging.error(
            "%s exit=%s\nSTDERR: %s", result.command, result.return_code, clean_err
        )
        raise DelegatedCommandError(command, result.return_code, clean_err)

    if result.stdout.strip():
        log(result.stdout.strip())
    return result
