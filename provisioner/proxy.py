"""Laravel Valet wrapper.

SRP: this module only shells out to the valet executable. It answers the
local tld (`valet domain`) and secures new sites (`valet secure <name>`).
"""

from __future__ import annotations

import subprocess

from provisioner.config import VALET_PATH
from provisioner.errors import ProxyToolError
from provisioner.utils import log, strip_ansi


def valet(command: str) -> str:
    """Run `valet <command>` and return its trimmed output."""
    log(f"Running `valet {command}`")
    args = [VALET_PATH] + command.split()
    try:
        proc = subprocess.run(args, text=True, capture_output=True)
    except OSError as err:
        log(f"Completed valet {command} (could not start: {err})")
        raise ProxyToolError(command, str(err)) from err
    log(f"Completed valet {command} exit={proc.returncode}")
    output = strip_ansi(proc.stdout or "").strip()
    if proc.returncode != 0:
        detail = output or strip_ansi(proc.stderr or "").strip()
        raise ProxyToolError(command, detail)
    if output:
        log(output)
    return output


def valet_domain() -> str:
    return valet("domain")


def valet_secure(site_name: str) -> str:
    return valet(f"secure {site_name}")
