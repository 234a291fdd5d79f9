"""File-backed content cache shared with WP-CLI.

Entries live under a root directory (WP-CLI's own `~/.wp-cli/cache` by
default) and are addressed by a relative key such as
`aaemnnosttv/wp-cli-valet-command/sqlite-integration.2.1.zip`.
"""

from __future__ import annotations

import re
import shutil
from pathlib import Path

from provisioner.config import WP_CLI_CACHE_DIR
from provisioner.utils import log

KEY_RE = re.compile(r"^[A-Za-z0-9._/-]+$")


class ContentCache:
    """Minimal key/value file store: has, export, import_file, remove."""

    def __init__(self, root: Path | str = WP_CLI_CACHE_DIR) -> None:
        self.root = Path(root)

    def _filename(self, key: str) -> Path:
        if not key or not KEY_RE.match(key):
            raise ValueError(f"invalid cache key: {key!r}")
        parts = key.split("/")
        if ".." in parts or "" in parts:
            raise ValueError(f"invalid cache key: {key!r}")
        return self.root.joinpath(*parts)

    def has(self, key: str) -> bool:
        return self._filename(key).is_file()

    def export(self, key: str, destination: Path | str) -> bool:
        """Copy a cached entry to destination. False on a miss."""
        source = self._filename(key)
        if not source.is_file():
            return False
        Path(destination).parent.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(source, destination)
        log(f"Exported cache entry {key} -> {destination}")
        return True

    def import_file(self, key: str, source: Path | str) -> bool:
        """Store a copy of source under key. False if source is missing."""
        source = Path(source)
        if not source.is_file():
            return False
        target = self._filename(key)
        target.parent.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(source, target)
        log(f"Imported {source} into cache as {key}")
        return True

    def remove(self, key: str) -> bool:
        """Evict key. False if it was not cached."""
        target = self._filename(key)
        if not target.is_file():
            return False
        target.unlink()
        log(f"Evicted cache entry {key}")
        return True
