"""sqlite-integration plugin install (archive fetch, cache, extract)."""

from __future__ import annotations

import logging
import re
import tempfile
import zipfile
from pathlib import Path

from provisioner.cache import ContentCache
from provisioner.config import SQLITE_CACHE_NAMESPACE, SQLITE_PLUGIN_SLUG
from provisioner.errors import ConfigurationError, InstallationError, RegistryError
from provisioner.registry import PluginRegistry
from provisioner.utils import log

VERSION_RE = re.compile(r"^[0-9A-Za-z][0-9A-Za-z._-]*$")


def cache_key(version: str) -> str:
    return f"{SQLITE_CACHE_NAMESPACE}/{SQLITE_PLUGIN_SLUG}.{version}.zip"


def _resolve_version(version: str | None, registry: PluginRegistry) -> str:
    if version:
        if not VERSION_RE.match(version):
            raise ConfigurationError(f"invalid {SQLITE_PLUGIN_SLUG} version: {version!r}")
        return version
    latest = registry.latest_version(SQLITE_PLUGIN_SLUG)
    if not VERSION_RE.match(latest):
        raise RegistryError(
            f"wordpress.org api reported an unusable {SQLITE_PLUGIN_SLUG} version: {latest!r}"
        )
    return latest


def _fetch_archive(
    version: str, local_file: Path, registry: PluginRegistry, cache: ContentCache
) -> None:
    key = cache_key(version)
    if cache.has(key):
        log(f"Using cached file: {key}")
        cache.export(key, local_file)
        return
    registry.download(SQLITE_PLUGIN_SLUG, version, local_file)
    # only zip archives reach the cache
    if not zipfile.is_zipfile(local_file):
        raise InstallationError(
            f"{SQLITE_PLUGIN_SLUG} install failed: download of {version} is not a zip archive"
        )
    cache.import_file(key, local_file)


def install_sqlite_integration(
    plugins_dir: Path,
    registry: PluginRegistry,
    cache: ContentCache,
    version: str | None = None,
) -> str:
    """Extract sqlite-integration into plugins_dir; return the version used.

    When no version is pinned, the latest one is asked from the registry.
    """
    version = _resolve_version(version, registry)

    local_file = Path(tempfile.gettempdir()) / f"{SQLITE_PLUGIN_SLUG}.{version}.zip"
    try:
        _fetch_archive(version, local_file, registry, cache)
        log(f"Extracting {SQLITE_PLUGIN_SLUG}")
        plugins_dir.mkdir(parents=True, exist_ok=True)
        with zipfile.ZipFile(local_file) as zf:
            zf.extractall(plugins_dir)
    except (zipfile.BadZipFile, OSError) as err:
        logging.error("Could not extract %s %s: %s", SQLITE_PLUGIN_SLUG, version, err)
        if isinstance(err, zipfile.BadZipFile):
            cache.remove(cache_key(version))
        raise InstallationError(f"{SQLITE_PLUGIN_SLUG} install failed: {err}") from err
    finally:
        local_file.unlink(missing_ok=True)
    return version
