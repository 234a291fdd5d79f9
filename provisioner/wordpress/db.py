"""Database provisioning: MySQL via WP-CLI, or the SQLite drop-in."""

from __future__ import annotations

import logging
import shutil

from provisioner.cache import ContentCache
from provisioner.config import SQLITE_PLUGIN_SLUG
from provisioner.errors import ConfigurationError, InstallationError
from provisioner.registry import PluginRegistry
from provisioner.utils import log
from .cli import wp
from .site import ProvisioningRequest
from .sqlite import install_sqlite_integration


def create_mysql_db(request: ProvisioningRequest) -> None:
    log("Creating MySQL DB")
    wp(request.full_path, "db create")


def create_sqlite_db(
    request: ProvisioningRequest, registry: PluginRegistry, cache: ContentCache
) -> None:
    log("Installing SQLite DB")
    install_sqlite_integration(
        request.plugins_dir,
        registry,
        cache,
        version=request.options.sqlite_version or None,
    )

    source = request.plugins_dir / SQLITE_PLUGIN_SLUG / "db.php"
    dropin = request.content_dir / "db.php"
    try:
        shutil.copyfile(source, dropin)
    except OSError as err:
        logging.error("Could not copy %s to %s: %s", source, dropin, err)

    if not dropin.is_file():
        raise InstallationError(f"{SQLITE_PLUGIN_SLUG} install failed")
    log(f"PASS: drop-in {dropin}")


def create_db(
    request: ProvisioningRequest, registry: PluginRegistry, cache: ContentCache
) -> None:
    driver = request.options.db
    if driver == "sqlite":
        create_sqlite_db(request, registry, cache)
        return
    if driver == "mysql":
        create_mysql_db(request)
        return
    raise ConfigurationError(f"unknown database driver: {driver}")
