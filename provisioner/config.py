"""Shared configuration constants for wp-valet.

Centralizes tool paths, registry endpoints and option defaults used by
the provisioner package. Every value can be overridden from the
environment.
"""

import os
from pathlib import Path

WP_CLI_PATH = os.environ.get("WP_CLI_PATH", "wp")
VALET_PATH = os.environ.get("VALET_PATH", "valet")
WP_CLI_CACHE_DIR = Path(
    os.environ.get("WP_CLI_CACHE_DIR", str(Path.home() / ".wp-cli" / "cache"))
)
LOG_DIR = Path(os.environ.get("WP_VALET_LOG_DIR", str(Path.home() / ".wp-valet" / "log")))
DIR_PERMS = 0o755

# wordpress.org plugin registry
REGISTRY_TIMEOUT = int(os.environ.get("WP_VALET_REGISTRY_TIMEOUT", "30"))  # seconds
SQLITE_PLUGIN_SLUG = "sqlite-integration"
SQLITE_INFO_URL = "https://api.wordpress.org/plugins/info/1.0/{slug}.json"
SQLITE_DOWNLOAD_URL = "https://downloads.wordpress.org/plugin/{slug}.{version}.zip"
SQLITE_CACHE_NAMESPACE = "aaemnnosttv/wp-cli-valet-command"

# `new` option defaults
DB_DRIVERS = ("mysql", "sqlite")
DEFAULT_DB = os.environ.get("WP_VALET_DB", "mysql")
DB_USER = os.environ.get("WP_VALET_DBUSER", "root")
DB_PASS = os.environ.get("WP_VALET_DBPASS", "")
DB_PREFIX = os.environ.get("WP_VALET_DBPREFIX", "wp_")
DEFAULT_WP_USER = os.environ.get("WP_VALET_ADMIN_USER", "admin")
DEFAULT_WP_PASS = os.environ.get("WP_VALET_ADMIN_PASSWORD", "admin")
