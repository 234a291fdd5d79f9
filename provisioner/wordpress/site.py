"""Request resolution and filesystem layout for a new site."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path

from provisioner.config import (
    DB_PASS,
    DB_PREFIX,
    DB_USER,
    DEFAULT_DB,
    DEFAULT_WP_PASS,
    DEFAULT_WP_USER,
    DIR_PERMS,
)
from provisioner.errors import ConfigurationError, FilesystemError, ProxyToolError
from provisioner.proxy import valet_domain
from provisioner.utils import log

DISALLOWED_RE = re.compile(r"[^a-z0-9-]+")
DASHES_RE = re.compile(r"-{2,}")


@dataclass
class SiteOptions:
    version: str = ""
    locale: str = ""
    db: str = DEFAULT_DB
    dbname: str = ""
    dbuser: str = DB_USER
    dbpass: str = DB_PASS
    dbprefix: str = DB_PREFIX
    admin_user: str = DEFAULT_WP_USER
    admin_password: str = DEFAULT_WP_PASS
    admin_email: str = ""
    sqlite_version: str = ""
    unsecure: bool = False


@dataclass(frozen=True)
class ProvisioningRequest:
    site_name: str
    domain: str
    is_secure: bool
    full_url: str
    full_path: Path
    options: SiteOptions

    @property
    def dbname(self) -> str:
        return self.options.dbname or f"wp_{self.site_name}"

    @property
    def admin_email(self) -> str:
        return self.options.admin_email or f"admin@{self.domain}"

    @property
    def content_dir(self) -> Path:
        return self.full_path / "wp-content"

    @property
    def plugins_dir(self) -> Path:
        return self.content_dir / "plugins"


def sanitize_site_name(raw: str) -> str:
    """Slugify a site identifier down to [a-z0-9-]."""
    name = DISALLOWED_RE.sub("-", (raw or "").strip().lower())
    name = DASHES_RE.sub("-", name).strip("-")
    if not name:
        raise ConfigurationError(f"invalid site name: {raw!r}")
    return name


def resolve_request(
    raw_name: str,
    options: SiteOptions,
    cwd: Path | None = None,
    tld: str | None = None,
) -> ProvisioningRequest:
    site_name = sanitize_site_name(raw_name)
    if tld is None:
        try:
            tld = valet_domain()
        except ProxyToolError as err:
            raise ConfigurationError(f"could not determine the valet tld: {err}") from err
    tld = tld.strip().lstrip(".")
    if not tld:
        raise ConfigurationError("valet reported an empty tld")

    is_secure = not options.unsecure
    domain = f"{site_name}.{tld}"
    scheme = "https" if is_secure else "http"
    base = Path(cwd) if cwd is not None else Path.cwd()
    request = ProvisioningRequest(
        site_name=site_name,
        domain=domain,
        is_secure=is_secure,
        full_url=f"{scheme}://{domain}",
        full_path=base.absolute() / site_name,
        options=options,
    )
    log(f"Resolved {raw_name!r} -> {request.full_url} at {request.full_path}")
    return request


def ensure_site_dir(site_path: Path) -> None:
    try:
        site_path.mkdir(mode=DIR_PERMS, parents=True, exist_ok=True)
    except OSError as err:
        logging.error("Could not create or access %s: %s", site_path, err)
        raise FilesystemError("failed creating directory") from err
    log(f"PASS: site directory {site_path}")
