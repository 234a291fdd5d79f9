"""Download, configure and install WordPress core, and orchestrate `new`."""

from __future__ import annotations

from provisioner.cache import ContentCache
from provisioner.proxy import valet_secure
from provisioner.registry import PluginRegistry
from provisioner.utils import log, status_line, status_pass
from .cli import wp
from .db import create_db
from .site import ProvisioningRequest, ensure_site_dir


def download_wp(request: ProvisioningRequest) -> None:
    log("Downloading WordPress")
    opts = request.options
    assoc = {"version": opts.version, "locale": opts.locale}
    wp(request.full_path, "core download", assoc_args={k: v for k, v in assoc.items() if v})


def configure_wp(request: ProvisioningRequest) -> None:
    log("Configuring WP")
    opts = request.options
    assoc = {
        "dbname": request.dbname,
        "dbuser": opts.dbuser,
        "dbprefix": opts.dbprefix,
    }
    if opts.dbpass:
        assoc["dbpass"] = opts.dbpass
    if opts.db == "sqlite":
        assoc["skip-check"] = True
    wp(request.full_path, "config create", assoc_args=assoc)


def install_wp(request: ProvisioningRequest) -> None:
    log("Installing WordPress")
    opts = request.options
    wp(
        request.full_path,
        "core install",
        assoc_args={
            "url": request.full_url,
            "title": request.site_name,
            "admin_user": opts.admin_user,
            "admin_password": opts.admin_password,
            "admin_email": request.admin_email,
            "skip-email": True,
        },
    )


def new_site(
    request: ProvisioningRequest, registry: PluginRegistry, cache: ContentCache
) -> None:
    """Provision a site end to end. Any step failure raises and stops here."""
    ensure_site_dir(request.full_path)
    status_line("Don't go anywhere, this will only take a second...")

    download_wp(request)
    configure_wp(request)
    create_db(request, registry, cache)
    install_wp(request)

    if request.is_secure:
        valet_secure(request.site_name)

    status_pass(f"{request.site_name} ready! {request.full_url}")
