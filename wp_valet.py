#!/usr/bin/env python3
"""CLI to provision a new local WordPress site served by Laravel Valet.

Inputs: site name and option flags.
Side effects: creates ./<site>, runs wp-cli (core download, config create,
db create or the sqlite-integration drop-in, core install), and runs
`valet secure <site>` unless --unsecure is given.
"""

from __future__ import annotations

import argparse
import logging
import sys

from provisioner.config import (
    DB_DRIVERS,
    DB_PASS,
    DB_PREFIX,
    DB_USER,
    DEFAULT_DB,
    DEFAULT_WP_PASS,
    DEFAULT_WP_USER,
)
from provisioner import __version__
from provisioner.cache import ContentCache
from provisioner.errors import ProvisionError
from provisioner.registry import PluginRegistry
from provisioner.utils import init_logging, status_fail
from provisioner.wordpress.installer import new_site
from provisioner.wordpress.site import SiteOptions, resolve_request


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="wp-valet")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    sub = parser.add_subparsers(dest="command", required=True)

    new = sub.add_parser("new", help="Create a new WordPress install -- fast")
    new.add_argument("domain", help="Site domain name without TLD. Eg: example.com = example")
    new.add_argument("--version", default="", help="WordPress version to install")
    new.add_argument("--locale", default="", help="Select which language you want to install")
    new.add_argument("--db", default=DEFAULT_DB, choices=DB_DRIVERS, help="Database driver")
    new.add_argument("--dbname", default="", help="Database name. Default: 'wp_{domain}'")
    new.add_argument("--dbuser", default=DB_USER, help="Database user (MySQL only)")
    new.add_argument("--dbpass", default=DB_PASS, help="Database user password (MySQL only)")
    new.add_argument("--dbprefix", default=DB_PREFIX, help="Database table prefix")
    new.add_argument("--admin_user", default=DEFAULT_WP_USER, help="Admin username")
    new.add_argument("--admin_password", default=DEFAULT_WP_PASS, help="Admin password")
    new.add_argument("--admin_email", default="", help="Admin email. Default: 'admin@{domain}'")
    new.add_argument(
        "--sqlite_version", default="", help="Pin the sqlite-integration plugin version"
    )
    new.add_argument(
        "--unsecure", action="store_true", help="Provision the site for http rather than https"
    )
    new.add_argument("--debug", action="store_true", help="Echo debug logging to the console")
    return parser


def _options_from_args(args: argparse.Namespace) -> SiteOptions:
    return SiteOptions(
        version=args.version,
        locale=args.locale,
        db=args.db,
        dbname=args.dbname,
        dbuser=args.dbuser,
        dbpass=args.dbpass,
        dbprefix=args.dbprefix,
        admin_user=args.admin_user,
        admin_password=args.admin_password,
        admin_email=args.admin_email,
        sqlite_version=args.sqlite_version,
        unsecure=args.unsecure,
    )


def cmd_new(args: argparse.Namespace) -> int:
    try:
        request = resolve_request(args.domain, _options_from_args(args))
        new_site(request, PluginRegistry(), ContentCache())
    except ProvisionError as err:
        logging.error("%s: %s", type(err).__name__, err)
        status_fail(str(err))
        return 1
    return 0


def main(argv: list[str]) -> int:
    args = build_parser().parse_args(argv)
    init_logging(None, debug=getattr(args, "debug", False))
    if args.command == "new":
        return cmd_new(args)
    status_fail(f"unknown command: {args.command}")
    return 1


def run() -> None:
    raise SystemExit(main(sys.argv[1:]))


if __name__ == "__main__":
    run()
