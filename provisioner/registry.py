"""wordpress.org plugin registry client.

Two calls only: the plugin info endpoint (for the latest version) and the
plugin download endpoint (for the zip archive).
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import requests
from requests.exceptions import RequestException

from provisioner.config import REGISTRY_TIMEOUT, SQLITE_DOWNLOAD_URL, SQLITE_INFO_URL
from provisioner.errors import RegistryError
from provisioner.utils import log

logger = logging.getLogger(__name__)


class PluginRegistry:
    """Small wrapper around requests for the wordpress.org plugin API."""

    def __init__(
        self,
        *,
        session: requests.Session | None = None,
        info_url: str = SQLITE_INFO_URL,
        download_url: str = SQLITE_DOWNLOAD_URL,
        timeout: int = REGISTRY_TIMEOUT,
    ) -> None:
        self._session = session or requests.Session()
        self._session.headers.update({"User-Agent": "wp-valet"})
        self._info_url = info_url
        self._download_url = download_url
        self._timeout = timeout

    def latest_version(self, slug: str) -> str:
        url = self._info_url.format(slug=slug)
        log(f"Fetching plugin info {url}")
        try:
            resp = self._session.get(url, timeout=self._timeout)
            resp.raise_for_status()
            data: Any = resp.json()
        except (RequestException, ValueError) as err:
            logger.error("Plugin info request failed for %s: %s", slug, err)
            raise RegistryError(
                "There was a problem parsing the response from the wordpress.org api. Try again!"
            ) from err
        version = data.get("version") if isinstance(data, dict) else None
        if not isinstance(version, str) or not version.strip():
            raise RegistryError(
                "There was a problem parsing the response from the wordpress.org api. Try again!"
            )
        return version.strip()

    def download(self, slug: str, version: str, destination: Path) -> Path:
        url = self._download_url.format(slug=slug, version=version)
        log(f"Downloading {url}")
        try:
            with self._session.get(url, timeout=self._timeout, stream=True) as resp:
                resp.raise_for_status()
                with open(destination, "wb") as fh:
                    for chunk in resp.iter_content(chunk_size=64 * 1024):
                        fh.write(chunk)
        except RequestException as err:
            raise RegistryError(f"Could not download {slug} {version}: {err}") from err
        return Path(destination)
