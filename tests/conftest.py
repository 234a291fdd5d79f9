"""Test configuration: fake subprocesses, registry and cache."""

from __future__ import annotations

import io
import subprocess
import zipfile
from pathlib import Path

import pytest

from provisioner.cache import ContentCache
from provisioner.wordpress.site import SiteOptions, resolve_request


def make_plugin_zip(with_dropin: bool = True) -> bytes:
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w") as zf:
        zf.writestr("sqlite-integration/load.php", "<?php // plugin\n")
        if with_dropin:
            zf.writestr("sqlite-integration/db.php", "<?php // drop-in\n")
    return buf.getvalue()


class FakeRunner:
    """Stands in for subprocess.run; answers wp and valet invocations."""

    def __init__(self, tld: str = "test") -> None:
        self.tld = tld
        self.calls: list[list[str]] = []
        self.kwargs: list[dict] = []
        self.failures: dict[str, str] = {}

    def __call__(self, args, **kwargs):
        args = list(args)
        self.calls.append(args)
        self.kwargs.append(kwargs)
        if args[0] == "valet":
            cmd = " ".join(args[1:])
            if cmd in self.failures:
                return subprocess.CompletedProcess(args, 1, self.failures[cmd], "")
            if cmd == "domain":
                return subprocess.CompletedProcess(args, 0, f"{self.tld}\n", "")
            return subprocess.CompletedProcess(args, 0, "Restarting nginx...\n", "")
        cmd = " ".join(args[2:4])
        if cmd in self.failures:
            return subprocess.CompletedProcess(args, 1, "", self.failures[cmd])
        return subprocess.CompletedProcess(args, 0, "Success.\n", "")

    def wp_commands(self) -> list[str]:
        return [" ".join(c[2:4]) for c in self.calls if c[0] == "wp"]

    def valet_commands(self) -> list[str]:
        return [" ".join(c[1:]) for c in self.calls if c[0] == "valet"]

    def wp_argv(self, command: str) -> list[str]:
        for c in self.calls:
            if c[0] == "wp" and " ".join(c[2:4]) == command:
                return c
        raise AssertionError(f"wp {command} was not run")


class FakeRegistry:
    def __init__(
        self, version: str = "2.1.16", with_dropin: bool = True, payload: bytes | None = None
    ) -> None:
        self.version = version
        self.with_dropin = with_dropin
        self.payload = payload
        self.info_calls = 0
        self.downloads: list[tuple[str, str]] = []

    def latest_version(self, slug: str) -> str:
        self.info_calls += 1
        return self.version

    def download(self, slug: str, version: str, destination: Path) -> Path:
        self.downloads.append((slug, version))
        payload = self.payload if self.payload is not None else make_plugin_zip(self.with_dropin)
        Path(destination).write_bytes(payload)
        return Path(destination)


@pytest.fixture
def runner(monkeypatch: pytest.MonkeyPatch) -> FakeRunner:
    fake = FakeRunner()
    monkeypatch.setattr("provisioner.wordpress.cli.WP_CLI_PATH", "wp")
    monkeypatch.setattr("provisioner.proxy.VALET_PATH", "valet")
    monkeypatch.setattr(subprocess, "run", fake)
    return fake


@pytest.fixture
def registry() -> FakeRegistry:
    return FakeRegistry()


@pytest.fixture
def cache(tmp_path: Path) -> ContentCache:
    return ContentCache(tmp_path / "cache")


@pytest.fixture
def make_request(tmp_path: Path):
    """Build a ProvisioningRequest rooted in tmp_path with a fixed tld."""

    def _make(name: str = "example", **overrides):
        return resolve_request(name, SiteOptions(**overrides), cwd=tmp_path / "sites", tld="test")

    return _make
