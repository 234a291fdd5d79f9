"""Tests for the sqlite-integration install."""

import tempfile
from pathlib import Path

import pytest

from provisioner.errors import ConfigurationError, InstallationError, RegistryError
from provisioner.wordpress.sqlite import cache_key, install_sqlite_integration
from tests.conftest import FakeRegistry, make_plugin_zip


def _temp_archive(version: str) -> Path:
    return Path(tempfile.gettempdir()) / f"sqlite-integration.{version}.zip"


def test_cache_key() -> None:
    assert cache_key("2.1.16") == "aaemnnosttv/wp-cli-valet-command/sqlite-integration.2.1.16.zip"


def test_cache_miss_downloads_once_and_populates_cache(tmp_path: Path, registry, cache) -> None:
    plugins = tmp_path / "wp-content" / "plugins"

    version = install_sqlite_integration(plugins, registry, cache)

    assert version == "2.1.16"
    assert registry.info_calls == 1
    assert registry.downloads == [("sqlite-integration", "2.1.16")]
    assert cache.has(cache_key("2.1.16"))
    assert (plugins / "sqlite-integration" / "db.php").is_file()
    assert not _temp_archive("2.1.16").exists()


def test_cache_hit_skips_download(tmp_path: Path, registry, cache) -> None:
    seed = tmp_path / "seed.zip"
    seed.write_bytes(make_plugin_zip())
    cache.import_file(cache_key("2.1.16"), seed)
    plugins = tmp_path / "wp-content" / "plugins"

    install_sqlite_integration(plugins, registry, cache)

    assert registry.downloads == []
    assert (plugins / "sqlite-integration" / "db.php").is_file()
    assert not _temp_archive("2.1.16").exists()


def test_pinned_version_skips_registry_lookup(tmp_path: Path, registry, cache) -> None:
    version = install_sqlite_integration(tmp_path / "plugins", registry, cache, version="2.0.0")

    assert version == "2.0.0"
    assert registry.info_calls == 0
    assert registry.downloads == [("sqlite-integration", "2.0.0")]


def test_registry_failure_propagates(tmp_path: Path, cache) -> None:
    class BrokenRegistry(FakeRegistry):
        def latest_version(self, slug: str) -> str:
            raise RegistryError("There was a problem parsing the response")

    registry = BrokenRegistry()
    with pytest.raises(RegistryError):
        install_sqlite_integration(tmp_path / "plugins", registry, cache)
    assert registry.downloads == []


def test_corrupt_archive_raises_and_cleans_up(tmp_path: Path, registry, cache) -> None:
    seed = tmp_path / "seed.zip"
    seed.write_bytes(b"this is not a zip")
    cache.import_file(cache_key("9.9.9"), seed)

    with pytest.raises(InstallationError):
        install_sqlite_integration(tmp_path / "plugins", registry, cache, version="9.9.9")

    assert not _temp_archive("9.9.9").exists()
    assert not cache.has(cache_key("9.9.9"))


def test_corrupt_cached_entry_is_refetched_next_time(tmp_path: Path, registry, cache) -> None:
    seed = tmp_path / "seed.zip"
    seed.write_bytes(b"this is not a zip")
    cache.import_file(cache_key("2.1.16"), seed)
    plugins = tmp_path / "plugins"

    with pytest.raises(InstallationError):
        install_sqlite_integration(plugins, registry, cache)
    install_sqlite_integration(plugins, registry, cache)

    assert registry.downloads == [("sqlite-integration", "2.1.16")]
    assert (plugins / "sqlite-integration" / "db.php").is_file()


def test_non_zip_download_never_reaches_cache(tmp_path: Path, cache) -> None:
    registry = FakeRegistry(version="3.0.0", payload=b"<html>maintenance</html>")

    with pytest.raises(InstallationError, match="not a zip archive"):
        install_sqlite_integration(tmp_path / "plugins", registry, cache)

    assert registry.downloads == [("sqlite-integration", "3.0.0")]
    assert not cache.has(cache_key("3.0.0"))
    assert not _temp_archive("3.0.0").exists()
    assert not (tmp_path / "plugins").exists()


@pytest.mark.parametrize("version", ["2.1 beta", "2.1.16+build", "../2.1", ""])
def test_unusable_registry_version(tmp_path: Path, cache, version: str) -> None:
    registry = FakeRegistry(version=version)

    with pytest.raises(RegistryError, match="unusable sqlite-integration version"):
        install_sqlite_integration(tmp_path / "plugins", registry, cache)

    assert registry.downloads == []


@pytest.mark.parametrize("version", ["2.1 beta", "2.1.16+build", "../2.1", "-rc1"])
def test_invalid_pinned_version(tmp_path: Path, registry, cache, version: str) -> None:
    with pytest.raises(ConfigurationError, match="invalid sqlite-integration version"):
        install_sqlite_integration(tmp_path / "plugins", registry, cache, version=version)

    assert registry.info_calls == 0
    assert registry.downloads == []
