"""Shared fixtures for launcher tests."""

import subprocess

import pytest

from geph_launcher.context import LauncherContext
from geph_launcher.platform import LinuxPlatform
from geph_launcher.rpc_key import RpcKeyStore


class FakePopen:
    """Records spawn calls instead of creating processes."""

    calls = []

    def __init__(self, argv, **kwargs):
        self.argv = argv
        self.kwargs = kwargs
        self.pid = 4242
        self.returncode = None
        FakePopen.calls.append(self)

    def wait(self, timeout=None):
        self.returncode = 0
        return 0

    def terminate(self):
        pass


@pytest.fixture(autouse=True)
def isolated_dirs(tmp_path, monkeypatch):
    """Point config and data directories at a temp dir."""
    monkeypatch.setenv("GEPH_LAUNCHER_CONFIG_DIR", str(tmp_path / "config"))
    monkeypatch.setenv("GEPH_LAUNCHER_DATA_DIR", str(tmp_path / "data"))
    return tmp_path


@pytest.fixture
def fake_popen(monkeypatch):
    """Replace subprocess.Popen with FakePopen."""
    FakePopen.calls = []
    monkeypatch.setattr(subprocess, "Popen", FakePopen)
    return FakePopen


@pytest.fixture
def key_store(tmp_path):
    return RpcKeyStore(tmp_path / "config" / "geph4-credentials" / "rpc_key")


@pytest.fixture
def linux_context(key_store):
    return LauncherContext(platform=LinuxPlatform(), key_store=key_store)


@pytest.fixture
def fake_keyring(monkeypatch):
    """In-memory keyring."""
    import keyring

    store = {}

    def get_password(service, key):
        return store.get((service, key))

    def set_password(service, key, value):
        store[(service, key)] = value

    def delete_password(service, key):
        del store[(service, key)]

    monkeypatch.setattr(keyring, "get_password", get_password)
    monkeypatch.setattr(keyring, "set_password", set_password)
    monkeypatch.setattr(keyring, "delete_password", delete_password)
    return store
