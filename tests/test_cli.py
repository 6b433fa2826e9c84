"""Tests for the command-line interface."""

import json

import pytest

from geph_launcher import cli, profiles
from geph_launcher.config import DaemonConfig, PasswordAuth, SignatureAuth
from geph_launcher.errors import ProbeError, UnsupportedPlatform


class FakeProcess:
    pid = 4242

    def wait(self):
        return 0


@pytest.fixture(autouse=True)
def no_log_setup(monkeypatch):
    monkeypatch.setattr(cli, "setup_logging", lambda verbose: None)


@pytest.fixture
def started(monkeypatch, linux_context):
    """Capture configs passed to start()."""
    configs = []

    def fake_start(config, context=None):
        configs.append(config)
        return FakeProcess()

    monkeypatch.setattr(cli, "start", fake_start)
    monkeypatch.setattr(cli, "get_context", lambda: linux_context)
    return configs


class TestConnect:
    """Tests for the connect command."""

    def test_password(self, started, capsys):
        assert cli.main(["connect", "--exit", "ex.example.com", "-u", "a", "-p", "b"]) == 0
        assert started == [DaemonConfig.with_password("a", "b", "ex.example.com")]
        assert "PID 4242" in capsys.readouterr().out

    def test_prompts_for_password(self, started, monkeypatch):
        monkeypatch.setattr(cli.getpass, "getpass", lambda prompt: "secret")
        cli.main(["connect", "--exit", "ex", "-u", "a"])
        assert started[0].auth == PasswordAuth("a", "secret")

    def test_keypair(self, started):
        cli.main(["connect", "--exit", "ex", "--sk-path", "/keys"])
        assert started[0].auth == SignatureAuth("/keys")

    def test_mode_flags(self, started):
        cli.main([
            "connect", "--exit", "ex", "-u", "a", "-p", "b",
            "--vpn", "--use-bridges", "--exclude-prc", "--listen-all", "--force-protocol", "obfs4",
        ])
        config = started[0]
        assert config.vpn_mode and config.force_bridges
        assert config.region_whitelist and config.listen_on_all_interfaces
        assert config.force_protocol == "obfs4"

    def test_missing_credentials(self, started, capsys):
        assert cli.main(["connect", "--exit", "ex"]) == 2
        assert started == []
        assert "--username" in capsys.readouterr().err

    def test_missing_exit(self, started):
        assert cli.main(["connect", "-u", "a", "-p", "b"]) == 2

    def test_launch_error(self, monkeypatch, linux_context, capsys):
        def refuse(config, context=None):
            raise UnsupportedPlatform("VPN mode not supported on macos")

        monkeypatch.setattr(cli, "start", refuse)
        monkeypatch.setattr(cli, "get_context", lambda: linux_context)

        assert cli.main(["connect", "--exit", "ex", "-u", "a", "-p", "b", "--vpn"]) == 1
        assert "not supported" in capsys.readouterr().err

    def test_wait_returns_exit_code(self, started):
        assert cli.main(["connect", "--exit", "ex", "-u", "a", "-p", "b", "--wait"]) == 0

    def test_save_and_use_profile(self, started, fake_keyring):
        cli.main(["connect", "--exit", "ex", "-u", "a", "-p", "b", "--use-bridges", "--save", "home"])
        cli.main(["connect", "--profile", "home"])
        assert started[1] == started[0]
        assert profiles.get_profile("home") == started[0]

    def test_unknown_profile(self, started, fake_keyring):
        assert cli.main(["connect", "--profile", "nope"]) == 2

    def test_malformed_profile(self, started, fake_keyring, capsys):
        """Test that a corrupt profile is reported, not raised."""
        fake_keyring[(profiles.KEYRING_SERVICE, profiles.PROFILES_KEY)] = json.dumps({"home": "oops"})
        assert cli.main(["connect", "--profile", "home"]) == 2
        assert started == []
        assert "home" in capsys.readouterr().err

    def test_switches_override_profile(self, started, fake_keyring):
        """Test that --no-* switches turn off saved profile options."""
        saved = DaemonConfig.with_password(
            "a", "b", "ex",
            vpn_mode=True, force_bridges=True, region_whitelist=True, listen_on_all_interfaces=True,
        )
        profiles.save_profile("home", saved)

        cli.main(["connect", "--profile", "home", "--no-vpn", "--no-use-bridges", "--no-exclude-prc", "--no-listen-all"])
        cli.main(["connect", "--profile", "home"])

        assert started[0] == DaemonConfig.with_password("a", "b", "ex")
        assert started[1] == saved

    def test_empty_sk_path(self, started):
        assert cli.main(["connect", "--exit", "ex", "--sk-path", ""]) == 2
        assert started == []


class TestOtherCommands:
    """Tests for version, rpc-key, status and profiles."""

    def test_version(self, monkeypatch, linux_context, capsys):
        monkeypatch.setattr(cli, "get_context", lambda: linux_context)
        monkeypatch.setattr(linux_context, "daemon_version", lambda: "4.7.3")
        assert cli.main(["version"]) == 0
        assert capsys.readouterr().out.strip() == "4.7.3"

    def test_version_failure(self, monkeypatch, linux_context):
        def fail():
            raise ProbeError("Daemon executable not found: geph4-client")

        monkeypatch.setattr(cli, "get_context", lambda: linux_context)
        monkeypatch.setattr(linux_context, "daemon_version", fail)
        assert cli.main(["version"]) == 1

    def test_rpc_key(self, monkeypatch, linux_context, capsys):
        monkeypatch.setattr(cli, "get_context", lambda: linux_context)
        assert cli.main(["rpc-key"]) == 0
        assert capsys.readouterr().out.strip() == linux_context.rpc_key()

    def test_status(self, monkeypatch, linux_context, capsys):
        class Proc:
            pid = 77

        monkeypatch.setattr(cli, "get_context", lambda: linux_context)
        monkeypatch.setattr(cli, "find_daemon_processes", lambda name: [Proc()])
        assert cli.main(["status"]) == 0
        assert "PID 77" in capsys.readouterr().out

    def test_status_not_running(self, monkeypatch, linux_context):
        monkeypatch.setattr(cli, "get_context", lambda: linux_context)
        monkeypatch.setattr(cli, "find_daemon_processes", lambda name: [])
        assert cli.main(["status"]) == 1

    def test_profiles_list_skips_invalid(self, fake_keyring, capsys):
        fake_keyring[(profiles.KEYRING_SERVICE, profiles.PROFILES_KEY)] = json.dumps({"home": "oops"})
        assert cli.main(["profiles"]) == 0
        assert "home: " in capsys.readouterr().out

    def test_profiles_list_and_delete(self, fake_keyring, capsys):
        profiles.save_profile("home", DaemonConfig.with_password("a", "b", "ex.example.com"))
        assert cli.main(["profiles"]) == 0
        assert "home: a @ ex.example.com" in capsys.readouterr().out
        assert cli.main(["profiles", "--delete", "home"]) == 0
        assert cli.main(["profiles", "--delete", "home"]) == 1
