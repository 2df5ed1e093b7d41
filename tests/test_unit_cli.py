"""
Unit tests for the console entry points.

Each command is called through main(argv) and must end with SystemExit
carrying the mapped exit code.
"""

import logging
from unittest.mock import MagicMock, patch

import pytest

from acul_samples.build.ledger import VersionLedger
from acul_samples.core.errors import NoMatchError
from acul_samples.services.management import ManagementClient
from acul_samples.services.rendering import RenderingDeployer
from cli import build, cleanup, deploy, fetch, stop
from tests.conftest import TEST_DOMAIN, FakeBundler, FakeStylesheet


@pytest.fixture(autouse=True)
def cli_env(project_dir, monkeypatch):
    monkeypatch.chdir(project_dir)
    monkeypatch.setenv("SAMPLES_DIR", str(project_dir / "src" / "samples"))
    monkeypatch.setenv("DIST_DIR", str(project_dir / "dist"))
    monkeypatch.setenv("ACUL_REQUEST_DELAY_SECONDS", "0")
    yield
    logging.getLogger().handlers.clear()


@pytest.fixture
def auth0_env(monkeypatch):
    monkeypatch.setenv("AUTH0_DOMAIN", TEST_DOMAIN)
    monkeypatch.setenv("AUTH0_CLIENT_ID", "cid")
    monkeypatch.setenv("AUTH0_CLIENT_SECRET", "secret")


def exit_code(main, argv):
    with pytest.raises(SystemExit) as exc:
        main(argv)
    return exc.value.code


class TestFetchCommand:
    def test_no_match_exits_3(self, capsys):
        fetcher = MagicMock()
        fetcher.__enter__.return_value.fetch_all.side_effect = NoMatchError("No example files match: mfa")

        with patch("cli.fetch.SampleFetcher", return_value=fetcher):
            assert exit_code(fetch.main, ["mfa"]) == 3
        assert "Error: No example files match: mfa" in capsys.readouterr().err

    def test_patterns_are_passed_through(self):
        fetcher = MagicMock()
        report = fetcher.__enter__.return_value.fetch_all.return_value
        report.summary_lines.return_value = ["Fetch Summary"]
        report.manifest = {}
        report.exit_code = 0

        with patch("cli.fetch.SampleFetcher", return_value=fetcher):
            assert exit_code(fetch.main, ["login", "signup"]) == 0
        fetcher.__enter__.return_value.fetch_all.assert_called_once_with(["login", "signup"])


class TestBuildCommand:
    def test_nothing_to_build_exits_2(self, capsys):
        assert exit_code(build.main, []) == 2
        assert "No samples found" in capsys.readouterr().err

    def test_successful_build(self, write_samples, capsys):
        write_samples("login")
        with (
            patch("acul_samples.build.builder.EsbuildBundler", lambda *a, **k: FakeBundler()),
            patch("acul_samples.build.builder.TailwindCompiler", lambda *a, **k: FakeStylesheet()),
        ):
            assert exit_code(build.main, []) == 0
        assert "Build Summary" in capsys.readouterr().out

    def test_stylesheet_failure_exits_5(self, write_samples):
        write_samples("login")
        with (
            patch("acul_samples.build.builder.EsbuildBundler", lambda *a, **k: FakeBundler()),
            patch("acul_samples.build.builder.TailwindCompiler", lambda *a, **k: FakeStylesheet(ok=False)),
        ):
            assert exit_code(build.main, []) == 5

    def test_invalid_configuration_exits_2(self, monkeypatch, capsys):
        monkeypatch.setenv("PORT", "not-a-port")
        assert exit_code(build.main, []) == 2
        assert "invalid configuration" in capsys.readouterr().err


class TestDeployCommand:
    def test_missing_credentials_exit_2(self, capsys):
        assert exit_code(deploy.main, []) == 2
        assert "AUTH0_DOMAIN" in capsys.readouterr().err

    def test_rejected_credentials_exit_4(self, auth0_env, settings, management_api):
        ledger = VersionLedger(settings.dist_dir)
        (ledger.version_dir("v-aaaa") / "login").mkdir(parents=True)
        ledger.promote("v-aaaa")
        management_api.token_status = 401

        def factory(s):
            return ManagementClient(domain=s.auth0_domain, transport=management_api.transport)

        with patch("cli.deploy.RenderingDeployer", lambda s: RenderingDeployer(s, client_factory=factory)):
            assert exit_code(deploy.main, ["login"]) == 4
        assert management_api.api_requests == []


class TestCleanupCommand:
    def test_declined_confirmation(self, auth0_env, monkeypatch, capsys):
        monkeypatch.setattr("builtins.input", lambda: "n")
        deployer = MagicMock()

        with patch("cli.cleanup.RenderingDeployer", return_value=deployer):
            assert exit_code(cleanup.main, []) == 1
        deployer.cleanup.assert_not_called()
        assert "Aborted." in capsys.readouterr().out

    def test_closed_stdin_counts_as_no(self, auth0_env, monkeypatch, capsys):
        def closed_stdin():
            raise EOFError

        monkeypatch.setattr("builtins.input", closed_stdin)
        deployer = MagicMock()

        with patch("cli.cleanup.RenderingDeployer", return_value=deployer):
            assert exit_code(cleanup.main, []) == 1
        deployer.cleanup.assert_not_called()
        assert "Aborted." in capsys.readouterr().out

    def test_yes_skips_prompt(self, auth0_env):
        deployer = MagicMock()
        deployer.cleanup.return_value.summary_lines.return_value = []
        deployer.cleanup.return_value.total = 0
        deployer.cleanup.return_value.exit_code = 0

        with patch("cli.cleanup.RenderingDeployer", return_value=deployer):
            assert exit_code(cleanup.main, ["--yes", "login"]) == 0
        deployer.cleanup.assert_called_once_with(["login"])


class TestStopCommand:
    def test_nothing_running(self, capsys):
        with patch("cli.stop.stop_server", return_value=[]):
            assert exit_code(stop.main, []) == 0
        assert "No server running on port 5500" in capsys.readouterr().out
