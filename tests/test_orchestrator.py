"""Tests for CommandOrchestrator."""

import json
from unittest.mock import MagicMock, call, patch

import pytest

from jsrcli.config_manager import Settings
from jsrcli.orchestrator import NODE_PUBLISH_FLAGS, CommandOrchestrator
from jsrcli.packages import JsrPackage, parse_package
from jsrcli.pkg_managers import InstallOptions
from jsrcli.utils.exceptions import ExecError, MissingMetadataError, PackageNameError


@pytest.fixture
def metadata_service():
    return MagicMock()


@pytest.fixture
def orchestrator(metadata_service):
    return CommandOrchestrator(Settings(), metadata_service=metadata_service)


@pytest.fixture
def project(tmp_path):
    (tmp_path / "package.json").write_text(json.dumps({"name": "jsr-test-package", "version": "0.0.1"}))
    return tmp_path


@pytest.fixture
def exec_mock():
    with patch("jsrcli.pkg_managers.base.exec_command") as mock:
        yield mock


class TestRun:
    def test_success(self, orchestrator, capsys):
        assert orchestrator.run(lambda: None) == 0
        assert "Completed in" in capsys.readouterr().out

    def test_naming_error_exits_1(self, orchestrator, capsys):
        def fail():
            parse_package("NOT VALID")

        assert orchestrator.run(fail) == 1
        assert "Invalid jsr or npm package name" in capsys.readouterr().err

    def test_exec_error_code_is_propagated(self, orchestrator):
        def fail():
            raise ExecError(42)

        assert orchestrator.run(fail) == 42

    def test_other_errors_propagate(self, orchestrator):
        def fail():
            raise MissingMetadataError("boom", package="@a/b")

        with pytest.raises(MissingMetadataError):
            orchestrator.run(fail)


class TestInstall:
    def test_npm_writes_npmrc_before_install(self, orchestrator, project, exec_mock):
        def check_npmrc(cmd, args, cwd):
            assert (project / ".npmrc").read_text() == "@jsr:registry=https://npm.jsr.io\n"

        exec_mock.side_effect = check_npmrc
        orchestrator.install(str(project), [JsrPackage.from_string("@std/encoding")], InstallOptions())
        exec_mock.assert_called_once_with(
            "npm", ["install", "@std/encoding@npm:@jsr/std__encoding"], str(project)
        )

    def test_dev_mode(self, orchestrator, project, exec_mock):
        orchestrator.install(
            str(project), [JsrPackage.from_string("@std/encoding@0.216.0")], InstallOptions(mode="dev")
        )
        assert exec_mock.call_args[0][1] == [
            "install",
            "--save-dev",
            "@std/encoding@npm:@jsr/std__encoding@0.216.0",
        ]

    def test_bare_install_skips_registry_setup(self, orchestrator, project, exec_mock):
        orchestrator.install(str(project), [], InstallOptions())
        assert not (project / ".npmrc").exists()
        exec_mock.assert_called_once_with("npm", ["install"], str(project))

    def test_bun_uses_bunfig(self, orchestrator, project, exec_mock):
        orchestrator.install(
            str(project), [JsrPackage.from_string("@std/encoding")], InstallOptions(pkg_manager_name="bun")
        )
        assert '"@jsr" = "https://npm.jsr.io"' in (project / "bunfig.toml").read_text()
        assert not (project / ".npmrc").exists()

    def test_yarn_berry_uses_config_command(self, orchestrator, project, exec_mock, metadata_service):
        metadata_service.get_latest_package_version.return_value = "1.0.5"
        with patch("jsrcli.pkg_managers.is_yarn_berry", return_value=True):
            orchestrator.install(
                str(project), [JsrPackage.from_string("@std/encoding")], InstallOptions(pkg_manager_name="yarn")
            )

        assert exec_mock.call_args_list == [
            call("yarn", ["config", "set", "npmScopes.jsr.npmRegistryServer", "https://npm.jsr.io"], str(project)),
            call("yarn", ["add", "@std/encoding@npm:@jsr/std__encoding@^1.0.5"], str(project)),
        ]
        assert not (project / ".npmrc").exists()

    def test_yarn_classic_uses_npmrc(self, orchestrator, project, exec_mock):
        with patch("jsrcli.pkg_managers.is_yarn_berry", return_value=False):
            orchestrator.install(
                str(project), [JsrPackage.from_string("@std/encoding")], InstallOptions(pkg_manager_name="yarn")
            )
        assert (project / ".npmrc").exists()
        assert exec_mock.call_args[0][0] == "yarn"

    def test_user_agent_selects_manager(self, metadata_service, project, exec_mock):
        orchestrator = CommandOrchestrator(
            Settings(user_agent="pnpm/8.14.3 npm/? node/v20.11.0"), metadata_service=metadata_service
        )
        orchestrator.install(str(project), [JsrPackage.from_string("@std/encoding")], InstallOptions())
        assert exec_mock.call_args[0][0] == "pnpm"


class TestRemoveAndRun:
    def test_remove(self, orchestrator, project, exec_mock):
        orchestrator.remove(str(project), [JsrPackage.from_string("@std/encoding")])
        exec_mock.assert_called_once_with("npm", ["remove", "@std/encoding"], str(project))
        assert not (project / ".npmrc").exists()

    def test_remove_does_not_open_a_session(self, project, exec_mock):
        orchestrator = CommandOrchestrator(Settings())
        with patch("jsrcli.orchestrator.JsrMetadataService") as service_cls:
            orchestrator.remove(str(project), [JsrPackage.from_string("@std/encoding")])
            orchestrator.run_script(str(project), "test")
        service_cls.assert_not_called()

    def test_run_script(self, orchestrator, project, exec_mock):
        (project / "pnpm-lock.yaml").write_text("")
        orchestrator.run_script(str(project), "test")
        exec_mock.assert_called_once_with("pnpm", ["run", "test"], str(project))


class TestPublish:
    def test_node_project_gets_compat_flags(self, orchestrator, project):
        args, env = orchestrator.build_publish_command(str(project), ["--dry-run"])
        assert args == ["publish", *NODE_PUBLISH_FLAGS, "--dry-run"]
        assert env["DENO_DISABLE_PEDANTIC_NODE_WARNINGS"] == "true"

    def test_deno_project_is_passed_through(self, orchestrator, project, monkeypatch):
        monkeypatch.delenv("DENO_DISABLE_PEDANTIC_NODE_WARNINGS", raising=False)
        (project / "deno.json").write_text("{}")
        args, env = orchestrator.build_publish_command(str(project), ["--token", "abc"])
        assert args == ["publish", "--token", "abc"]
        assert "DENO_DISABLE_PEDANTIC_NODE_WARNINGS" not in env

    def test_publish_runs_deno(self, metadata_service, project):
        orchestrator = CommandOrchestrator(Settings(deno_bin_path="/opt/deno"), metadata_service=metadata_service)
        with patch("jsrcli.orchestrator.exec_command") as exec_command:
            orchestrator.publish(str(project), ["--dry-run"])
        cmd, args, cwd = exec_command.call_args[0]
        assert cmd == "/opt/deno"
        assert args[0] == "publish"
        assert args[-1] == "--dry-run"
        assert cwd == str(project)

    def test_publish_failure_propagates_exit_code(self, metadata_service, project):
        orchestrator = CommandOrchestrator(Settings(deno_bin_path="/opt/deno"), metadata_service=metadata_service)
        with patch("jsrcli.orchestrator.exec_command", side_effect=ExecError(5)):
            assert orchestrator.run(lambda: orchestrator.publish(str(project), [])) == 5


class TestShowPackageInfo:
    def npm_info(self, version):
        return {
            "description": "Utilities for encoding and decoding",
            "versions": {
                version: {"dist": {"tarball": f"https://npm.jsr.io/~/11/@jsr/foo__bar/{version}.tgz", "integrity": "sha512-abc"}}
            },
            "time": {version: "2024-03-01T10:00:00.000Z"},
        }

    def test_prerelease_fallback(self, orchestrator, metadata_service, capsys):
        metadata_service.get_package_meta.return_value = {
            "latest": None,
            "versions": {"1.0.0-rc.1": {}, "0.9.0-rc.2": {}},
        }
        metadata_service.get_npm_package_info.return_value = self.npm_info("0.9.0-rc.2")

        orchestrator.show_package_info("@foo/bar")

        pkg = metadata_service.get_npm_package_info.call_args[0][0]
        assert pkg.version == "0.9.0-rc.2"
        out = capsys.readouterr().out
        assert "@foo/bar@0.9.0-rc.2" in out
        assert "latest: -" in out
        assert "versions: 2" in out
        assert "sha512-abc" in out
        assert "ago" in out

    def test_latest(self, orchestrator, metadata_service, capsys):
        metadata_service.get_package_meta.return_value = {"latest": "1.0.0", "versions": {"1.0.0": {}}}
        metadata_service.get_npm_package_info.return_value = self.npm_info("1.0.0")
        orchestrator.show_package_info("@foo/bar")
        assert "@foo/bar@1.0.0" in capsys.readouterr().out

    def test_version_missing_from_npm_info(self, orchestrator, metadata_service):
        metadata_service.get_package_meta.return_value = {"latest": "2.0.0", "versions": {"2.0.0": {}}}
        metadata_service.get_npm_package_info.return_value = self.npm_info("1.0.0")
        with pytest.raises(MissingMetadataError):
            orchestrator.show_package_info("@foo/bar")

    def test_invalid_name(self, orchestrator):
        with pytest.raises(PackageNameError):
            orchestrator.show_package_info("foo")
