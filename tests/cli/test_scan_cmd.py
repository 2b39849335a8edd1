"""Tests for ``jdkprobe scan``.

Each test points the CLI at fake installations through the invocation
environment and passes ``--classpath`` so the self-path resolver is not
involved.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest
from click.testing import CliRunner

from jdkprobe.cli.main import cli
from jdkprobe.exceptions import ReportError

from tests.discovery.helpers import create_java_home, create_silent_java_home

pytestmark = pytest.mark.skipif(
    sys.platform == "win32", reason="fake runtimes are POSIX shell scripts",
)


@pytest.fixture
def runner() -> CliRunner:
    """Create a Click CliRunner for invoking commands."""
    return CliRunner()


def _env(**values: str | None) -> dict[str, str | None]:
    """Invocation environment with every hint variable controlled."""
    env: dict[str, str | None] = {
        "HMCL_JAVA_HOME": None,
        "JAVA_HOME": None,
        "PATH": "/usr/bin",
        "JDKPROBE_CLASSPATH": None,
    }
    env.update(values)
    return env


class TestScanText:
    """Human-readable output."""

    def test_valid_runtime_listed(
        self, runner: CliRunner, tmp_path: Path, payload_path: str,
    ) -> None:
        root = create_java_home(tmp_path / "jdk17", version="17.0.9")
        result = runner.invoke(
            cli, ["scan", "--classpath", payload_path],
            env=_env(JAVA_HOME=str(root)),
        )
        assert result.exit_code == 0, result.output
        assert "17.0.9" in result.output
        assert "1 valid" in result.output

    def test_no_hints_exits_2(
        self, runner: CliRunner, payload_path: str,
    ) -> None:
        result = runner.invoke(cli, ["scan", "--classpath", payload_path], env=_env())
        assert result.exit_code == 2
        assert "No Java hints" in result.output

    def test_unloadable_classpath_warns(
        self, runner: CliRunner, tmp_path: Path, caplog: pytest.LogCaptureFixture,
    ) -> None:
        script = tmp_path / "jdkprobe"
        script.write_text("#!/usr/bin/env python\n")
        result = runner.invoke(cli, ["scan", "--classpath", str(script)], env=_env())
        assert result.exit_code == 2
        assert "not a .jar archive or directory" in caplog.text

    def test_jar_classpath_does_not_warn(
        self, runner: CliRunner, payload_path: str, caplog: pytest.LogCaptureFixture,
    ) -> None:
        runner.invoke(cli, ["scan", "--classpath", payload_path], env=_env())
        assert "not a .jar archive" not in caplog.text

    def test_only_broken_exits_2(
        self, runner: CliRunner, tmp_path: Path, payload_path: str,
    ) -> None:
        root = create_silent_java_home(tmp_path / "jdk-silent")
        result = runner.invoke(
            cli, ["scan", "--classpath", payload_path],
            env=_env(JAVA_HOME=str(root)),
        )
        assert result.exit_code == 2
        assert "BROKEN" in result.output
        assert "output_empty" in result.output


class TestScanJson:
    """Machine-readable output."""

    def test_json_report(
        self, runner: CliRunner, tmp_path: Path, payload_path: str,
    ) -> None:
        good = create_java_home(tmp_path / "jdk21", version="21.0.1", vendor="Azul")
        silent = create_silent_java_home(tmp_path / "jdk-silent")
        result = runner.invoke(
            cli, ["scan", "--format", "json", "--classpath", payload_path],
            env=_env(HMCL_JAVA_HOME=str(silent), PATH=f"/usr/bin:{good}/bin"),
        )
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        by_path = {r["path"]: r for r in data["javaInfoList"]}
        assert by_path[str(good)]["sources"] == ["PATH_ENV_PRIMARY"]
        assert by_path[str(good)]["vendor"] == "Azul"
        assert by_path[str(silent)]["isBroken"] is True
        assert [e[0] for e in data["errors"]] == [str(silent)]


class TestScanOptions:
    """Configuration, timeout and upload options."""

    def test_bad_config_exits_1(
        self, runner: CliRunner, tmp_path: Path, payload_path: str,
    ) -> None:
        cfg = tmp_path / "bad.yaml"
        cfg.write_text("nonsense_key: 1\n")
        result = runner.invoke(
            cli, ["scan", "--config", str(cfg), "--classpath", payload_path],
            env=_env(),
        )
        assert result.exit_code == 1
        assert "nonsense_key" in result.output

    def test_negative_timeout_rejected(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["scan", "--timeout", "-1"], env=_env())
        assert result.exit_code == 2

    def test_upload_prints_key(
        self, runner: CliRunner, tmp_path: Path, payload_path: str,
    ) -> None:
        root = create_java_home(tmp_path / "jdk17")
        with patch(
            "jdkprobe.cli.scan.submit_report",
            new_callable=AsyncMock,
            return_value="k-42",
        ) as submit:
            result = runner.invoke(
                cli,
                ["scan", "--classpath", payload_path, "--upload", "https://c.test/"],
                env=_env(JAVA_HOME=str(root)),
            )
        assert result.exit_code == 0
        assert "Report key: k-42" in result.output
        assert submit.await_args.args[1] == "https://c.test/"

    def test_upload_uses_configured_url(
        self, runner: CliRunner, tmp_path: Path, payload_path: str,
    ) -> None:
        cfg = tmp_path / "jdkprobe.yaml"
        cfg.write_text("report_url: https://configured.test/\n")
        with patch(
            "jdkprobe.cli.scan.submit_report",
            new_callable=AsyncMock,
            return_value="k-1",
        ) as submit:
            result = runner.invoke(
                cli,
                ["scan", "--config", str(cfg), "--classpath", payload_path, "--upload"],
                env=_env(),
            )
        assert result.exit_code == 2
        assert submit.await_args.args[1] == "https://configured.test/"

    def test_upload_without_url(
        self, runner: CliRunner, payload_path: str,
    ) -> None:
        result = runner.invoke(
            cli, ["scan", "--classpath", payload_path, "--upload"], env=_env(),
        )
        assert result.exit_code == 2
        assert "needs a URL" in result.output

    def test_upload_failure_exits_1(
        self, runner: CliRunner, tmp_path: Path, payload_path: str,
    ) -> None:
        root = create_java_home(tmp_path / "jdk17")
        with patch(
            "jdkprobe.cli.scan.submit_report",
            new_callable=AsyncMock,
            side_effect=ReportError("Collector returned HTTP 503"),
        ):
            result = runner.invoke(
                cli,
                ["scan", "--classpath", payload_path, "--upload", "https://c.test/"],
                env=_env(JAVA_HOME=str(root)),
            )
        assert result.exit_code == 1
        assert "HTTP 503" in result.output
