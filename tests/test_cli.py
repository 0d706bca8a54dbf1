"""CLI behaviour tests."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from sigaudit import cli
from sigaudit.cli import _build_parser

SIGS_YAML = """
sigs:
  - dir: sig-apps
    name: Apps
    label: apps
    mission_statement: Covers applications.
    charter_link: charter.md
    leadership:
      chairs:
        - {github: janedoe, name: Jane Doe, company: Acme}
        - {github: johnroe, name: John Roe, company: Acme}
      tech_leads:
        - {github: annpoe, name: Ann Poe, company: Acme}
    meetings:
      - description: Regular SIG Meeting
    contact:
      slack: sig-apps
      mailing_list: https://groups.google.com/g/kubernetes-sig-apps
      private_mailing_list: sig-apps-leads@kubernetes.io
      teams:
        - name: sig-apps
    subprojects:
      - name: workloads
        description: Workload controllers.
        contact:
          slack: sig-apps
          mailing_list: https://groups.google.com/g/kubernetes-sig-apps
        owners:
          - https://example.com/OWNERS
        meetings:
          - description: Subproject sync
"""


def test_cli_accepts_verbose_before_command() -> None:
    parser = _build_parser()
    args = parser.parse_args(["--verbose", "audit", "all"])
    assert args.verbose is True
    assert args.command == "audit"
    assert args.names == ["all"]


def test_cli_accepts_verbose_after_command() -> None:
    parser = _build_parser()
    args = parser.parse_args(["audit", "--verbose", "sig-apps", "Batch"])
    assert args.verbose is True
    assert args.names == ["sig-apps", "Batch"]


def test_cli_accepts_kubernetes_directory() -> None:
    parser = _build_parser()
    args = parser.parse_args(["audit", "--kubernetes-directory", "/src/k8s", "all"])
    assert args.kubernetes_directory == "/src/k8s"
    assert args.sigs_file is None


def test_cli_requires_a_name() -> None:
    parser = _build_parser()
    with pytest.raises(SystemExit):
        parser.parse_args(["audit"])


@pytest.fixture
def community(tmp_path: Path, monkeypatch) -> Path:
    root = tmp_path / "community"
    (root / "sig-apps").mkdir(parents=True)
    (root / "sig-apps" / "charter.md").write_text("# Charter\n", encoding="utf-8")
    (root / "sigs.yaml").write_text(SIGS_YAML, encoding="utf-8")
    kubernetes = tmp_path / "kubernetes"
    kubernetes.mkdir()
    monkeypatch.chdir(root)
    monkeypatch.delenv("GOPATH", raising=False)
    monkeypatch.setenv("SIGAUDIT_KUBERNETES_DIRECTORY", str(kubernetes))
    return root


def test_main_audits_and_prints_done(community: Path, capsys, monkeypatch) -> None:
    def fail_urlopen(*args, **kwargs):  # pragma: no cover - must not be reached
        raise AssertionError("unexpected network access")

    monkeypatch.setattr("sigaudit.fetch.urlopen", fail_urlopen)

    cli.main(["audit", "apps", "missing-group"])

    lines = capsys.readouterr().out.splitlines()
    assert lines[0].startswith("Running script : ")
    assert ">>>> Processing sig [sig-apps/Apps]" in lines
    assert (
        "ERROR: owner urls should match regexp "
        "https://raw.githubusercontent.com/(?P<org>[^/]+)/(?P<repo>[^/]+)/(?P<branch>[^/]+)/(?P<path>.*), "
        "found: https://example.com/OWNERS"
    ) in lines
    assert "[missing-group] not found" in lines
    assert lines[-1] == "Done."


def test_main_exits_when_kubernetes_directory_missing(community: Path, tmp_path: Path, capsys) -> None:
    missing = tmp_path / "nowhere"

    with pytest.raises(SystemExit) as excinfo:
        cli.main(["audit", "--kubernetes-directory", str(missing), "all"])

    assert excinfo.value.code == 1
    err = capsys.readouterr().err
    assert "please use --kubernetes-directory" in err
    assert f"{missing} does not exist" in err


def test_main_exits_when_sigs_yaml_is_invalid(community: Path, capsys) -> None:
    (community / "sigs.yaml").write_text("sigs: [unclosed\n", encoding="utf-8")

    with pytest.raises(SystemExit) as excinfo:
        cli.main(["audit", "all"])

    assert excinfo.value.code == 1
    assert "error parsing file" in capsys.readouterr().err


def test_main_exits_when_sigs_file_missing(community: Path, tmp_path: Path, capsys) -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["audit", "--sigs-file", str(tmp_path / "absent.yaml"), "all"])

    assert excinfo.value.code == 1
    assert "error parsing file" in capsys.readouterr().err


def test_main_writes_log_file_and_keeps_stdout_for_findings(community: Path, tmp_path: Path, capsys) -> None:
    log_file = tmp_path / "audit.log"

    cli.main(["--log-file", str(log_file), "audit", "apps"])

    out = capsys.readouterr().out
    assert "[sigaudit]" not in out
    assert out.splitlines()[-1] == "Done."
    log_text = log_file.read_text(encoding="utf-8")
    assert "sigaudit.cli: Auditing" in log_text
    assert "sigaudit.diagnostics: error finding: owner urls should match regexp" in log_text

    logger = logging.getLogger("sigaudit")
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)


def test_main_exits_when_sigs_file_is_a_directory(community: Path, tmp_path: Path, capsys) -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["audit", "--sigs-file", str(tmp_path), "all"])

    assert excinfo.value.code == 1
    assert "error parsing file" in capsys.readouterr().err
