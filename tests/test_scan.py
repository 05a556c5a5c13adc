"""Tests for discovery, the scan engine and the aggregated report."""

import json
from pathlib import Path

import pytest

from lockguard.core import scan_directory, scan_paths
from lockguard.discovery import discover_lockfiles
from lockguard.errors import InvalidInputError
from lockguard.models import Finding, LockfileKind
from lockguard.registry import MatchRegistry
from lockguard.report import ScanReport
from lockguard.summary import render_summary


def _found(report):
    return [(f.file.name, f.name, f.version, f.lockfile_kind) for f in report.findings]


class TestDiscovery:
    """Test lockfile discovery."""

    def test_finds_lockfiles_in_sorted_order(self, project_tree):
        paths = discover_lockfiles(project_tree)
        assert [p.relative_to(project_tree).as_posix() for p in paths] == [
            "api/yarn.lock",
            "tools/pnpm-lock.yaml",
            "web/package-lock.json",
        ]

    def test_node_modules_is_searched_and_git_is_not(self, tmp_path):
        nested = tmp_path / "node_modules" / "pkg"
        nested.mkdir(parents=True)
        (nested / "yarn.lock").write_text("")
        (tmp_path / ".git").mkdir()
        (tmp_path / ".git" / "package-lock.json").write_text("{}")
        paths = discover_lockfiles(tmp_path)
        assert paths == [nested / "yarn.lock"]

    def test_extra_excludes(self, project_tree):
        paths = discover_lockfiles(project_tree, excludes=["api", "tools"])
        assert [p.name for p in paths] == ["package-lock.json"]

    def test_directory_named_like_a_lockfile_is_ignored(self, tmp_path):
        (tmp_path / "yarn.lock").mkdir()
        assert discover_lockfiles(tmp_path) == []


class TestScanDirectory:
    """Test scanning a whole tree."""

    def test_scan_finds_each_occurrence(self, project_tree):
        report = scan_directory(project_tree)

        assert _found(report) == [
            ("yarn.lock", "chalk", "5.6.1", LockfileKind.YARN),
            ("pnpm-lock.yaml", "ansi-regex", "6.2.1", LockfileKind.PNPM),
            ("package-lock.json", "debug", "4.4.2", LockfileKind.NPM),
            ("package-lock.json", "ansi-styles", "6.2.2", LockfileKind.NPM),
        ]
        summary = report.summary
        assert summary.files_scanned == 3
        assert summary.findings_count == 4
        assert summary.files_failed == 0

    def test_scan_is_idempotent(self, project_tree):
        first = scan_directory(project_tree)
        second = scan_directory(project_tree)
        assert [f.identity() for f in first.findings] == [f.identity() for f in second.findings]

    def test_worker_pool_keeps_order(self, project_tree):
        sequential = scan_directory(project_tree)
        pooled = scan_directory(project_tree, workers=4)
        assert [f.identity() for f in pooled.findings] == [
            f.identity() for f in sequential.findings
        ]
        assert pooled.summary == sequential.summary

    @pytest.mark.parametrize(
        "content",
        [
            '{"packages": {}, "x": ' + "9" * 5000 + "}",
            "[" * 200000,
        ],
        ids=["oversized-integer", "deep-nesting"],
    )
    def test_json_decoder_limits_only_skip_that_file(self, tmp_path, content):
        """Decoder failures other than syntax errors are still per-file parse errors."""
        (tmp_path / "good").mkdir()
        (tmp_path / "good" / "package-lock.json").write_text(
            json.dumps({"packages": {"node_modules/debug": {"version": "4.4.2"}}})
        )
        (tmp_path / "bad").mkdir()
        (tmp_path / "bad" / "package-lock.json").write_text(content)

        report = scan_directory(tmp_path)

        assert report.summary.files_scanned == 2
        assert report.summary.files_failed == 1
        assert report.failed_files == (tmp_path / "bad" / "package-lock.json",)
        assert _found(report) == [("package-lock.json", "debug", "4.4.2", LockfileKind.NPM)]

    def test_malformed_file_does_not_stop_scan(self, project_tree):
        broken = project_tree / "broken"
        broken.mkdir()
        (broken / "package-lock.json").write_text('{"packages": {"node_modules/debug": {"ver')

        report = scan_directory(project_tree)

        assert report.summary.files_scanned == 4
        assert report.summary.files_failed == 1
        assert report.summary.findings_count == 4
        assert report.failed_files == (broken / "package-lock.json",)
        assert all(f.file != broken / "package-lock.json" for f in report.findings)

    def test_yarn_block_without_version_yields_nothing(self, tmp_path):
        (tmp_path / "yarn.lock").write_text('"chalk@^5.6.1":\n  resolved "x"\n')
        report = scan_directory(tmp_path)
        assert report.findings == ()
        assert report.summary.files_scanned == 1

    def test_custom_registry(self, project_tree):
        registry = MatchRegistry.from_strings(["@scope/chalk@5.6.1", "color@5.0.10"])
        report = scan_directory(project_tree, registry)
        assert [(f.name, f.version) for f in report.findings] == [
            ("@scope/chalk", "5.6.1"),
            ("color", "5.0.10"),
        ]

    def test_invalid_root(self, tmp_path):
        with pytest.raises(InvalidInputError):
            scan_directory(tmp_path / "missing")
        (tmp_path / "file.txt").write_text("x")
        with pytest.raises(InvalidInputError):
            scan_directory(tmp_path / "file.txt")

    def test_scan_paths_skips_unknown_files(self, tmp_path):
        other = tmp_path / "Cargo.lock"
        other.write_text("")
        report = scan_paths([other], MatchRegistry.default())
        assert report.summary.files_scanned == 0

    def test_scan_paths_rejects_bad_worker_count(self):
        with pytest.raises(ValueError):
            scan_paths([], MatchRegistry.default(), workers=0)


class TestEndToEndScenarios:
    """One lockfile per scenario, scanned from the directory root."""

    def test_npm_scenario(self, tmp_path):
        (tmp_path / "package-lock.json").write_text(
            json.dumps({"packages": {"node_modules/debug": {"version": "4.4.2"}}})
        )
        assert _found(scan_directory(tmp_path)) == [
            ("package-lock.json", "debug", "4.4.2", LockfileKind.NPM)
        ]

    def test_yarn_scenario(self, tmp_path):
        (tmp_path / "yarn.lock").write_text('"chalk@^5.6.1":\n  version "5.6.1"\n')
        assert _found(scan_directory(tmp_path)) == [
            ("yarn.lock", "chalk", "5.6.1", LockfileKind.YARN)
        ]

    def test_pnpm_scenario(self, tmp_path):
        (tmp_path / "pnpm-lock.yaml").write_text("/ansi-regex@6.2.1:\n")
        assert _found(scan_directory(tmp_path)) == [
            ("pnpm-lock.yaml", "ansi-regex", "6.2.1", LockfileKind.PNPM)
        ]

    def test_no_lockfiles(self, tmp_path):
        (tmp_path / "package.json").write_text("{}")
        report = scan_directory(tmp_path)
        assert report.summary.files_scanned == 0
        assert report.findings == ()
        assert not report.has_findings


class TestScanReport:
    """Test the aggregator and its renderings."""

    def test_appends_without_deduplication(self):
        report = ScanReport()
        finding = Finding(Path("a/yarn.lock"), "chalk", "5.6.1", LockfileKind.YARN)
        report.record_file(Path("a/yarn.lock"), [finding, finding])
        report.record_file(Path("b/yarn.lock"), [])
        assert report.findings == (finding, finding)
        assert report.summary.files_scanned == 2
        assert report.summary.findings_count == 2

    def test_to_dict(self, project_tree):
        data = scan_directory(project_tree).to_dict()
        assert data["hasFindings"] is True
        assert data["totals"] == {"filesScanned": 3, "findings": 4, "filesFailed": 0}
        assert data["findings"][0]["package"] == "chalk"
        assert data["findings"][0]["lockfileType"] == "yarn"
        json.dumps(data)

    def test_render_summary(self, project_tree):
        text = render_summary(scan_directory(project_tree))
        assert "Lockfiles analyzed: 3 | Findings: 4" in text
        assert "| yarn | chalk | 5.6.1 |" in text

    def test_render_empty_summary(self):
        text = render_summary(ScanReport())
        assert "No malicious packages" in text
