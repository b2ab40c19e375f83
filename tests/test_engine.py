#!/usr/bin/env python3
"""
PODVALID ENGINE & FILESYSTEM SUITE
----------------------------------
Covers the engine across filesystem edge cases:
1. Valid, invalid and empty manifests
2. Unreadable and malformed files
3. Directory discovery (extensions, symlinks, depth)
4. Summary metrics
"""

import os

import pytest

from manifests import VALID_IMAGE_LINE, VALID_POD
from podvalid.core.engine import (
    STATUS_INVALID,
    STATUS_PARSE_ERROR,
    STATUS_READ_ERROR,
    STATUS_VALID,
    ValidationEngine,
)


@pytest.fixture
def engine():
    return ValidationEngine()


def test_valid_file(engine, tmp_path):
    manifest = tmp_path / "pod.yaml"
    manifest.write_text(VALID_POD)

    report = engine.validate_file(manifest)

    assert report.status == STATUS_VALID
    assert report.success
    assert report.diagnostics == []
    assert report.display_name == "pod.yaml"


def test_invalid_file_collects_diagnostics(engine, tmp_path):
    manifest = tmp_path / "pod.yaml"
    manifest.write_text(VALID_POD.replace(VALID_IMAGE_LINE, "      image: myimage\n"))

    report = engine.validate_file(manifest)

    assert report.status == STATUS_INVALID
    assert [(d.line, d.message) for d in report.diagnostics] == [(12, "image has invalid format 'myimage'")]


def test_empty_file_is_invalid(engine, tmp_path):
    manifest = tmp_path / "empty.yaml"
    manifest.write_text("")

    report = engine.validate_file(manifest)

    assert report.status == STATUS_INVALID
    assert [d.message for d in report.diagnostics] == ["empty yaml document"]


def test_missing_file_is_a_read_error(engine, tmp_path):
    report = engine.validate_file(tmp_path / "nope.yaml")

    assert report.status == STATUS_READ_ERROR
    assert report.error
    assert not report.success


def test_malformed_file_is_a_parse_error(engine, tmp_path):
    manifest = tmp_path / "bad.yaml"
    manifest.write_text("spec: [unclosed\n")

    report = engine.validate_file(manifest)

    assert report.status == STATUS_PARSE_ERROR
    assert report.diagnostics == []


def test_directory_discovery(engine, tmp_path):
    (tmp_path / "b.yaml").write_text(VALID_POD)
    (tmp_path / "a.YML").write_text(VALID_POD)
    (tmp_path / "notes.txt").write_text("not a manifest")
    nested = tmp_path / "team" / "svc"
    nested.mkdir(parents=True)
    (nested / "pod.yaml").write_text(VALID_POD)

    found = engine.scan_directory(tmp_path)

    assert [p.relative_to(tmp_path).as_posix() for p in found] == ["a.YML", "b.yaml", "team/svc/pod.yaml"]


@pytest.mark.skipif(os.name == "nt", reason="POSIX symlinks")
def test_directory_discovery_skips_symlinks(engine, tmp_path):
    (tmp_path / "real.yaml").write_text(VALID_POD)
    os.symlink(tmp_path / "real.yaml", tmp_path / "link.yaml")

    assert [p.name for p in engine.scan_directory(tmp_path)] == ["real.yaml"]


def test_max_depth_limits_discovery(tmp_path):
    deep = tmp_path
    for i in range(4):
        deep = deep / f"depth_{i}"
    deep.mkdir(parents=True)
    (deep / "deep.yaml").write_text(VALID_POD)
    (tmp_path / "top.yaml").write_text(VALID_POD)

    shallow = ValidationEngine(max_depth=2)

    assert [p.name for p in shallow.scan_directory(tmp_path)] == ["top.yaml"]
    assert len(ValidationEngine(max_depth=10).scan_directory(tmp_path)) == 2


def test_invalid_max_depth_falls_back(tmp_path):
    assert ValidationEngine(max_depth="lots").max_depth == 10


def test_custom_extensions(tmp_path):
    (tmp_path / "pod.yaml").write_text(VALID_POD)
    (tmp_path / "pod.manifest").write_text(VALID_POD)

    engine = ValidationEngine(extensions=["manifest"])

    assert [p.name for p in engine.scan_directory(tmp_path)] == ["pod.manifest"]


def test_validate_path_uses_relative_names_and_reports_progress(engine, tmp_path):
    (tmp_path / "apps").mkdir()
    (tmp_path / "apps" / "web.yaml").write_text(VALID_POD)
    (tmp_path / "broken.yaml").write_text("kind: Pod\n")
    calls = []

    reports = engine.validate_path(tmp_path, progress_callback=lambda done, total: calls.append((done, total)))

    assert [r.display_name for r in reports] == [os.path.join("apps", "web.yaml"), "broken.yaml"]
    assert [r.status for r in reports] == [STATUS_VALID, STATUS_INVALID]
    assert calls == [(1, 2), (2, 2)]


def test_collect_targets(engine, tmp_path):
    manifest = tmp_path / "pod.yaml"
    manifest.write_text(VALID_POD)

    assert engine.collect_targets(manifest) == [manifest]
    assert engine.collect_targets(tmp_path) == [manifest]


def test_generate_summary(engine, tmp_path):
    (tmp_path / "ok.yaml").write_text(VALID_POD)
    (tmp_path / "bad.yaml").write_text("apiVersion: v2\n")
    (tmp_path / "broken.yaml").write_text("spec: [unclosed\n")

    summary = engine.generate_summary(engine.validate_path(tmp_path))

    assert summary["total_files"] == 3
    assert summary["valid"] == 1
    assert summary["invalid"] == 1
    assert summary["errors"] == 1
    # apiVersion unsupported + kind, metadata, spec required
    assert summary["diagnostics"] == 4
