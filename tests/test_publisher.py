"""
Tests for the publish gateway.
"""

import json
from pathlib import Path

from installer_db.publish.publisher import (
    Publisher,
    load_version_set,
    version_file_name,
    write_version_set,
)
from installer_db.sources.base.models import LATEST, DistributableFile, ProductCatalog, VersionSet

from .conftest import RecordingUploader


def _version_set():
    vs = VersionSet()
    vs.add("1.95.3", DistributableFile.build(
        url="https://update.code.visualstudio.com/1.95.3/code_1.95.3_amd64.deb",
        os="linux", arch="amd64", checksum="abc", extra="v1.95.3",
    ))
    vs.add(LATEST, DistributableFile.build(
        url="https://cygwin.com/setup-x86_64.exe", os="windows", arch="amd64", extra=LATEST,
    ))
    return vs


class TestPublisher:
    """publish() scenarios."""

    def test_empty_products_are_skipped(self, tmp_path: Path, recording_uploader):
        catalog = ProductCatalog()
        catalog.store("vscode", _version_set())
        catalog.store("miniconda", VersionSet())

        result = Publisher(tmp_path, recording_uploader).publish(catalog.view())

        assert sorted(p.name for p in tmp_path.iterdir()) == ["vscode.version.json"]
        assert recording_uploader.uploaded == [tmp_path / "vscode.version.json"]
        assert result.written == ["vscode"]
        assert result.skipped == ["miniconda"]
        assert result.success

    def test_file_content_is_indented_json(self, tmp_path: Path, recording_uploader):
        Publisher(tmp_path, recording_uploader).publish({"vscode": _version_set()})
        raw = (tmp_path / "vscode.version.json").read_text()
        assert raw.startswith('{\n  "1.95.3": [')
        data = json.loads(raw)
        assert list(data) == ["1.95.3", LATEST]
        assert data["1.95.3"][0] == {
            "url": "https://update.code.visualstudio.com/1.95.3/code_1.95.3_amd64.deb",
            "os": "linux",
            "arch": "amd64",
            "sum": "abc",
            "sum_type": "sha256",
            "extra": "v1.95.3",
        }

    def test_upload_failure_does_not_stop_others(self, tmp_path: Path):
        uploader = RecordingUploader(fail_on={"cygwin.version.json"})
        catalog = {"cygwin": _version_set(), "rustup": _version_set()}

        result = Publisher(tmp_path, uploader).publish(catalog)

        assert set(result.errors) == {"cygwin"}
        assert result.uploaded == ["rustup"]
        assert result.written == ["cygwin", "rustup"]
        assert uploader.uploaded == [tmp_path / "rustup.version.json"]

    def test_write_failure_does_not_stop_others(self, tmp_path: Path, recording_uploader):
        # a directory squatting on the file name makes the write fail
        (tmp_path / "cygwin.version.json").mkdir()
        catalog = {"cygwin": _version_set(), "msys2": _version_set()}

        result = Publisher(tmp_path, recording_uploader).publish(catalog)

        assert set(result.errors) == {"cygwin"}
        assert result.uploaded == ["msys2"]
        assert recording_uploader.uploaded == [tmp_path / "msys2.version.json"]

    def test_without_uploader_only_writes(self, tmp_path: Path):
        result = Publisher(tmp_path).publish({"rustup": _version_set()})
        assert result.written == ["rustup"]
        assert result.uploaded == []
        assert (tmp_path / "rustup.version.json").is_file()

    def test_work_dir_created(self, tmp_path: Path, recording_uploader):
        work_dir = tmp_path / "nested" / "work"
        Publisher(work_dir, recording_uploader).publish({"msys2": _version_set()})
        assert (work_dir / "msys2.version.json").is_file()


class TestSerialization:
    """Round trip through the published file."""

    def test_round_trip(self, tmp_path: Path):
        vs = _version_set()
        path = write_version_set(vs, tmp_path / version_file_name("vscode"))
        assert load_version_set(path) == vs

    def test_file_name_pattern(self):
        assert version_file_name("sdkmanager") == "sdkmanager.version.json"
