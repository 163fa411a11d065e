"""
Tests for DistributableFile, VersionSet and ProductCatalog.
"""

import json

import pytest
from pydantic import ValidationError

from installer_db.sources.base.exceptions import ValidationException
from installer_db.sources.base.models import (
    LATEST,
    DistributableFile,
    ProductCatalog,
    VersionSet,
)


def _file(url="https://example.com/tool-1.0-win.zip", **kwargs):
    defaults = dict(os="windows", arch="amd64", extra="v1.0")
    defaults.update(kwargs)
    return DistributableFile.build(url=url, **defaults)


class TestDistributableFile:
    """Tests for the record type."""

    def test_build_sets_checksum_type_with_checksum(self):
        item = _file(checksum="  abc123 \n")
        assert item.sum == "abc123"
        assert item.sum_type == "sha256"

    def test_build_without_checksum_leaves_type_empty(self):
        item = _file(checksum="")
        assert item.sum == ""
        assert item.sum_type == ""

    def test_checksum_type_without_checksum_rejected(self):
        with pytest.raises(ValidationError):
            DistributableFile(url="https://example.com/a.zip", os="linux", arch="amd64", sum_type="sha256")

    def test_checksum_without_type_rejected(self):
        with pytest.raises(ValidationError):
            DistributableFile(url="https://example.com/a.zip", os="linux", arch="amd64", sum="abc")

    @pytest.mark.parametrize("url", ["", "tool.zip", "/android/repository/tool.zip", "https://"])
    def test_relative_url_rejected(self, url):
        with pytest.raises(ValidationError):
            _file(url=url)

    def test_unknown_tags_rejected(self):
        with pytest.raises(ValidationError):
            _file(os="beos")
        with pytest.raises(ValidationError):
            _file(arch="sparc")

    def test_json_field_names(self):
        data = _file(checksum="abc").model_dump()
        assert set(data) == {"url", "os", "arch", "sum", "sum_type", "extra"}


class TestVersionSet:
    """Tests for the version label -> files mapping."""

    def test_add_preserves_insertion_order(self):
        vs = VersionSet()
        first = _file(url="https://example.com/b.zip")
        second = _file(url="https://example.com/a.zip")
        vs.add("2.0", first)
        vs.add("1.0", second)
        vs.add("2.0", second)
        assert vs.versions() == ["2.0", "1.0"]
        assert vs["2.0"] == [first, second]

    def test_rename_moves_files_and_drops_old_key(self):
        vs = VersionSet()
        item = _file(extra=LATEST)
        vs.add(LATEST, item)
        vs.rename(LATEST, "2024.11.05")
        assert LATEST not in vs
        assert vs["2024.11.05"] == [item]

    def test_rename_onto_existing_key_appends(self):
        vs = VersionSet()
        existing = _file(url="https://example.com/old.zip")
        moved = _file(url="https://example.com/new.zip")
        vs.add("1.0", existing)
        vs.add(LATEST, moved)
        vs.rename(LATEST, "1.0")
        assert vs["1.0"] == [existing, moved]
        assert len(vs) == 1

    def test_rename_missing_key_is_noop(self):
        vs = VersionSet()
        vs.add("1.0", _file())
        vs.rename(LATEST, "2.0")
        assert vs.versions() == ["1.0"]

    def test_round_trip_through_json(self):
        vs = VersionSet()
        vs.add("1.2.3", _file(checksum="abc"))
        vs.add("1.2.3", _file(url="https://example.com/tool-1.2.3-linux.tar.gz", os="linux", arch="arm64"))
        vs.add(LATEST, _file(url="https://example.com/latest.exe", extra=LATEST))

        restored = VersionSet.from_dict(json.loads(json.dumps(vs.to_dict(), indent=2)))
        assert restored == vs
        assert restored.versions() == ["1.2.3", LATEST]

    def test_invalid_stored_record_rejected(self):
        with pytest.raises(ValidationException) as excinfo:
            VersionSet.from_dict({"1.0": [{"url": "tool.exe", "os": "windows", "arch": "amd64"}]})
        assert excinfo.value.validation_field == "1.0"

    def test_empty_is_falsy(self):
        assert not VersionSet()
        assert len(VersionSet()) == 0


class TestProductCatalog:
    """Tests for the per-run catalog."""

    def test_store_records_product(self):
        catalog = ProductCatalog()
        vs = VersionSet()
        vs.add(LATEST, _file())
        catalog.store("cygwin", vs)
        assert "cygwin" in catalog
        assert catalog["cygwin"] is vs
        assert list(catalog) == ["cygwin"]

    def test_store_replaces_snapshot(self):
        catalog = ProductCatalog()
        old = VersionSet()
        old.add("1.0", _file())
        catalog.store("vscode", old)
        fresh = VersionSet()
        catalog.store("vscode", fresh)
        assert catalog["vscode"] is fresh

    def test_view_is_read_only(self):
        catalog = ProductCatalog()
        catalog.store("msys2", VersionSet())
        view = catalog.view()
        assert "msys2" in view
        with pytest.raises(TypeError):
            view["other"] = VersionSet()
