"""
Tests for the two-pass "latest" alias resolution.
"""

from installer_db.sources.base.latest_resolver import resolve_latest_alias
from installer_db.sources.base.models import LATEST, DistributableFile, VersionSet


def _latest_set(*checksums):
    vs = VersionSet()
    for index, checksum in enumerate(checksums):
        vs.add(LATEST, DistributableFile.build(
            url=f"https://example.com/pkg-latest-{index}.exe",
            os="windows",
            arch="amd64",
            checksum=checksum,
            extra=LATEST,
        ))
    return vs


class TestResolveLatestAlias:
    """Tests for resolve_latest_alias."""

    def test_matching_checksum_renames_latest(self):
        vs = _latest_set("deadbeef")
        original = vs[LATEST][0]

        resolved = resolve_latest_alias(vs, [("pkg-2024.11.05.exe", "deadbeef")])

        assert resolved == "2024.11.05"
        assert LATEST not in vs
        assert vs["2024.11.05"] == [original]

    def test_zero_matches_keeps_latest(self):
        vs = _latest_set("deadbeef")
        assert resolve_latest_alias(vs, [("pkg-2024.11.05.exe", "cafebabe")]) is None
        assert vs.versions() == [LATEST]

    def test_first_match_wins(self):
        vs = _latest_set("deadbeef", "feedface")
        listing = [
            ("pkg-2024.10.01.exe", "00000000"),
            ("pkg-2024.11.05.sh", "feedface"),
            ("pkg-2024.11.06.exe", "deadbeef"),
        ]
        assert resolve_latest_alias(vs, listing) == "2024.11.05"
        assert vs.versions() == ["2024.11.05"]
        assert len(vs["2024.11.05"]) == 2

    def test_listing_order_independent_of_latest_position(self):
        """Versioned rows listed before the latest rows still resolve."""
        vs = _latest_set("deadbeef")
        listing = [("pkg-2024.11.05.exe", "deadbeef")]
        assert resolve_latest_alias(vs, iter(listing)) == "2024.11.05"

    def test_match_without_version_token_is_skipped(self):
        vs = _latest_set("deadbeef")
        listing = [("pkg-nightly.exe", "deadbeef"), ("pkg-1.2.exe", "deadbeef")]
        assert resolve_latest_alias(vs, listing) == "1.2"

    def test_latest_without_checksums_stays(self):
        vs = _latest_set("")
        assert resolve_latest_alias(vs, [("pkg-1.2.exe", "")]) is None
        assert LATEST in vs

    def test_no_latest_key(self):
        vs = VersionSet()
        assert resolve_latest_alias(vs, [("pkg-1.2.exe", "aa")]) is None
        assert len(vs) == 0

    def test_custom_pattern(self):
        vs = _latest_set("deadbeef")
        assert resolve_latest_alias(vs, [("build-20241105.exe", "deadbeef")], r"\d{8}") == "20241105"
