"""
Unit tests for the version ledger.
"""

from acul_samples.build.ledger import VersionLedger, is_version_id, mint_version


class TestVersionIds:
    def test_minted_ids_are_well_formed_and_unique(self):
        ids = {mint_version() for _ in range(20)}
        assert len(ids) == 20
        assert all(is_version_id(v) for v in ids)
        assert all(len(v) == len("v-") + 16 for v in ids)

    def test_rejects_path_like_values(self):
        assert not is_version_id("../etc")
        assert not is_version_id("v-XYZ1")
        assert not is_version_id("")


class TestLedger:
    def test_empty_ledger(self, tmp_path):
        ledger = VersionLedger(tmp_path / "dist")
        assert ledger.versions() == []
        assert ledger.current() is None

    def test_append_is_ordered_and_unique(self, tmp_path):
        ledger = VersionLedger(tmp_path)
        ledger.append("v-aaaa")
        ledger.append("v-bbbb")
        ledger.append("v-aaaa")
        assert ledger.versions() == ["v-aaaa", "v-bbbb"]

    def test_prune_removes_every_other_version(self, tmp_path):
        ledger = VersionLedger(tmp_path)
        for version in ("v-aaaa", "v-bbbb", "v-cccc"):
            ledger.version_dir(version).mkdir()
            ledger.append(version)

        removed = ledger.prune(keep="v-cccc")

        assert sorted(removed) == ["v-aaaa", "v-bbbb"]
        assert ledger.versions() == ["v-cccc"]
        assert ledger.version_dir("v-cccc").is_dir()
        assert not ledger.version_dir("v-aaaa").exists()

    def test_prune_skips_malformed_entries(self, tmp_path):
        ledger = VersionLedger(tmp_path)
        (tmp_path / "keepme").mkdir()
        ledger.versions_file.write_text("keepme\nv-aaaa\n", encoding="utf-8")

        ledger.prune(keep="v-aaaa")

        assert (tmp_path / "keepme").is_dir()

    def test_promote_overwrites_pointer(self, tmp_path):
        ledger = VersionLedger(tmp_path)
        ledger.promote("v-aaaa")
        ledger.promote("v-bbbb")

        assert ledger.current() == "v-bbbb"
        assert not (tmp_path / ".current-version.tmp").exists()
