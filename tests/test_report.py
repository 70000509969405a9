"""Tests for the folder report helpers"""

from conftest import record

from cloudfolio.report import format_kb, format_mb, group_by_folder


class TestGroupByFolder:

    def test_root_assets_under_empty_key(self):
        """Test assets without a folder are grouped under the empty string"""
        groups = group_by_folder([record("sunset"), record("portfolio/macro/bee")])
        assert [r.public_id for r in groups[""]] == ["sunset"]
        assert [r.public_id for r in groups["portfolio/macro"]] == ["portfolio/macro/bee"]

    def test_folders_sorted(self):
        """Test folders come out in sorted order, root first"""
        groups = group_by_folder([
            record("street/a"), record("documentary/b"), record("loose"), record("macro/deep/c"),
        ])
        assert list(groups) == ["", "documentary", "macro/deep", "street"]

    def test_record_order_kept_within_folder(self):
        """Test records keep their listing order inside a folder"""
        groups = group_by_folder([record("street/z"), record("street/a"), record("street/m")])
        assert [r.filename for r in groups["street"]] == ["z", "a", "m"]

    def test_empty(self):
        assert group_by_folder([]) == {}


class TestFormatting:

    def test_sizes(self):
        assert format_kb(2048) == "2.0 KB"
        assert format_mb(3 * 1024 * 1024) == "3.00 MB"
