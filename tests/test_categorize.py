"""Tests for category detection"""

import pytest

from cloudfolio.categorize import CATEGORIES, UNCATEGORIZED, categorize, folder_category


class TestFolderLookup:
    """Second path segment decides the category when it is a known folder"""

    def test_documentary_folder(self):
        """Test the portfolio's documentary subfolder"""
        assert categorize("Praveen-PortfolioPics/Documentary/EOL01550_ki1e13", "EOL01550_ki1e13") == "documentary"

    @pytest.mark.parametrize("folder,expected", [
        ("documentry", "documentary"),
        ("Potraits", "portraits"),
        ("JELWS", "jewels"),
        ("Street", "street"),
    ])
    def test_misspelled_and_mixed_case_folders(self, folder, expected):
        """Test misspelled folder names still map to the right category"""
        assert folder_category(f"root/{folder}/img_001") == expected

    def test_folder_beats_filename_rules(self):
        """Test the folder wins over a filename that matches another rule"""
        assert categorize("root/macro/DSC00123", "DSC00123") == "macro"

    def test_two_segment_id_has_no_folder_category(self):
        """Test an asset directly under the root folder falls through to the rules"""
        assert folder_category("Praveen-PortfolioPics/documentary") is None

    def test_asset_folder_used_for_bare_filename(self):
        """Test a dynamic-folder asset is categorized by its asset folder"""
        assert categorize("alley_ab12", "alley_ab12", asset_folder="Praveen-PortfolioPics/Street") == "street"
        assert categorize("DSC01213_x9", "DSC01213_x9", asset_folder="Praveen-PortfolioPics/Street") == "street"

    def test_asset_folder_checked_before_identifier(self):
        """Test the asset folder wins over the identifier's own folder"""
        assert folder_category("root/macro/img", asset_folder="root/Potraits") == "portraits"

    def test_unknown_asset_folder_falls_back_to_identifier(self):
        """Test an unmapped or top-level asset folder leaves the identifier lookup in place"""
        assert folder_category("root/macro/img", asset_folder="root/misc") == "macro"
        assert folder_category("root/macro/img", asset_folder="Praveen-PortfolioPics") == "macro"
        assert categorize("EOL01550", "EOL01550", asset_folder="Praveen-PortfolioPics") == "documentary"

    def test_unknown_folder_falls_through(self):
        """Test an unknown subfolder uses the filename rules"""
        assert categorize("root/misc/EOL01550", "EOL01550") == "documentary"


class TestFilenameRules:
    """Ordered substring rules, first match wins"""

    @pytest.mark.parametrize("public_id,expected", [
        ("EOL01550_ki1e13", "documentary"),
        ("my_documentary_shot", "documentary"),
        ("DSC00412_abc", "portraits"),
        ("family-potrait", "portraits"),
        ("product_watch_01", "product"),
        ("1234_bottle", "product"),
        ("flower_MACRO", "macro"),
        ("DSC01077_x", "street"),
        ("Untitled_HDR_2", "interior"),
        ("DSC01213", "jewels"),
        ("jewelry_ring", "jewels"),
    ])
    def test_rule_table(self, public_id, expected):
        """Test each rule on a representative identifier"""
        assert categorize(public_id, public_id) == expected

    def test_first_rule_wins(self):
        """Test an identifier matching two rules gets the earlier category"""
        assert categorize("eol_street", "eol_street") == "documentary"

    def test_numeric_prefix_only_checked_on_filename(self):
        """Test the leading-digits rule looks at the filename, not the folder"""
        assert categorize("1999_archive/sunset", "sunset") == UNCATEGORIZED
        assert categorize("archive/1999_sunset", "1999_sunset") == "product"

    def test_fallback(self):
        """Test nothing matching gives uncategorized"""
        assert categorize("sunset_beach", "sunset_beach") == UNCATEGORIZED

    def test_filename_defaults_to_last_segment(self):
        """Test the filename argument is optional"""
        assert categorize("archive/1999_sunset") == "product"


class TestCategorizeProperties:
    """Purity and closed label set"""

    IDS = ["a/b/c", "EOL1", "DSC01077", "x", "root/Jelws/DSC", "samples/people/boy"]

    def test_deterministic(self):
        """Test repeated calls give the same label"""
        for public_id in self.IDS:
            first = categorize(public_id)
            assert all(categorize(public_id) == first for _ in range(5))

    def test_labels_are_closed_set(self):
        """Test every result is one of the known categories"""
        for public_id in self.IDS:
            assert categorize(public_id) in CATEGORIES
