"""Tests for the static category tree."""

from catalogue.category.tree import CATEGORY_TREE, get_category, get_section


class TestCategoryTree:
    def test_four_top_level_categories(self):
        assert [category.slug for category in CATEGORY_TREE] == [
            "african-foodstuff",
            "packaged-foods",
            "wigs",
            "soap-personal-care",
        ]

    def test_get_category(self):
        category = get_category("wigs")
        assert category.name == "Wigs & Hair Products"
        assert category.section("lace-frontal").name == "Lace Frontals"

    def test_unknown_category(self):
        assert get_category("electronics") is None

    def test_get_section(self):
        section = get_section("packaged-foods", "drinks")
        assert section.name == "Beverages"
        assert section.image == "/categories/drinks.jpg"

    def test_unknown_section(self):
        assert get_section("packaged-foods", "frozen") is None
        assert get_section("electronics", "drinks") is None
