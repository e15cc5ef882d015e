"""Application tests for CSV product import."""

import pytest
from protean.exceptions import ValidationError

from catalogue.product import queries
from catalogue.product.bulk_import import import_products

CSV = (
    "\ufeffname,price,stock,category,section,description,images\n"
    "Milo,4500,12,packaged-foods,drinks,Chocolate malt drink,\"https://cdn.test/milo1.jpg, https://cdn.test/milo2.jpg\"\n"
    ",3000,5,packaged-foods,drinks,No name,\n"
    "Free Sample,0,5,packaged-foods,snacks,No price,\n"
    "Peak Milk,\"9,500\",0,packaged-foods,drinks,,\n"
)


def _import(text):
    return import_products(text, source_name="products.csv")


class TestImportProducts:
    def test_imports_valid_rows_and_skips_invalid(self):
        report = _import(CSV)
        assert report.imported == 2
        assert report.skipped == 2
        assert queries.count_products() == 2

    def test_first_image_becomes_product_image(self):
        _import(CSV)
        product = queries.get_product_by_slug("milo")
        assert product.image == "https://cdn.test/milo1.jpg"
        assert product.stock == 12
        assert product.in_stock

    def test_zero_stock_is_out_of_stock(self):
        _import(CSV)
        product = queries.get_product_by_slug("peak-milk")
        assert product.price == 9500
        assert not product.in_stock

    def test_duplicate_slug_is_skipped_with_error(self):
        _import(CSV)
        report = _import("name,price\nMilo,4600\n")
        assert report.imported == 0
        assert report.skipped == 1
        assert report.errors[0].startswith("line 2:")

    def test_rejected_row_does_not_stop_later_rows(self):
        too_long = "N" * 201
        report = _import(f"name,price,category\nGood,1000,snacks\n{too_long},2000,snacks\nAfter,3000,snacks\n")

        assert report.imported == 2
        assert report.skipped == 1
        assert len(report.errors) == 1
        assert report.errors[0].startswith("line 3:")
        assert "name" in report.errors[0]
        assert [p.name for p in queries.list_products()] == ["After", "Good"]

    def test_headers_are_case_insensitive(self):
        report = _import("Name,Price,Category\nGolden Morn,3800,packaged-foods\n")
        assert report.imported == 1

    def test_empty_file_rejected(self):
        with pytest.raises(ValidationError):
            _import("")
