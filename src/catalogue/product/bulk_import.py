"""Bulk product import from a spreadsheet exported as CSV.

Expected columns: ``name, price, stock, category, section, description, images``
where ``images`` is a comma-separated list of URLs (the first becomes the
product image). Rows without a name or a positive price are skipped, as are
rows the catalogue rejects (a taken slug, a name that is too long, ...). A
rejected row never stops the rows after it from being imported.
"""

import csv
import io
from dataclasses import dataclass, field

from protean.exceptions import ValidationError
from protean.utils.globals import current_domain

from catalogue.domain import logger
from catalogue.product.management import AddProduct


@dataclass
class ImportReport:
    imported: int = 0
    skipped: int = 0
    product_ids: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)


def _parse_price(raw: str | None) -> float | None:
    try:
        price = float((raw or "").replace(",", "").strip())
    except ValueError:
        return None
    return price if price > 0 else None


def _parse_stock(raw: str | None) -> int:
    try:
        return max(int(float((raw or "0").strip() or 0)), 0)
    except ValueError:
        return 0


def import_products(csv_text: str, source_name: str = "upload.csv") -> ImportReport:
    reader = csv.DictReader(io.StringIO(csv_text.lstrip("\ufeff")))
    if not reader.fieldnames:
        raise ValidationError({"file": ["Spreadsheet is empty"]})

    report = ImportReport()
    for line_number, row in enumerate(reader, start=2):
        row = {(key or "").strip().lower(): (value or "").strip() for key, value in row.items()}
        name = row.get("name", "")
        price = _parse_price(row.get("price"))
        if not name or price is None:
            report.skipped += 1
            continue

        images = [url.strip() for url in row.get("images", "").split(",") if url.strip()]
        stock = _parse_stock(row.get("stock"))
        try:
            command = AddProduct(
                name=name,
                price=price,
                category=row.get("category") or "uncategorised",
                section=row.get("section", ""),
                description=row.get("description", ""),
                image=images[0] if images else "",
                stock=stock,
                in_stock=stock > 0,
            )
            product_id = current_domain.process(command, asynchronous=False)
        except ValidationError as exc:
            report.skipped += 1
            report.errors.append(f"line {line_number}: {exc.messages}")
            logger.warning("product_import_row_rejected", source=source_name, line=line_number, errors=exc.messages)
            continue

        report.imported += 1
        report.product_ids.append(product_id)

    logger.info(
        "products_imported",
        source=source_name,
        imported=report.imported,
        skipped=report.skipped,
    )
    return report
