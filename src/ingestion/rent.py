"""
Housing listings
"""
from core.categories import RENT
from core.schemas import RentRow
from ingestion.base import CategoryAdapter, RawCategoryRecord, format_price


class RentAdapter(CategoryAdapter):
    spec = RENT
    row_model = RentRow

    def project(self, row: RentRow) -> RawCategoryRecord:
        return RawCategoryRecord(
            title=row.title,
            subtitle=f"{format_price(row.price)}/mo · {row.location}",
            searchable_text=f"{row.title} {row.location} rent housing",
            preview_image_url=row.first_image_url,
            **self.ranking_fields(row),
        )
