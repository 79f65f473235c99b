"""
Secondhand marketplace items
"""
from core.categories import MARKET
from core.schemas import MarketRow
from ingestion.base import CategoryAdapter, RawCategoryRecord, format_price


class MarketAdapter(CategoryAdapter):
    spec = MARKET
    row_model = MarketRow

    def project(self, row: MarketRow) -> RawCategoryRecord:
        return RawCategoryRecord(
            title=row.title,
            subtitle=f"{format_price(row.price)} · {row.condition}",
            searchable_text=f"{row.title} {row.condition} market secondhand {row.category}",
            preview_image_url=row.first_image_url,
            **self.ranking_fields(row),
        )
