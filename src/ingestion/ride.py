"""
Carpool offers and requests
"""
from core.categories import RIDE
from core.schemas import RideRow
from ingestion.base import CategoryAdapter, RawCategoryRecord, format_price


class RideAdapter(CategoryAdapter):
    spec = RIDE
    row_model = RideRow

    def project(self, row: RideRow) -> RawCategoryRecord:
        if row.price_per_seat is not None and row.price_per_seat > 0:
            price_label = f"{format_price(row.price_per_seat)}/seat"
        else:
            price_label = "Flexible"

        # Rides have no title or images of their own
        return RawCategoryRecord(
            title=f"{row.departure_location} → {row.destination_location}",
            subtitle=f"{row.role.title()} · {price_label}",
            searchable_text=(
                f"{row.departure_location} {row.destination_location} {row.role} carpool ride"
            ),
            preview_image_url=None,
            **self.ranking_fields(row),
        )
