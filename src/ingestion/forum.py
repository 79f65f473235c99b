"""
Forum discussions
"""
from core.categories import FORUM
from core.schemas import ForumRow
from ingestion.base import CategoryAdapter, RawCategoryRecord, first_non_empty


class ForumAdapter(CategoryAdapter):
    spec = FORUM
    row_model = ForumRow

    def project(self, row: ForumRow) -> RawCategoryRecord:
        comments = row.comment_count or 0
        fallback = f"{comments} comments" if comments > 0 else "New discussion"
        subtitle = first_non_empty(row.description, fallback)

        return RawCategoryRecord(
            title=row.title,
            subtitle=subtitle,
            searchable_text=f"{row.title} {subtitle} forum {row.category}",
            preview_image_url=row.first_image_url,
            **self.ranking_fields(row),
        )
