"""
Study groups and project teams
"""
from core.categories import TEAM
from core.schemas import TeamRow
from ingestion.base import CategoryAdapter, RawCategoryRecord, first_non_empty

DEFAULT_SUBTITLE = "Looking for teammates"


class TeamAdapter(CategoryAdapter):
    spec = TEAM
    row_model = TeamRow

    def project(self, row: TeamRow) -> RawCategoryRecord:
        subtitle = first_non_empty(row.description, DEFAULT_SUBTITLE)
        skills = " ".join(row.skills_needed or [])

        return RawCategoryRecord(
            title=row.title,
            subtitle=subtitle,
            searchable_text=f"{row.title} {subtitle} groups team {skills}".rstrip(),
            preview_image_url=row.first_image_url,
            **self.ranking_fields(row),
        )
