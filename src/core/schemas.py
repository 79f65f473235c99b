"""
Row schemas for the category views read from the remote store.
"""
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict


class ImageRow(BaseModel):
    url: str


class PostRow(BaseModel):
    """
    Columns shared by every category view.
    """
    model_config = ConfigDict(coerce_numbers_to_str=True)

    id: str
    created_at: Optional[datetime] = None
    hot_score: Optional[float] = None
    highlight_type: Optional[str] = None
    highlight_rank: Optional[int] = None
    images: Optional[List[ImageRow]] = None

    @property
    def first_image_url(self) -> Optional[str]:
        if not self.images:
            return None
        return self.images[0].url


class RentRow(PostRow):
    title: str
    location: str
    price: float


class MarketRow(PostRow):
    title: str
    category: str
    condition: str
    price: float


class RideRow(PostRow):
    departure_location: str
    destination_location: str
    role: str
    price_per_seat: Optional[float] = None


class TeamRow(PostRow):
    title: str
    description: Optional[str] = None
    skills_needed: Optional[List[str]] = None


class ForumRow(PostRow):
    title: str
    category: str
    description: Optional[str] = None
    comment_count: Optional[int] = None


class LikeRow(BaseModel):
    model_config = ConfigDict(coerce_numbers_to_str=True)

    target_id: str
