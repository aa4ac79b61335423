"""Box schemas for request/response validation."""
from datetime import datetime
from typing import Optional, List
from pydantic import BaseModel, Field


class BoxBase(BaseModel):
    """Base box schema."""
    name: str = Field(..., max_length=200)
    location_hint: str = ""


class BoxCreate(BoxBase):
    """Schema for creating a box."""
    pass


class BoxUpdate(BaseModel):
    """Schema for updating a box."""
    name: Optional[str] = Field(None, max_length=200)
    location_hint: Optional[str] = None


class BoxResponse(BoxBase):
    """Schema for box response."""
    id: str
    photo_url: Optional[str] = None
    has_photo: bool
    item_count: int
    is_empty: bool
    created_at: datetime
    updated_at: datetime
    
    class Config:
        from_attributes = True


class BoxWithItems(BoxResponse):
    """Schema for box with items."""
    items: List["ItemResponse"] = []


class BoxLink(BaseModel):
    """Deep link to a box."""
    box_id: str
    url: str


# Forward reference for circular import
from whatsinthebox.schemas.item import ItemResponse
BoxWithItems.model_rebuild()
