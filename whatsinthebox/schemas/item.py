"""Item schemas for request/response validation."""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field

from whatsinthebox.models.item import RecognitionSource


class ItemBase(BaseModel):
    """Base item schema."""
    name: str = Field(..., max_length=200)
    recognized_by: RecognitionSource = RecognitionSource.MANUAL
    confidence: float = Field(1.0, ge=0.0, le=1.0)


class ItemCreate(ItemBase):
    """Schema for adding an item to a box."""
    box_id: str


class ItemUpdate(BaseModel):
    """Schema for updating an item."""
    name: Optional[str] = Field(None, max_length=200)
    recognized_by: Optional[RecognitionSource] = None
    confidence: Optional[float] = Field(None, ge=0.0, le=1.0)


class ItemResponse(ItemBase):
    """Schema for item response."""
    id: str
    box_id: Optional[str] = None
    added_at: datetime
    
    class Config:
        from_attributes = True
