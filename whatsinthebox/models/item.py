"""Box item model."""
import enum

from sqlalchemy import Column, String, DateTime, ForeignKey, Float, Enum
from sqlalchemy.orm import relationship

from whatsinthebox.database import Base
from whatsinthebox.models.box import new_id, utcnow


class RecognitionSource(str, enum.Enum):
    """How an item was identified."""
    AI = "AI Recognition"
    MANUAL = "Manual Entry"


class BoxItem(Base):
    """Item recorded as stored in a box."""
    __tablename__ = "box_items"
    
    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String(200), nullable=False)
    recognized_by = Column(
        Enum(RecognitionSource, values_callable=lambda e: [m.value for m in e], name="recognition_source"),
        default=RecognitionSource.MANUAL,
        nullable=False,
    )
    confidence = Column(Float, default=1.0, nullable=False)  # 0.0 to 1.0
    added_at = Column(DateTime, nullable=False, default=utcnow)
    # Items are created standalone and attached to a box later
    box_id = Column(String(36), ForeignKey("storage_boxes.id"), nullable=True, index=True)
    
    # Relationships
    box = relationship("StorageBox", back_populates="items")
    
    def __init__(self, name, recognized_by=RecognitionSource.MANUAL, confidence=1.0, **kwargs):
        super().__init__(
            id=kwargs.pop("id", None) or new_id(),
            name=name,
            recognized_by=RecognitionSource(recognized_by),
            confidence=confidence,
            added_at=kwargs.pop("added_at", utcnow()),
            **kwargs,
        )
    
    def __repr__(self):
        return f"<BoxItem {self.id} {self.name!r}>"
