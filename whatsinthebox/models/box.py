"""Storage box model."""
import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, String, Text, DateTime
from sqlalchemy.orm import relationship

from whatsinthebox.database import Base


def utcnow() -> datetime:
    """Naive UTC timestamp, as stored by SQLite."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def new_id() -> str:
    return str(uuid.uuid4())


class StorageBox(Base):
    """Storage box - owns the items recorded inside it."""
    __tablename__ = "storage_boxes"
    
    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String(200), nullable=False)
    # Trimmed, lower-cased shadow of ``name`` used for duplicate checks
    name_lowercased = Column(String(200), index=True, nullable=False)
    photo_url = Column(Text, nullable=True)
    location_hint = Column(String(255), nullable=False, default="")
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow)
    
    # Relationships
    items = relationship(
        "BoxItem",
        back_populates="box",
        cascade="all",
        order_by="BoxItem.added_at",
    )
    
    def __init__(self, name, photo_url=None, location_hint="", **kwargs):
        now = utcnow()
        super().__init__(
            id=kwargs.pop("id", None) or new_id(),
            name=name,
            name_lowercased=name.strip().lower(),
            photo_url=photo_url,
            location_hint=location_hint or "",
            created_at=kwargs.pop("created_at", now),
            updated_at=kwargs.pop("updated_at", now),
            **kwargs,
        )
    
    @property
    def item_count(self) -> int:
        return len(self.items)
    
    @property
    def is_empty(self) -> bool:
        return self.item_count == 0
    
    @property
    def has_photo(self) -> bool:
        return self.photo_url is not None
    
    def touch(self):
        self.updated_at = utcnow()
    
    def __repr__(self):
        return f"<StorageBox {self.id} {self.name!r}>"
