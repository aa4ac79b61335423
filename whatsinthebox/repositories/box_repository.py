"""Box repository.

All writes to boxes and their items go through :class:`BoxRepository`. Name
validation and duplicate detection happen here before anything reaches the
session; the database only stores what has already been checked. Deleting a
box removes its items through the delete cascade on ``StorageBox.items``;
removing an item from a box only detaches it.
"""
import enum
import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from whatsinthebox.errors import DuplicateNameError, InvalidItemError, InvalidNameError
from whatsinthebox.models.box import StorageBox
from whatsinthebox.models.item import BoxItem, RecognitionSource

logger = logging.getLogger(__name__)


class BoxOrder(str, enum.Enum):
    """Sort orders for box listings."""
    NAME = "name"
    RECENTLY_UPDATED = "recently_updated"


def normalize_name(name: str) -> str:
    """Return the trimmed name, raising InvalidNameError when nothing is left."""
    trimmed = (name or "").strip()
    if not trimmed:
        raise InvalidNameError()
    return trimmed


class BoxRepository:
    """Create, read, update and delete boxes and their items."""

    def __init__(self, db: Session):
        self.db = db

    # Boxes

    def insert(self, box: StorageBox) -> StorageBox:
        """Validate and persist a new box."""
        name = normalize_name(box.name)
        if self.name_exists(name, exclude_id=box.id):
            logger.info("Rejected duplicate box name %r", name)
            raise DuplicateNameError()

        box.name = name
        box.name_lowercased = name.lower()
        box.touch()
        self.db.add(box)
        self.db.commit()
        self.db.refresh(box)
        logger.info("Created box %s (%s)", box.id, box.name)
        return box

    def update(
        self,
        box: StorageBox,
        name: Optional[str] = None,
        location_hint: Optional[str] = None,
        photo_url: Optional[str] = None,
    ) -> StorageBox:
        """Apply the given changes; a rename is validated like an insert."""
        if name is not None:
            name = normalize_name(name)
            if self.name_exists(name, exclude_id=box.id):
                logger.info("Rejected rename of box %s to duplicate %r", box.id, name)
                raise DuplicateNameError()
            box.name = name
            box.name_lowercased = name.lower()
        if location_hint is not None:
            box.location_hint = location_hint
        if photo_url is not None:
            box.photo_url = photo_url

        box.touch()
        self.db.commit()
        self.db.refresh(box)
        logger.info("Updated box %s", box.id)
        return box

    def delete(self, box: StorageBox) -> None:
        """Delete a box together with every item it owns."""
        box_id, count = box.id, box.item_count
        self.db.delete(box)
        self.db.commit()
        logger.info("Deleted box %s and %d item(s)", box_id, count)

    def find_by_id(self, box_id: str) -> Optional[StorageBox]:
        return self.db.query(StorageBox).filter(StorageBox.id == box_id).first()

    def find_by_predicate(self, *criteria) -> List[StorageBox]:
        """Return boxes matching all SQLAlchemy criteria, sorted by name."""
        return self.db.query(StorageBox).filter(*criteria).order_by(StorageBox.name).all()

    def list_sorted(
        self,
        order: BoxOrder = BoxOrder.NAME,
        search: Optional[str] = None,
        skip: int = 0,
        limit: Optional[int] = None,
        with_photo: bool = False,
        empty: bool = False,
    ) -> List[StorageBox]:
        """List boxes; every given filter applies together."""
        query = self.db.query(StorageBox)
        if search:
            search_term = contains_pattern(search.strip().lower())
            query = query.filter(
                (StorageBox.name_lowercased.like(search_term, escape=LIKE_ESCAPE)) |
                (StorageBox.location_hint.ilike(search_term, escape=LIKE_ESCAPE))
            )
        if with_photo:
            query = query.filter(StorageBox.photo_url.isnot(None))
        if empty:
            query = query.filter(~StorageBox.items.any())
        if order == BoxOrder.RECENTLY_UPDATED:
            query = query.order_by(StorageBox.updated_at.desc())
        else:
            query = query.order_by(StorageBox.name.asc())
        query = query.offset(skip)
        if limit is not None:
            query = query.limit(limit)
        return query.all()

    def with_photos(self) -> List[StorageBox]:
        return self.list_sorted(with_photo=True)

    def empty_boxes(self) -> List[StorageBox]:
        return self.list_sorted(empty=True)

    def name_exists(self, name: str, exclude_id: Optional[str] = None) -> bool:
        """Check whether another box already uses this name (case-insensitive)."""
        query = self.db.query(StorageBox.id).filter(
            StorageBox.name_lowercased == name.strip().lower()
        )
        if exclude_id is not None:
            query = query.filter(StorageBox.id != exclude_id)
        return query.first() is not None

    # Items

    def add_item(self, box: StorageBox, item: BoxItem) -> BoxItem:
        """Attach an item to a box."""
        validate_item(item.name, item.confidence)
        item.name = item.name.strip()
        box.items.append(item)
        item.box = box
        box.touch()
        self.db.commit()
        self.db.refresh(item)
        logger.info("Added item %s to box %s", item.id, box.id)
        return item

    def remove_item(self, box: StorageBox, item_id: str) -> Optional[BoxItem]:
        """Detach the item with ``item_id`` from the box; the item record is kept.

        Returns the detached item, or None if the box does not hold it.
        """
        detached = next((item for item in box.items if item.id == item_id), None)
        if detached is not None:
            box.items.remove(detached)
            detached.box = None
        box.touch()
        self.db.commit()
        if detached is not None:
            logger.info("Removed item %s from box %s", item_id, box.id)
        return detached

    def delete_item(self, item: BoxItem) -> None:
        """Detach the item from its box, if any, and delete it."""
        item_id = item.id
        if item.box is not None:
            self.remove_item(item.box, item.id)
        self.db.delete(item)
        self.db.commit()
        logger.info("Deleted item %s", item_id)

    def find_item(self, item_id: str) -> Optional[BoxItem]:
        return self.db.query(BoxItem).filter(BoxItem.id == item_id).first()

    def list_items(self, box_id: Optional[str] = None, search: Optional[str] = None) -> List[BoxItem]:
        query = self.db.query(BoxItem)
        if box_id:
            query = query.filter(BoxItem.box_id == box_id)
        if search:
            query = query.filter(BoxItem.name.ilike(contains_pattern(search), escape=LIKE_ESCAPE))
        return query.order_by(BoxItem.added_at).all()

    def update_item(
        self,
        item: BoxItem,
        name: Optional[str] = None,
        recognized_by: Optional[RecognitionSource] = None,
        confidence: Optional[float] = None,
    ) -> BoxItem:
        validate_item(
            name if name is not None else item.name,
            confidence if confidence is not None else item.confidence,
        )
        if name is not None:
            item.name = name.strip()
        if recognized_by is not None:
            item.recognized_by = RecognitionSource(recognized_by)
        if confidence is not None:
            item.confidence = confidence
        if item.box is not None:
            item.box.touch()
        self.db.commit()
        self.db.refresh(item)
        return item


def validate_item(name: str, confidence: float) -> None:
    if not (name or "").strip():
        raise InvalidItemError("Item name cannot be empty")
    if confidence is None or not 0.0 <= confidence <= 1.0:
        raise InvalidItemError("Confidence must be between 0.0 and 1.0")


LIKE_ESCAPE = "\\"


def contains_pattern(term: str) -> str:
    """LIKE pattern matching ``term`` literally anywhere in the value."""
    escaped = (
        term.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )
    return f"%{escaped}%"
