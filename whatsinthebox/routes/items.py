"""Item routes."""
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status, Query

from whatsinthebox.dependencies import get_repository
from whatsinthebox.errors import InvalidItemError
from whatsinthebox.models.item import BoxItem
from whatsinthebox.repositories import BoxRepository
from whatsinthebox.schemas.item import ItemCreate, ItemResponse, ItemUpdate

router = APIRouter(prefix="/items", tags=["Items"])


def get_item_or_404(item_id: str, repo: BoxRepository) -> BoxItem:
    item = repo.find_item(item_id)
    if not item:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Item not found"
        )
    return item


@router.get("/", response_model=List[ItemResponse])
async def list_items(
    box_id: Optional[str] = Query(None, description="Filter by box"),
    search: Optional[str] = Query(None, description="Search by name"),
    repo: BoxRepository = Depends(get_repository),
):
    """List items, optionally filtered by box or search term."""
    return repo.list_items(box_id=box_id, search=search)


@router.post("/", response_model=ItemResponse, status_code=status.HTTP_201_CREATED)
async def create_item(
    item_data: ItemCreate,
    repo: BoxRepository = Depends(get_repository),
):
    """Record a new item in a box."""
    box = repo.find_by_id(item_data.box_id)
    if not box:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Box not found"
        )
    
    item = BoxItem(
        name=item_data.name.strip(),
        recognized_by=item_data.recognized_by,
        confidence=item_data.confidence,
    )
    try:
        return repo.add_item(box, item)
    except InvalidItemError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)


@router.get("/{item_id}", response_model=ItemResponse)
async def get_item(item_id: str, repo: BoxRepository = Depends(get_repository)):
    """Get a specific item."""
    return get_item_or_404(item_id, repo)


@router.put("/{item_id}", response_model=ItemResponse)
async def update_item(
    item_id: str,
    item_update: ItemUpdate,
    repo: BoxRepository = Depends(get_repository),
):
    """Update an item."""
    item = get_item_or_404(item_id, repo)
    try:
        return repo.update_item(
            item,
            name=item_update.name,
            recognized_by=item_update.recognized_by,
            confidence=item_update.confidence,
        )
    except InvalidItemError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)


@router.delete("/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_item(item_id: str, repo: BoxRepository = Depends(get_repository)):
    """Remove an item from its box."""
    item = get_item_or_404(item_id, repo)
    repo.delete_item(item)
    return None
