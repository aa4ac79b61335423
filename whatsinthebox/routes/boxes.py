"""Box routes."""
from typing import List, Optional
import csv
import io

from fastapi import APIRouter, Depends, HTTPException, status, Query, UploadFile, File, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import FileResponse, Response, StreamingResponse

from whatsinthebox.dependencies import get_box_qr, get_photo_store, get_repository
from whatsinthebox.errors import (
    DuplicateNameError,
    InvalidNameError,
    PhotoNotFoundError,
    PhotoSaveError,
    QRCodeError,
    ImageFailedError,
)
from whatsinthebox.models.box import StorageBox
from whatsinthebox.repositories import BoxOrder, BoxRepository
from whatsinthebox.schemas.box import BoxCreate, BoxLink, BoxResponse, BoxUpdate, BoxWithItems
from whatsinthebox.services.box_qr import BoxQRFeature
from whatsinthebox.services.deep_link import box_deep_link
from whatsinthebox.services.photo_store import PhotoStore
from whatsinthebox.services.qr_code import to_png

router = APIRouter(prefix="/boxes", tags=["Boxes"])


def get_box_or_404(box_id: str, repo: BoxRepository) -> StorageBox:
    box = repo.find_by_id(box_id)
    if not box:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Box not found"
        )
    return box


def validation_error(e: Exception) -> HTTPException:
    if isinstance(e, DuplicateNameError):
        return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=e.message)
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)


@router.get("/", response_model=List[BoxResponse])
async def list_boxes(
    skip: int = 0,
    limit: int = 100,
    order: BoxOrder = Query(BoxOrder.NAME, description="Sort order"),
    search: Optional[str] = Query(None, description="Search by name or location"),
    with_photo: bool = Query(False, description="Only boxes with a photo"),
    empty: bool = Query(False, description="Only boxes without items"),
    repo: BoxRepository = Depends(get_repository),
):
    """List boxes, sorted by name or most recently updated. Filters combine."""
    return repo.list_sorted(
        order=order,
        search=search,
        skip=skip,
        limit=limit,
        with_photo=with_photo,
        empty=empty,
    )


@router.post("/", response_model=BoxResponse, status_code=status.HTTP_201_CREATED)
async def create_box(
    box_data: BoxCreate,
    repo: BoxRepository = Depends(get_repository),
):
    """Create a new box."""
    box = StorageBox(name=box_data.name, location_hint=box_data.location_hint)
    try:
        return repo.insert(box)
    except (InvalidNameError, DuplicateNameError) as e:
        raise validation_error(e)


@router.get("/export/csv")
async def export_boxes_csv(repo: BoxRepository = Depends(get_repository)):
    """Export all boxes to CSV file."""
    boxes = repo.list_sorted()
    
    output = io.StringIO()
    writer = csv.writer(output)
    
    # Write header
    writer.writerow(['id', 'name', 'location_hint', 'item_count', 'photo_url', 'updated_at'])
    
    # Write data
    for box in boxes:
        writer.writerow([
            box.id,
            box.name,
            box.location_hint,
            box.item_count,
            box.photo_url or '',
            box.updated_at.isoformat(),
        ])
    
    output.seek(0)
    return StreamingResponse(
        iter([output.getvalue()]),
        media_type="text/csv",
        headers={"Content-Disposition": "attachment; filename=boxes.csv"}
    )


@router.get("/{box_id}", response_model=BoxWithItems)
async def get_box(box_id: str, repo: BoxRepository = Depends(get_repository)):
    """Get a specific box with its items."""
    return get_box_or_404(box_id, repo)


@router.put("/{box_id}", response_model=BoxResponse)
async def update_box(
    box_id: str,
    box_update: BoxUpdate,
    repo: BoxRepository = Depends(get_repository),
):
    """Rename a box or change its location hint."""
    box = get_box_or_404(box_id, repo)
    try:
        return repo.update(box, name=box_update.name, location_hint=box_update.location_hint)
    except (InvalidNameError, DuplicateNameError) as e:
        raise validation_error(e)


@router.delete("/{box_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_box(box_id: str, repo: BoxRepository = Depends(get_repository)):
    """Delete a box and every item in it."""
    box = get_box_or_404(box_id, repo)
    repo.delete(box)
    return None


@router.post("/{box_id}/photo", response_model=BoxResponse)
async def upload_photo(
    box_id: str,
    file: UploadFile = File(...),
    repo: BoxRepository = Depends(get_repository),
    photo_store: PhotoStore = Depends(get_photo_store),
):
    """Attach a photo to a box. The box is only updated once the file is saved."""
    box = get_box_or_404(box_id, repo)
    content = await file.read()
    try:
        path = await run_in_threadpool(photo_store.save, content)
    except PhotoSaveError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    previous = box.photo_url
    box = repo.update(box, photo_url=path)
    if previous and previous != path:
        await run_in_threadpool(photo_store.discard, previous)
    return box


@router.get("/{box_id}/photo")
async def get_photo(
    box_id: str,
    repo: BoxRepository = Depends(get_repository),
    photo_store: PhotoStore = Depends(get_photo_store),
):
    """Download a box's photo."""
    box = get_box_or_404(box_id, repo)
    try:
        path = photo_store.open(box.photo_url)
    except PhotoNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)
    return FileResponse(path, media_type="image/jpeg")


@router.get("/{box_id}/link", response_model=BoxLink)
async def get_box_link(
    box_id: str,
    request: Request,
    repo: BoxRepository = Depends(get_repository),
):
    """Get the deep link encoded in a box's QR code."""
    box = get_box_or_404(box_id, repo)
    return BoxLink(box_id=box.id, url=box_deep_link(box.id, request.app.state.scheme))


@router.get("/{box_id}/qr", responses={200: {"content": {"image/png": {}}}})
async def get_box_qr_code(
    box_id: str,
    logo: bool = Query(True, description="Place the box logo at the centre"),
    size: int = Query(512, gt=0, le=4096),
    repo: BoxRepository = Depends(get_repository),
    feature: BoxQRFeature = Depends(get_box_qr),
):
    """Render the QR code that opens this box when scanned."""
    box = get_box_or_404(box_id, repo)
    try:
        image = feature.execute_with_logo(box, size=size) if logo else feature.execute(box, size=size)
    except ImageFailedError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=e.message)
    except QRCodeError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    return Response(content=to_png(image), media_type="image/png")
