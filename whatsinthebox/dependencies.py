"""FastAPI dependencies for the per-process services."""
from fastapi import Depends, Request
from sqlalchemy.orm import Session

from whatsinthebox.database import get_db
from whatsinthebox.navigation import Navigator
from whatsinthebox.repositories import BoxRepository
from whatsinthebox.services.box_qr import BoxQRFeature
from whatsinthebox.services.photo_store import PhotoStore
from whatsinthebox.services.qr_code import QRCodeService


def get_repository(db: Session = Depends(get_db)) -> BoxRepository:
    return BoxRepository(db)


def get_qr_service(request: Request) -> QRCodeService:
    return request.app.state.qr_service


def get_box_qr(request: Request) -> BoxQRFeature:
    return request.app.state.box_qr


def get_photo_store(request: Request) -> PhotoStore:
    return request.app.state.photo_store


def get_navigator(request: Request) -> Navigator:
    return request.app.state.navigator
