import io
import uuid
from pathlib import Path

import pytest
from PIL import Image

from whatsinthebox.errors import PhotoNotFoundError, PhotoSaveError
from whatsinthebox.services.photo_store import PhotoStore


def png_bytes(color="red", mode="RGBA"):
    buffer = io.BytesIO()
    Image.new(mode, (32, 24), color).save(buffer, format="PNG")
    return buffer.getvalue()


def test_save_writes_jpeg_named_by_uuid(tmp_path):
    store = PhotoStore(tmp_path / "documents")

    path = Path(store.save(png_bytes()))

    assert path.parent == (tmp_path / "documents").resolve()
    assert path.suffix == ".jpg"
    uuid.UUID(path.stem)
    with Image.open(path) as image:
        assert image.format == "JPEG"
        assert image.size == (32, 24)


def test_save_rejects_non_image(tmp_path):
    store = PhotoStore(tmp_path)
    with pytest.raises(PhotoSaveError) as excinfo:
        store.save(b"definitely not an image")
    assert excinfo.value.message == "Failed to load photo"
    assert list(tmp_path.iterdir()) == []


def test_open(tmp_path):
    store = PhotoStore(tmp_path)
    path = store.save(png_bytes())
    assert store.open(path) == Path(path)

    with pytest.raises(PhotoNotFoundError):
        store.open(str(tmp_path / "missing.jpg"))
    with pytest.raises(PhotoNotFoundError):
        store.open(None)


def test_discard_only_removes_own_files(tmp_path):
    store = PhotoStore(tmp_path / "documents")
    path = store.save(png_bytes())

    assert store.discard(path) is True
    assert not Path(path).exists()
    assert store.discard(path) is False

    outside = tmp_path / "keep.jpg"
    outside.write_bytes(b"x")
    assert store.discard(str(outside)) is False
    assert outside.exists()
