"""Photo storage in the app's private documents directory."""
import io
import logging
import uuid
from pathlib import Path

from PIL import Image, UnidentifiedImageError

from whatsinthebox.errors import PhotoNotFoundError, PhotoSaveError

logger = logging.getLogger(__name__)


class PhotoStore:
    """Writes photos as ``<uuid>.jpg`` and hands back their absolute path."""

    def __init__(self, directory, quality: int = 80):
        self.directory = Path(directory).resolve()
        self.quality = quality

    def save(self, image_bytes: bytes) -> str:
        """Re-encode ``image_bytes`` as JPEG; returns the file path to store on the box."""
        try:
            with Image.open(io.BytesIO(image_bytes)) as image:
                image = image.convert("RGB")
                self.directory.mkdir(parents=True, exist_ok=True)
                path = self.directory / f"{uuid.uuid4()}.jpg"
                image.save(path, format="JPEG", quality=self.quality)
        except (UnidentifiedImageError, OSError, ValueError) as e:
            logger.warning("Failed to save photo: %s", e)
            raise PhotoSaveError()
        logger.info("Saved photo %s", path)
        return str(path)

    def discard(self, photo_url: str) -> bool:
        """Best-effort removal of a photo this store wrote. Returns True if a file was removed."""
        path = Path(photo_url).resolve()
        if path.parent != self.directory or not path.is_file():
            return False
        try:
            path.unlink()
        except OSError as e:
            logger.warning("Failed to remove old photo %s: %s", path, e)
            return False
        logger.info("Removed old photo %s", path)
        return True

    def open(self, photo_url: str) -> Path:
        """Return the path of a stored photo."""
        if not photo_url:
            raise PhotoNotFoundError()
        path = Path(photo_url)
        if not path.is_file():
            raise PhotoNotFoundError()
        return path
