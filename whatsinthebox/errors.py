"""Domain errors.

Every error carries a ``message`` suitable for showing to the user. None of
them are fatal: routes catch them where the user action happens and turn them
into an HTTP error response.
"""


class WhatsInTheBoxError(Exception):
    """Base class for all domain errors."""

    message = "An unexpected error occurred."

    def __init__(self, message=None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


# Boxes and items

class StorageBoxError(WhatsInTheBoxError):
    """Raised for box and item validation or photo failures."""


class InvalidNameError(StorageBoxError):
    message = "Box name cannot be empty"


class DuplicateNameError(StorageBoxError):
    message = "A box with this name already exists"


class InvalidItemError(StorageBoxError):
    message = "Invalid item"


class PhotoNotFoundError(StorageBoxError):
    message = "Photo not found"


class PhotoSaveError(StorageBoxError):
    message = "Failed to load photo"


# QR codes

class QRCodeError(WhatsInTheBoxError):
    """Raised when a QR code cannot be produced."""


class InvalidInputError(QRCodeError):
    message = "Invalid QR code data"


class GenerationFailedError(QRCodeError):
    message = "Failed to generate QR code"


class ImageFailedError(QRCodeError):
    message = "Failed to create image from QR code"
