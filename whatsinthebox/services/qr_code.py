"""QR code generation service.

Turns text into a square QR raster, optionally recoloured or with a logo in
the centre. Matrix encoding is done by ``qrcode``; rasterising, scaling and
compositing by Pillow.
"""
import enum
import io
import logging
from typing import Optional, Tuple, Union

import qrcode
from qrcode.exceptions import DataOverflowError
from PIL import Image, ImageColor, ImageDraw, ImageOps

from whatsinthebox.errors import GenerationFailedError, ImageFailedError, InvalidInputError

logger = logging.getLogger(__name__)

Color = Union[str, Tuple[int, int, int]]


class CorrectionLevel(str, enum.Enum):
    """QR error correction level."""
    LOW = "L"       # ~7% error correction
    MEDIUM = "M"    # ~15% error correction
    QUARTILE = "Q"  # ~25% error correction
    HIGH = "H"      # ~30% error correction


_QRCODE_LEVELS = {
    CorrectionLevel.LOW: qrcode.constants.ERROR_CORRECT_L,
    CorrectionLevel.MEDIUM: qrcode.constants.ERROR_CORRECT_M,
    CorrectionLevel.QUARTILE: qrcode.constants.ERROR_CORRECT_Q,
    CorrectionLevel.HIGH: qrcode.constants.ERROR_CORRECT_H,
}

# Byte-mode capacity of a version 40 symbol
MAX_PAYLOAD_BYTES = {
    CorrectionLevel.LOW: 2953,
    CorrectionLevel.MEDIUM: 2331,
    CorrectionLevel.QUARTILE: 1663,
    CorrectionLevel.HIGH: 1273,
}

QUIET_ZONE_MODULES = 4
LOGO_PADDING = 8
LOGO_CORNER_RADIUS = 8
MAX_RECOMMENDED_LOGO_SIZE = 0.3


class WiFiSecurity(str, enum.Enum):
    WPA = "WPA"
    WEP = "WEP"
    OPEN = "nopass"


# Payload formats. Scanners parse these by fixed grammar, keep field order.

def url_payload(url: str) -> str:
    return url


def contact_payload(name: str, phone: Optional[str] = None, email: Optional[str] = None) -> str:
    """vCard 3.0 subset: FN, optional TEL, optional EMAIL."""
    vcard = f"BEGIN:VCARD\nVERSION:3.0\nFN:{name}\n"
    if phone is not None:
        vcard += f"TEL:{phone}\n"
    if email is not None:
        vcard += f"EMAIL:{email}\n"
    vcard += "END:VCARD"
    return vcard


def wifi_payload(ssid: str, password: str, security: WiFiSecurity = WiFiSecurity.WPA) -> str:
    return f"WIFI:T:{WiFiSecurity(security).value};S:{ssid};P:{password};;"


def to_png(image: Image.Image) -> bytes:
    """Encode an image as PNG bytes."""
    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()


class QRCodeService:
    """Generates QR code images.

    Construct one per process and hand it to whoever needs it.
    """

    def generate(
        self,
        data: str,
        size: int = 512,
        correction_level: CorrectionLevel = CorrectionLevel.MEDIUM,
    ) -> Image.Image:
        """Encode ``data`` as a ``size`` x ``size`` black on white RGB image.

        Raises:
            InvalidInputError: ``data`` is empty or not encodable as UTF-8,
                or ``size`` is not positive.
            GenerationFailedError: the payload does not fit a QR symbol at
                ``correction_level``.
            ImageFailedError: the matrix could not be rasterised.
        """
        if not data or size <= 0:
            raise InvalidInputError()
        try:
            payload = data.encode("utf-8")
        except UnicodeEncodeError:
            raise InvalidInputError()

        level = CorrectionLevel(correction_level)
        if len(payload) > MAX_PAYLOAD_BYTES[level]:
            logger.warning(
                "QR payload of %d bytes exceeds the %d byte limit at level %s",
                len(payload), MAX_PAYLOAD_BYTES[level], level.value,
            )
            raise GenerationFailedError()

        qr = qrcode.QRCode(
            version=None,
            error_correction=_QRCODE_LEVELS[level],
            box_size=1,
            border=QUIET_ZONE_MODULES,
        )
        try:
            qr.add_data(payload)
            qr.make(fit=True)
            matrix = qr.get_matrix()
        except (DataOverflowError, ValueError) as e:
            logger.warning("QR matrix encoding failed: %s", e)
            raise GenerationFailedError()
        if not matrix:
            raise GenerationFailedError()

        try:
            # One pixel per module, then nearest-neighbour upscaling keeps edges crisp
            modules = len(matrix)
            raw = Image.new("L", (modules, modules), 255)
            raw.putdata([0 if cell else 255 for row in matrix for cell in row])
            return raw.resize((size, size), Image.NEAREST).convert("RGB")
        except (ValueError, OSError, MemoryError) as e:
            logger.warning("QR rasterisation failed: %s", e)
            raise ImageFailedError()

    def generate_colored(
        self,
        data: str,
        size: int = 512,
        foreground_color: Color = "black",
        background_color: Color = "white",
        correction_level: CorrectionLevel = CorrectionLevel.MEDIUM,
    ) -> Image.Image:
        """Generate a QR code with black remapped to ``foreground_color`` and white to ``background_color``.

        An unknown colour raises InvalidInputError.
        """
        try:
            foreground = parse_color(foreground_color)
            background = parse_color(background_color)
        except (ValueError, TypeError):
            raise InvalidInputError("Unknown colour")

        image = self.generate(data, size=size, correction_level=correction_level)
        try:
            return ImageOps.colorize(image.convert("L"), black=foreground, white=background)
        except (ValueError, TypeError) as e:
            logger.warning("QR colour remapping failed: %s", e)
            raise ImageFailedError()

    def generate_with_logo(
        self,
        data: str,
        logo: Image.Image,
        size: int = 512,
        logo_size: float = 0.2,
        correction_level: CorrectionLevel = CorrectionLevel.HIGH,
    ) -> Image.Image:
        """Generate a QR code with ``logo`` composited at the centre.

        ``logo_size`` is the fraction of the image side the logo covers.
        Above 0.3 the logo hides more modules than high error correction can
        recover, so such codes may not scan.
        """
        if not 0.0 <= logo_size < 1.0:
            raise InvalidInputError("Logo size must be between 0.0 and 1.0")
        if logo_size > MAX_RECOMMENDED_LOGO_SIZE:
            logger.warning("Logo size %.2f exceeds %.2f, QR code may not scan", logo_size, MAX_RECOMMENDED_LOGO_SIZE)

        qr_image = self.generate(data, size=size, correction_level=correction_level)

        logo_pixels, origin = logo_region(size, logo_size)
        try:
            canvas = qr_image.convert("RGBA")
            if logo_pixels > 0:
                draw = ImageDraw.Draw(canvas)
                backdrop = padded_logo_backdrop(size, logo_size)
                draw.rounded_rectangle(backdrop, radius=LOGO_CORNER_RADIUS, fill="white")

                resized = logo.convert("RGBA").resize((logo_pixels, logo_pixels), Image.LANCZOS)
                canvas.paste(resized, (origin, origin), resized)
            return canvas.convert("RGB")
        except (ValueError, OSError, AttributeError) as e:
            logger.warning("QR logo composition failed: %s", e)
            raise ImageFailedError()

    # Convenience encoders

    def generate_for_url(self, url: str, size: int = 512) -> Image.Image:
        return self.generate(url_payload(url), size=size)

    def generate_for_contact(
        self,
        name: str,
        phone: Optional[str] = None,
        email: Optional[str] = None,
        size: int = 512,
    ) -> Image.Image:
        return self.generate(contact_payload(name, phone=phone, email=email), size=size)

    def generate_for_wifi(
        self,
        ssid: str,
        password: str,
        security: WiFiSecurity = WiFiSecurity.WPA,
        size: int = 512,
    ) -> Image.Image:
        return self.generate(
            wifi_payload(ssid, password, security),
            size=size,
            correction_level=CorrectionLevel.HIGH,
        )


def logo_region(size: int, logo_size: float) -> Tuple[int, int]:
    """Return (side, origin) of the centred logo square."""
    logo_pixels = int(round(size * logo_size))
    return logo_pixels, (size - logo_pixels) // 2


def padded_logo_backdrop(size: int, logo_size: float) -> Tuple[int, int, int, int]:
    """Inclusive (x0, y0, x1, y1) of the white backdrop behind the logo."""
    logo_pixels, origin = logo_region(size, logo_size)
    start = origin - LOGO_PADDING
    end = origin + logo_pixels + LOGO_PADDING - 1
    return start, start, end, end


def parse_color(color: Color) -> Tuple[int, int, int]:
    """RGB triple for a Pillow colour name, hex string or RGB tuple."""
    if isinstance(color, str):
        return ImageColor.getrgb(color)[:3]
    rgb = tuple(int(channel) for channel in color)
    if len(rgb) < 3 or not all(0 <= channel <= 255 for channel in rgb[:3]):
        raise ValueError(f"Invalid RGB colour: {color!r}")
    return rgb[:3]
