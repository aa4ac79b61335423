"""QR codes for storage boxes."""
from typing import Optional

from PIL import Image, ImageDraw

from whatsinthebox.models.box import StorageBox
from whatsinthebox.services.deep_link import box_deep_link
from whatsinthebox.services.qr_code import QRCodeService


def default_logo(side: int = 256) -> Image.Image:
    """A plain box glyph, used when no logo image is supplied."""
    logo = Image.new("RGBA", (side, side), (255, 255, 255, 0))
    draw = ImageDraw.Draw(logo)
    inset = side // 8
    lid = side // 3
    draw.rectangle([inset, lid, side - inset, side - inset], fill="black")
    draw.polygon(
        [(inset, lid), (side // 2, inset), (side - inset, lid)],
        fill="black",
    )
    draw.line([(side // 2, lid), (side // 2, side - inset)], fill="white", width=max(1, side // 32))
    return logo


class BoxQRFeature:
    """Generates a QR code pointing at a box's detail screen."""

    def __init__(self, qr_service: QRCodeService, scheme: str, logo_size: float = 0.2):
        self.qr_service = qr_service
        self.scheme = scheme
        self.logo_size = logo_size

    def execute(self, box: StorageBox, size: int = 512) -> Image.Image:
        return self.qr_service.generate_colored(
            box_deep_link(box.id, self.scheme),
            size=size,
            foreground_color="black",
            background_color="white",
        )

    def execute_with_logo(
        self,
        box: StorageBox,
        logo: Optional[Image.Image] = None,
        size: int = 512,
    ) -> Image.Image:
        return self.qr_service.generate_with_logo(
            box_deep_link(box.id, self.scheme),
            logo if logo is not None else default_logo(),
            size=size,
            logo_size=self.logo_size,
        )
