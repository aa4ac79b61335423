"""QR code request schemas."""
from typing import Optional
from pydantic import BaseModel, Field, field_validator

from whatsinthebox.services.qr_code import CorrectionLevel, WiFiSecurity, parse_color


class QROptions(BaseModel):
    """Rendering options shared by all QR requests."""
    size: int = Field(512, gt=0, le=4096)
    correction_level: CorrectionLevel = CorrectionLevel.MEDIUM
    foreground_color: str = "black"
    background_color: str = "white"

    @field_validator("foreground_color", "background_color")
    @classmethod
    def check_color(cls, value: str) -> str:
        try:
            parse_color(value)
        except ValueError:
            raise ValueError(f"Unknown colour: {value!r}")
        return value


class QRTextRequest(QROptions):
    data: str


class QRUrlRequest(QROptions):
    url: str


class QRContactRequest(QROptions):
    name: str
    phone: Optional[str] = None
    email: Optional[str] = None


class QRWiFiRequest(QROptions):
    ssid: str
    password: str = ""
    security: WiFiSecurity = WiFiSecurity.WPA
    correction_level: CorrectionLevel = CorrectionLevel.HIGH
