"""QR code routes - render arbitrary payloads as PNG."""
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import Response

from whatsinthebox.dependencies import get_qr_service
from whatsinthebox.errors import ImageFailedError, QRCodeError
from whatsinthebox.schemas.qr_code import (
    QROptions,
    QRContactRequest,
    QRTextRequest,
    QRUrlRequest,
    QRWiFiRequest,
)
from whatsinthebox.services.qr_code import (
    QRCodeService,
    contact_payload,
    to_png,
    url_payload,
    wifi_payload,
)

router = APIRouter(prefix="/qr", tags=["QR Codes"])

PNG_RESPONSE = {200: {"content": {"image/png": {}}}}


def render(qr_service: QRCodeService, data: str, options: QROptions) -> Response:
    """Render ``data`` with the request's options, mapping failures to HTTP errors."""
    try:
        image = qr_service.generate_colored(
            data,
            size=options.size,
            foreground_color=options.foreground_color,
            background_color=options.background_color,
            correction_level=options.correction_level,
        )
    except ImageFailedError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=e.message)
    except QRCodeError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    return Response(content=to_png(image), media_type="image/png")


@router.post("/text", responses=PNG_RESPONSE)
async def qr_for_text(body: QRTextRequest, qr_service: QRCodeService = Depends(get_qr_service)):
    """QR code for plain text."""
    return render(qr_service, body.data, body)


@router.post("/url", responses=PNG_RESPONSE)
async def qr_for_url(body: QRUrlRequest, qr_service: QRCodeService = Depends(get_qr_service)):
    """QR code for a URL."""
    return render(qr_service, url_payload(body.url), body)


@router.post("/contact", responses=PNG_RESPONSE)
async def qr_for_contact(body: QRContactRequest, qr_service: QRCodeService = Depends(get_qr_service)):
    """QR code for a vCard contact."""
    return render(qr_service, contact_payload(body.name, body.phone, body.email), body)


@router.post("/wifi", responses=PNG_RESPONSE)
async def qr_for_wifi(body: QRWiFiRequest, qr_service: QRCodeService = Depends(get_qr_service)):
    """QR code that joins a WiFi network."""
    return render(qr_service, wifi_payload(body.ssid, body.password, body.security), body)
