import pytest
from PIL import Image

from whatsinthebox.errors import GenerationFailedError, ImageFailedError, InvalidInputError
from whatsinthebox.services.qr_code import (
    CorrectionLevel,
    MAX_PAYLOAD_BYTES,
    QRCodeService,
    WiFiSecurity,
    contact_payload,
    logo_region,
    padded_logo_backdrop,
    parse_color,
    to_png,
    url_payload,
    wifi_payload,
)


@pytest.fixture
def service():
    return QRCodeService()


def decode(image):
    cv2 = pytest.importorskip("cv2")
    np = pytest.importorskip("numpy")
    text, _, _ = cv2.QRCodeDetector().detectAndDecode(np.array(image.convert("RGB")))
    return text


def test_generate_returns_square_image_of_requested_size(service):
    image = service.generate("hello", size=300)
    assert image.size == (300, 300)
    assert image.mode == "RGB"


def test_generate_is_two_tone(service):
    # Nearest-neighbour scaling never introduces grey pixels
    image = service.generate("whatsinthebox://box/abc123")
    colors = {color for _, color in image.getcolors(maxcolors=16)}
    assert colors == {(0, 0, 0), (255, 255, 255)}


def test_generate_has_quiet_zone(service):
    image = service.generate("quiet zone")
    assert image.getpixel((0, 0)) == (255, 255, 255)
    assert image.getpixel((511, 511)) == (255, 255, 255)


def test_generate_empty_payload_is_invalid(service):
    with pytest.raises(InvalidInputError) as excinfo:
        service.generate("")
    assert excinfo.value.message == "Invalid QR code data"


def test_generate_unencodable_payload_is_invalid(service):
    with pytest.raises(InvalidInputError):
        service.generate("\ud800")


@pytest.mark.parametrize("level", list(CorrectionLevel))
def test_generate_rejects_payload_over_capacity(service, level):
    with pytest.raises(GenerationFailedError):
        service.generate("x" * (MAX_PAYLOAD_BYTES[level] + 1), correction_level=level)


def test_capacity_limits_shrink_with_correction():
    limits = [MAX_PAYLOAD_BYTES[level] for level in CorrectionLevel]
    assert limits == sorted(limits, reverse=True)
    assert MAX_PAYLOAD_BYTES[CorrectionLevel.LOW] == 2953


@pytest.mark.parametrize("payload", [
    "hello",
    "whatsinthebox://box/3f2a9c1e-8d7b-4a6f-9e21-0c5d4b3a2f10",
    "Kitchen Drawer: USB-C Cable, Earbuds, AA Batteries",
])
def test_generate_decodes_back_to_payload(service, payload):
    assert decode(service.generate(payload)) == payload


def test_generate_colored_remaps_palette(service):
    image = service.generate_colored(
        "colored", size=256, foreground_color="#336699", background_color=(250, 240, 200)
    )
    colors = {color for _, color in image.getcolors(maxcolors=16)}
    assert colors == {(0x33, 0x66, 0x99), (250, 240, 200)}
    assert image.getpixel((0, 0)) == (250, 240, 200)


def test_generate_colored_unknown_color_is_invalid(service):
    with pytest.raises(InvalidInputError):
        service.generate_colored("colored", foreground_color="not-a-color")
    with pytest.raises(InvalidInputError):
        service.generate_colored("colored", background_color=(300, 0, 0))


def test_parse_color():
    assert parse_color("#336699") == (0x33, 0x66, 0x99)
    assert parse_color("white") == (255, 255, 255)
    assert parse_color((1, 2, 3, 4)) == (1, 2, 3)
    with pytest.raises(ValueError):
        parse_color("notacolor")


def test_generate_colored_empty_payload_is_invalid(service):
    with pytest.raises(InvalidInputError):
        service.generate_colored("")


def test_logo_geometry():
    assert logo_region(512, 0.2) == (102, 205)
    x0, y0, x1, y1 = padded_logo_backdrop(512, 0.2)
    assert (x0, y0) == (197, 197)
    assert x1 - x0 + 1 == 118
    assert y1 - y0 + 1 == 118


def test_generate_with_logo_composites_centered(service, monkeypatch):
    # All-black code so the white backdrop is visible everywhere it lands
    monkeypatch.setattr(
        service, "generate", lambda data, size=512, correction_level=None: Image.new("RGB", (size, size), "black")
    )
    logo = Image.new("RGBA", (40, 40), (255, 0, 0, 255))

    image = service.generate_with_logo("logo", logo, size=512, logo_size=0.2)

    red, white, black = (255, 0, 0), (255, 255, 255), (0, 0, 0)
    assert image.getpixel((205, 205)) == red
    assert image.getpixel((306, 306)) == red
    assert image.getpixel((256, 256)) == red
    assert image.getpixel((204, 256)) == white
    assert image.getpixel((307, 256)) == white
    assert image.getpixel((197, 256)) == white
    assert image.getpixel((314, 256)) == white
    assert image.getpixel((196, 256)) == black
    assert image.getpixel((315, 256)) == black
    assert image.getpixel((0, 0)) == black


def test_generate_with_logo_defaults_to_high_correction(service, monkeypatch):
    seen = {}
    original = service.generate

    def spy(data, size=512, correction_level=CorrectionLevel.MEDIUM):
        seen["level"] = correction_level
        return original(data, size=size, correction_level=correction_level)

    monkeypatch.setattr(service, "generate", spy)
    service.generate_with_logo("x", Image.new("RGBA", (8, 8), "blue"))
    assert seen["level"] == CorrectionLevel.HIGH


def test_generate_with_logo_still_scans(service):
    logo = Image.new("RGBA", (64, 64), (0, 0, 0, 255))
    payload = "whatsinthebox://box/abc123"
    assert decode(service.generate_with_logo(payload, logo, logo_size=0.2)) == payload


def test_generate_with_logo_rejects_bad_logo_size(service):
    with pytest.raises(InvalidInputError):
        service.generate_with_logo("x", Image.new("RGBA", (8, 8)), logo_size=1.5)


def test_generate_with_logo_bad_logo_fails(service):
    with pytest.raises(ImageFailedError):
        service.generate_with_logo("x", logo=None)


def test_url_payload_is_passthrough():
    assert url_payload("https://example.com/a?b=c") == "https://example.com/a?b=c"


def test_contact_payload():
    assert contact_payload("Jane Doe") == "BEGIN:VCARD\nVERSION:3.0\nFN:Jane Doe\nEND:VCARD"
    assert contact_payload("Jane Doe", phone="+1 555 0100", email="jane@example.com") == (
        "BEGIN:VCARD\nVERSION:3.0\nFN:Jane Doe\nTEL:+1 555 0100\nEMAIL:jane@example.com\nEND:VCARD"
    )
    assert contact_payload("Jane", email="jane@example.com") == (
        "BEGIN:VCARD\nVERSION:3.0\nFN:Jane\nEMAIL:jane@example.com\nEND:VCARD"
    )


def test_wifi_payload():
    assert wifi_payload("Home", "secret") == "WIFI:T:WPA;S:Home;P:secret;;"
    assert wifi_payload("Old", "key", WiFiSecurity.WEP) == "WIFI:T:WEP;S:Old;P:key;;"
    assert wifi_payload("Cafe", "", WiFiSecurity.OPEN) == "WIFI:T:nopass;S:Cafe;P:;;"


def test_convenience_generators(service):
    assert decode(service.generate_for_url("https://example.com")) == "https://example.com"
    assert service.generate_for_contact("Jane", phone="123", size=200).size == (200, 200)
    assert decode(service.generate_for_wifi("Home", "secret")) == "WIFI:T:WPA;S:Home;P:secret;;"


def test_to_png(service):
    data = to_png(service.generate("png", size=64))
    assert data.startswith(b"\x89PNG\r\n\x1a\n")
