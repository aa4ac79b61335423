"""Deep links to boxes: ``<scheme>://box/<box id>``."""
from typing import Optional
from urllib.parse import urlsplit

from whatsinthebox.navigation import Route

BOX_HOST = "box"


def box_deep_link(box_id: str, scheme: str) -> str:
    return f"{scheme}://{BOX_HOST}/{box_id}"


def decode_deep_link(url: str, scheme: str) -> Optional[Route]:
    """Return the box detail route for a box deep link, else None.

    The identifier is passed on as-is; whether a box exists for it is
    decided by the detail lookup.
    """
    try:
        parts = urlsplit(url)
    except (ValueError, TypeError):
        return None

    if parts.scheme != scheme.lower():
        return None
    if parts.hostname != BOX_HOST:
        return None

    segments = [segment for segment in parts.path.split("/") if segment]
    if not segments:
        return None
    return Route.box_detail(segments[-1])
