"""Deep link routes."""
from fastapi import APIRouter, Query, Request

from whatsinthebox.schemas.navigation import DeepLinkResolution, RouteSchema
from whatsinthebox.services.deep_link import decode_deep_link

router = APIRouter(prefix="/deeplinks", tags=["Deep Links"])


@router.get("/resolve", response_model=DeepLinkResolution)
async def resolve_deep_link(request: Request, url: str = Query(..., description="URL to decode")):
    """Decode a deep link without navigating."""
    route = decode_deep_link(url, request.app.state.scheme)
    return DeepLinkResolution(
        url=url,
        route=RouteSchema.from_route(route) if route is not None else None,
    )
