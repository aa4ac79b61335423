"""Navigation routes - the client's screen history."""
from fastapi import APIRouter, Depends

from whatsinthebox.dependencies import get_navigator
from whatsinthebox.navigation import Navigator
from whatsinthebox.schemas.navigation import (
    NavigationState,
    OpenUrlRequest,
    RouteSchema,
)

router = APIRouter(prefix="/navigation", tags=["Navigation"])


def state(navigator: Navigator) -> NavigationState:
    return NavigationState(path=[RouteSchema.from_route(route) for route in navigator.path])


@router.get("/", response_model=NavigationState)
async def get_navigation(navigator: Navigator = Depends(get_navigator)):
    """Current screen history."""
    return state(navigator)


@router.post("/push", response_model=NavigationState)
async def push_route(route: RouteSchema, navigator: Navigator = Depends(get_navigator)):
    navigator.push(route.to_route())
    return state(navigator)


@router.post("/pop", response_model=NavigationState)
async def pop_route(navigator: Navigator = Depends(get_navigator)):
    navigator.pop()
    return state(navigator)


@router.post("/replace", response_model=NavigationState)
async def replace_route(route: RouteSchema, navigator: Navigator = Depends(get_navigator)):
    navigator.replace(route.to_route())
    return state(navigator)


@router.post("/reset", response_model=NavigationState)
async def reset_navigation(navigator: Navigator = Depends(get_navigator)):
    """Back to the root screen."""
    navigator.reset()
    return state(navigator)


@router.post("/open-url", response_model=NavigationState)
async def open_url(body: OpenUrlRequest, navigator: Navigator = Depends(get_navigator)):
    """Follow a deep link. Links that are not box links leave the history unchanged."""
    navigator.handle_url(body.url)
    return state(navigator)
