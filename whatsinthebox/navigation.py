"""Screen routes and the navigation stack."""
import enum
import logging
from dataclasses import dataclass
from typing import List, Optional

logger = logging.getLogger(__name__)


class RouteKind(str, enum.Enum):
    HOME = "home"
    BOX_DETAIL = "box_detail"
    SETTINGS = "settings"
    ADD_BOX = "add_box"
    EDIT_BOX = "edit_box"


# Kinds that carry a box identifier
_BOX_ROUTES = {RouteKind.BOX_DETAIL, RouteKind.EDIT_BOX}


@dataclass(frozen=True)
class Route:
    """A screen in the app, optionally bound to a box."""
    kind: RouteKind
    box_id: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "kind", RouteKind(self.kind))
        if (self.kind in _BOX_ROUTES) != (self.box_id is not None):
            raise ValueError(f"Route {self.kind.value} box_id mismatch: {self.box_id!r}")

    @classmethod
    def home(cls) -> "Route":
        return cls(RouteKind.HOME)

    @classmethod
    def box_detail(cls, box_id: str) -> "Route":
        return cls(RouteKind.BOX_DETAIL, box_id)

    @classmethod
    def settings(cls) -> "Route":
        return cls(RouteKind.SETTINGS)

    @classmethod
    def add_box(cls) -> "Route":
        return cls(RouteKind.ADD_BOX)

    @classmethod
    def edit_box(cls, box_id: str) -> "Route":
        return cls(RouteKind.EDIT_BOX, box_id)


class Navigator:
    """Screen history as a stack of routes.

    Mutated only from request handlers of a single client, there is no locking.
    """

    def __init__(self, scheme: str):
        self.scheme = scheme
        self.path: List[Route] = []

    def push(self, route: Route) -> None:
        self.path.append(route)

    def pop(self) -> Optional[Route]:
        if not self.path:
            return None
        return self.path.pop()

    def replace(self, route: Route) -> None:
        self.pop()
        self.push(route)

    def reset(self) -> None:
        self.path = []

    navigate_to_root = reset

    def handle_url(self, url: str) -> Optional[Route]:
        """Push the route a deep link points at; unknown links are ignored."""
        # Imported here, deep_link depends on Route
        from whatsinthebox.services.deep_link import decode_deep_link

        route = decode_deep_link(url, self.scheme)
        if route is None:
            logger.debug("Ignoring unrecognised URL %r", url)
            return None
        self.push(route)
        return route
