"""Navigation schemas."""
from typing import List, Optional
from pydantic import BaseModel, model_validator

from whatsinthebox.navigation import Route, RouteKind


class RouteSchema(BaseModel):
    """A screen route."""
    kind: RouteKind
    box_id: Optional[str] = None

    @model_validator(mode="after")
    def check_box_id(self):
        # Reuse Route's own validation
        self.to_route()
        return self

    def to_route(self) -> Route:
        return Route(self.kind, self.box_id)

    @classmethod
    def from_route(cls, route: Route) -> "RouteSchema":
        return cls(kind=route.kind, box_id=route.box_id)


class NavigationState(BaseModel):
    """Current screen history, oldest first."""
    path: List[RouteSchema]


class OpenUrlRequest(BaseModel):
    url: str


class DeepLinkResolution(BaseModel):
    url: str
    route: Optional[RouteSchema] = None
