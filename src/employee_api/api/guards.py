"""
Header guards for route matching

A guarded route only matches when every guard accepts the request headers.
A rejected guard is reported to the router as "no match", so dispatch falls
through to the next candidate route or to 404.
"""

from typing import Callable, Sequence, Tuple, Type

from fastapi.routing import APIRoute
from starlette.datastructures import Headers
from starlette.routing import Match
from starlette.types import Scope

Guard = Callable[[Headers], bool]


class HeaderGuard:
    """Matches when a header equals the expected value exactly"""

    def __init__(self, name: str, value: str):
        self.name = name.lower()
        self.value = value

    def __call__(self, headers: Headers) -> bool:
        return headers.get(self.name) == self.value

    def __repr__(self) -> str:
        return f"HeaderGuard({self.name!r}, {self.value!r})"


class ContentTypeGuard(HeaderGuard):
    """Matches on media type, ignoring case and parameters such as charset"""

    def __init__(self, media_type: str):
        super().__init__("content-type", media_type.lower())

    def __call__(self, headers: Headers) -> bool:
        raw = headers.get(self.name)
        if raw is None:
            return False
        return raw.split(";", 1)[0].strip().lower() == self.value


class GuardedRoute(APIRoute):
    guards: Sequence[Guard] = ()

    def matches(self, scope: Scope) -> Tuple[Match, Scope]:
        match, child_scope = super().matches(scope)
        if match == Match.NONE or not self.guards:
            return match, child_scope

        headers = Headers(scope=scope)
        if not all(guard(headers) for guard in self.guards):
            return Match.NONE, {}
        return match, child_scope


def guarded_route(*guards: Guard) -> Type[APIRoute]:
    """Route class for APIRouter(route_class=...) that applies the given guards"""
    return type("GuardedRoute", (GuardedRoute,), {"guards": tuple(guards)})
