"""
Path-scoped CORS.

Starlette's CORSMiddleware applies one policy to every path. BankLite needs
two: the account API is restricted to known frontend origins with
credentials, while /actuator is readable from anywhere but GET only.

PathScopedCORSMiddleware holds one CORSMiddleware per path prefix and hands
each HTTP request to the first one whose prefix matches. Paths matching no
prefix get no CORS headers at all.
"""

from starlette.middleware.cors import CORSMiddleware
from starlette.types import ASGIApp, Receive, Scope, Send

from banklite.config import Settings


class PathScopedCORSMiddleware:
    def __init__(self, app: ASGIApp, policies: list[tuple[str, dict]]):
        self.app = app
        self.policies = [
            (prefix, CORSMiddleware(app, **options)) for prefix, options in policies
        ]

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "http":
            path = scope["path"]
            for prefix, cors in self.policies:
                if path == prefix or path.startswith(prefix + "/"):
                    await cors(scope, receive, send)
                    return
        await self.app(scope, receive, send)


def cors_policies(settings: Settings) -> list[tuple[str, dict]]:
    """CORS options per path prefix, as passed to CORSMiddleware."""
    return [
        (
            "/api",
            {
                "allow_origins": settings.ALLOWED_ORIGINS,
                "allow_methods": ["GET", "POST", "PUT", "DELETE", "OPTIONS"],
                "allow_headers": ["*"],
                "allow_credentials": True,
                "max_age": settings.CORS_MAX_AGE,
            },
        ),
        (
            "/actuator",
            {
                "allow_origins": ["*"],
                "allow_methods": ["GET"],
                "allow_headers": ["*"],
                "max_age": settings.CORS_MAX_AGE,
            },
        ),
    ]
