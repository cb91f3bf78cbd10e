"""
Middleware that runs the auth resolver ahead of every handler.
"""

from typing import Callable

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from jwtpizza.auth.resolver import AuthResolver, read_bearer_token


class AuthResolverMiddleware(BaseHTTPMiddleware):
    """
    Attach the caller's identity (or None) to request.state.

    Sets:
        request.state.token: the raw bearer token, if one was sent
        request.state.identity: ResolvedIdentity, or None when anonymous
    """

    async def dispatch(self, request: Request, call_next: Callable):
        resolver: AuthResolver = request.app.state.auth_resolver

        token = read_bearer_token(request.headers.get("Authorization"))
        request.state.token = token
        request.state.identity = await resolver.resolve(token)

        return await call_next(request)
