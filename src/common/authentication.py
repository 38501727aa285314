import typing as t

import structlog
from django.http import HttpRequest
from ninja_jwt.authentication import JWTAuth


class MemberJWTAuth(JWTAuth):
    """JWT authentication that binds the member to the structlog context.

    The observability middleware runs before ninja authenticates the request, so the
    user id is only known here. Binding it keeps every log line of the request attributable.

    Usage:
        @route.get("/endpoint", auth=MemberJWTAuth())
        def my_endpoint(request):
            ...
    """

    def authenticate(self, request: HttpRequest, token: str) -> t.Any:
        """Authenticate the request and bind the user id to the log context.

        Raises:
            AuthenticationFailed: If authentication fails
            InvalidToken: If the token is invalid
        """
        user = super().authenticate(request, token)
        if user is not None:
            structlog.contextvars.bind_contextvars(user_id=str(user.pk))
        return user
