"""SQLAdmin authentication backend."""

import secrets

from sqladmin.authentication import AuthenticationBackend
from starlette.requests import Request

from vestri.config import settings


class AdminAuth(AuthenticationBackend):
    """Single shared password; no user accounts."""

    async def login(self, request: Request) -> bool:
        form = await request.form()
        password = str(form.get("password") or "")
        ok = secrets.compare_digest(password.encode(), settings.admin_password.encode())
        if ok:
            request.session.update({"authenticated": True})
        return ok

    async def logout(self, request: Request) -> bool:
        request.session.clear()
        return True

    async def authenticate(self, request: Request) -> bool:
        return request.session.get("authenticated", False)
