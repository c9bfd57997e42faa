"""Admin FastAPI application."""

from fastapi import FastAPI
from sqladmin import Admin

from vestri.admin.auth import AdminAuth
from vestri.admin.views import CatalogToolsView, ShowtimeAdmin
from vestri.config import settings
from vestri.database import engine


def create_admin_app() -> FastAPI:
    app = FastAPI(title="Vestri Cinema Admin")
    auth = AdminAuth(secret_key=settings.admin_secret_key)
    admin = Admin(app, engine, authentication_backend=auth, title="Vestri Cinema Admin")
    for view in [ShowtimeAdmin, CatalogToolsView]:
        admin.add_view(view)
    return app


admin_app = create_admin_app()
