"""
FastAPI routers grouped by resource.

Each file inside this package exposes an APIRouter that is included in the
application built by ``conceptos.app.create_app``.
"""
