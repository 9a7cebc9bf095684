# routes.py
from fastapi import FastAPI
from controller.tool_controller import tool_router


def register_routes(app: FastAPI) -> None:
    """Register & Access control controllers here."""
    app.include_router(tool_router)
