"""Request-scoped access to the app-owned DataService."""

from fastapi import Request

from services.data_service import DataService


def get_data_service(request: Request) -> DataService:
    return request.app.state.data_service
