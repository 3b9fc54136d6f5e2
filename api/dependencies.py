"""FastAPI dependencies shared by the routers."""

from typing import Annotated

from fastapi import Depends, Request

from services.base import Services


def get_services(request: Request) -> Services:
    """Return the services container built at application startup."""
    return request.app.state.services


ServicesDep = Annotated[Services, Depends(get_services)]
