from typing import Annotated

from fastapi import Depends, Request

from app.services.intake import IntakeService


def get_intake_service(request: Request) -> IntakeService:
    return request.app.state.intake_service


def get_service_name(request: Request) -> str:
    return request.app.state.service_name


IntakeDep = Annotated[IntakeService, Depends(get_intake_service)]
ServiceNameDep = Annotated[str, Depends(get_service_name)]
