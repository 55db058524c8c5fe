from fastapi import APIRouter
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from app.mappers.postcode import validate_postcode
from app.schemas.intake import PostcodeValidationResult

router = APIRouter()


class ValidatePostcodeRequest(BaseModel):
    postcode: str | None = None


def _missing(error: str) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content=PostcodeValidationResult(valid=False, error=error).model_dump(),
    )


@router.post("/api/tools/validate-postcode", response_model=PostcodeValidationResult)
async def validate_postcode_tool(request: ValidatePostcodeRequest):
    """Live tool for the voice agent to check a postcode mid-call."""
    if not request.postcode:
        return _missing("Postcode is required")
    return validate_postcode(request.postcode)


@router.get("/api/tools/validate-postcode", response_model=PostcodeValidationResult)
async def validate_postcode_query(postcode: str | None = None):
    if not postcode:
        return _missing("Postcode query parameter required")
    return validate_postcode(postcode)
