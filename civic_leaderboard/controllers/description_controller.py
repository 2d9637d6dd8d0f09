"""
Description controller - AI generated text for new traffic reports
"""

from typing import Literal, Optional

from fastapi import APIRouter, HTTPException, status
from pydantic import BaseModel, Field

from civic_leaderboard.core.dependencies import DescriptionServiceDep
from civic_leaderboard.services.description_service import (
    DescriptionGenerationError,
    local_description,
)


router = APIRouter(prefix="/descriptions", tags=["descriptions"])


class DescriptionRequest(BaseModel):
    report_type: str = Field(..., min_length=1)
    location: str = ""
    severity: Literal["low", "medium", "high"] = "medium"
    image_base64: Optional[str] = None


class DescriptionResponse(BaseModel):
    description: str


@router.post("", response_model=DescriptionResponse)
async def generate_description(request: DescriptionRequest, service: DescriptionServiceDep):
    """
    Generate a report description.

    On failure returns 503 with a template the user can complete manually.
    """
    try:
        text = await service.generate_description(
            request.report_type,
            request.location,
            request.severity,
            request.image_base64,
        )
    except DescriptionGenerationError as e:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail={
                "message": f"AI description unavailable, please fill in the description manually ({e})",
                "template": local_description(
                    request.report_type,
                    request.location,
                    request.severity,
                    has_photo=bool(request.image_base64),
                ),
            },
        )

    return DescriptionResponse(description=text)
