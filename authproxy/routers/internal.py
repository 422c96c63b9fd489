"""
Internal router - health check and configuration echo.
"""
from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from authproxy.state import AppState, get_app_state

router = APIRouter(tags=["internal"])


class ApiResponse(BaseModel):
    """Envelope used by the internal endpoints."""
    data: str = Field(examples=["OK"])
    code: int = Field(examples=[200], description="Application-level code, independent of the HTTP status")


@router.get("/health", response_model=ApiResponse, status_code=202)
async def health() -> ApiResponse:
    """Health check endpoint. Does not contact the upstream."""
    return ApiResponse(data="OK", code=200)


@router.get("/config", response_model=ApiResponse, status_code=202)
async def config(state: AppState = Depends(get_app_state)) -> ApiResponse:
    """Echo the configured backend URL. The secret token is never included."""
    return ApiResponse(data=f"backend_url:{state.config.backend_url}", code=200)
