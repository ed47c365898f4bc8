from __future__ import annotations
from fastapi import APIRouter
from pydantic import BaseModel
import os

router = APIRouter()

class HealthResponse(BaseModel):
    status: str = "ok"

class VersionResponse(BaseModel):
    version: str
    env: str

@router.get("/health", response_model= HealthResponse)
def health() -> dict:
    return {"status": "ok"}

@router.get("/version", response_model=VersionResponse)
def version() -> dict:
    # read per request
    return {
        "version": os.getenv("FITCOACH_VERSION", "0.1.0"),
        "env": os.getenv("FITCOACH_ENV", "development"),
    }
