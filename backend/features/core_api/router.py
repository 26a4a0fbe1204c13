# Path: backend/features/core_api/router.py
import os
import sys
from datetime import datetime
from typing import Dict, Optional
from pydantic import BaseModel

from fastapi import APIRouter
from fastapi import __version__ as fastapi_version_str

# --- API Router Initialization ---
# The "/api" prefix is added in main.py
router = APIRouter(
    tags=["Core API"]  # Group these endpoints in the API docs
)

PROVIDER_KEYS = ['OPENAI_API_KEY', 'UNREAL_SPEECH_API_KEY']

# --- Pydantic Models for Type Hinting and Validation ---
class HealthResponse(BaseModel):
    success: bool
    status: str
    message: str
    runtime: str
    timestamp: str
    env_vars_check: Optional[Dict[str, str]] = None

class VersionResponse(BaseModel):
    python_version: str
    python_version_info: list
    platform: str
    fastapi_version: str

# --- API Routes ---

@router.get("/health", response_model=HealthResponse)
async def health_check():
    """Health check reporting which upstream provider keys are configured."""

    env_check_results = {}
    for key in PROVIDER_KEYS:
        if os.environ.get(key):
            env_check_results[key] = "✅ Set"
        else:
            env_check_results[key] = "❌ Not Set"

    return HealthResponse(
        success=True,
        status='healthy',
        message='Spellly API is working!',
        runtime='FastAPI',
        timestamp=datetime.now().isoformat(),
        env_vars_check=env_check_results
    )

@router.get("/version", response_model=VersionResponse)
async def get_version():
    """Returns Python and FastAPI version information."""
    return VersionResponse(
        python_version=sys.version,
        python_version_info=list(sys.version_info),
        platform=sys.platform,
        fastapi_version=fastapi_version_str
    )
