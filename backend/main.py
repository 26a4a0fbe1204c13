# backend/main.py
import logging
import os
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

# --- Import every feature router ---
from backend.features.core_api.router import router as core_api_router
from backend.features.spelling_game.config import LOG_FORMAT, LOG_LEVEL
from backend.features.spelling_game.router import router as spelling_game_router

logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT)

app = FastAPI(
    title="Spellly Backend API",
    description="Spelling practice game: LLM word generation and speech synthesis proxy.",
    version="1.0.0"
)

# --- CORS middleware ---
origins = [
    "http://localhost:8787",
]
if os.getenv("ALLOWED_ORIGINS"):
    additional_origins = [origin.strip() for origin in os.getenv("ALLOWED_ORIGINS").split(",")]
    origins.extend(additional_origins)

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)

# --- Register routers ---
# The "/api" prefix is applied here, consistently for all routers.
app.include_router(core_api_router, prefix="/api")
print("✅ Successfully loaded feature: core_api")
app.include_router(spelling_game_router, prefix="/api")
print("✅ Successfully loaded feature: spelling_game")


# --- Platform endpoints ---
@app.get("/", include_in_schema=False)
def read_root():
    return {"message": "Welcome to the Spellly Backend API. Play at /api/spelling-game, see /docs for documentation."}
