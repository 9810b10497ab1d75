from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from chess_coach.core.config import get_settings
from chess_coach.core.logging import configure_logging
from chess_coach.core.middleware import RequestIdMiddleware
from chess_coach.routers.analysis import router as analysis_router
from chess_coach.routers.coach import router as coach_router
from chess_coach.routers.games import router as games_router
from chess_coach.routers.health import router as health_router
from chess_coach.routers.players import router as players_router
from chess_coach.routers.settings import router as settings_router

settings = get_settings()
configure_logging()

app = FastAPI(title="Chess Coach API", version="0.1.0")

origins = [origin.strip() for origin in settings.cors_origins.split(",") if origin.strip()]
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(RequestIdMiddleware)

app.include_router(health_router, prefix="/api")
app.include_router(games_router, prefix="/api")
app.include_router(analysis_router, prefix="/api")
app.include_router(players_router, prefix="/api")
app.include_router(coach_router, prefix="/api")
app.include_router(settings_router, prefix="/api")
