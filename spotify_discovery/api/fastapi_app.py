from fastapi import FastAPI

from spotify_discovery import __version__
from spotify_discovery.api.auth.routes import router as auth_router
from spotify_discovery.api.pipeline.discover import router as discover_router
from spotify_discovery.api.pipeline.health import router as pipeline_health_router
from spotify_discovery.core import configure_logging
from spotify_discovery.pipeline import LoggingDisplay, PipelineOrchestrator
from spotify_discovery.spotify import SessionCredentialStore

configure_logging()

app = FastAPI(
    title="Spotify Playlist Discovery API",
    version=__version__,
    description="Discover user-curated playlists from your Spotify taste.",
)

# One in-memory session for this process; nothing is persisted.
app.state.session_store = SessionCredentialStore()
app.state.orchestrator = PipelineOrchestrator(display=LoggingDisplay())

# Pipeline routes
app.include_router(pipeline_health_router, prefix="/pipeline", tags=["pipeline"])
app.include_router(discover_router, prefix="/discover", tags=["discover"])

# Auth routes
app.include_router(auth_router, prefix="/auth", tags=["auth"])
