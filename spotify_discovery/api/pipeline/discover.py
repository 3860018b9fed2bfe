from dataclasses import replace
from typing import Optional

from fastapi import APIRouter, HTTPException, Request

from spotify_discovery.core import (
    AuthorizationError,
    PipelineBusy,
    PipelineOutcome,
    log_step,
)
from spotify_discovery.pipeline import DiscoverySettings
from spotify_discovery.spotify import build_authorize_url

from .schemas import DiscoveryRunRequest, DiscoveryRunResponse

router = APIRouter()

_NO_RESULTS_MESSAGE = "No playlists found."


def _auth_url_or_none() -> Optional[str]:
    try:
        return build_authorize_url()
    except AuthorizationError:
        return None


def _settings_for_request(
    base: DiscoverySettings, body: Optional[DiscoveryRunRequest]
) -> DiscoverySettings:
    if body is None:
        return base
    overrides = {k: v for k, v in body.model_dump().items() if v is not None}
    return replace(base, **overrides)


@router.post("/run", response_model=DiscoveryRunResponse)
def run_discovery(
    request: Request, body: Optional[DiscoveryRunRequest] = None
) -> DiscoveryRunResponse:
    """
    Run the full discovery pipeline for the current session, synchronously.

    401 → the credential is missing or was rejected (and has been cleared),
    502 → Spotify failed on a required stage, 409 → a run is in progress.
    Empty outcomes are regular 200 responses.
    """
    orchestrator = request.app.state.orchestrator
    settings = _settings_for_request(orchestrator.settings, body)

    log_step("API discovery run requested...")
    try:
        result = orchestrator.run(request.app.state.session_store, settings=settings)
    except PipelineBusy as e:
        raise HTTPException(status_code=409, detail=str(e))

    if result.outcome == PipelineOutcome.UNAUTHORIZED:
        raise HTTPException(
            status_code=401,
            detail={
                "status": "unauthenticated",
                "message": "Spotify authorization required.",
                "auth_url": _auth_url_or_none(),
            },
        )
    if result.outcome == PipelineOutcome.UPSTREAM_ERROR:
        raise HTTPException(
            status_code=502,
            detail={
                "status": "upstream_error",
                "message": "Spotify request failed, please retry.",
                "upstream_status": result.error_status,
            },
        )

    message = None
    if result.outcome in (
        PipelineOutcome.NO_RESULTS,
        PipelineOutcome.NO_RECOMMENDATIONS,
    ):
        message = _NO_RESULTS_MESSAGE

    data = result.model_dump(
        exclude={"state", "outcome", "error_status", "error_message"}
    )
    return DiscoveryRunResponse(
        state=result.state,
        outcome=result.outcome,
        message=message,
        **data,
    )
