from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import HTMLResponse

from spotify_discovery.core import AuthorizationError, log_info, log_warning
from spotify_discovery.spotify import build_authorize_url, parse_token_fragment

from .schemas import AuthStatusResponse, TokenFragmentRequest

router = APIRouter()

# The implicit grant puts the token in the URL fragment, which the browser
# never sends to the server: the callback page forwards it to /auth/token.
_CALLBACK_PAGE = """
<html>
  <body>
    <h1 id="title">Finishing Spotify authorization…</h1>
    <script>
      fetch("token", {
        method: "POST",
        headers: {"Content-Type": "application/json"},
        body: JSON.stringify({fragment: window.location.hash})
      }).then(function (r) {
        document.getElementById("title").textContent = r.ok
          ? "Spotify authorization complete ✅ You can close this window."
          : "Spotify authorization failed ❌";
      });
    </script>
  </body>
</html>
"""


def _ensure_idle(request: Request) -> None:
    """The credential only changes between discovery runs."""
    if request.app.state.orchestrator.is_running:
        raise HTTPException(
            status_code=409,
            detail="A discovery run is in progress; retry when it finishes.",
        )


@router.get("/url")
def get_auth_url() -> dict:
    """
    Spotify authorize URL (implicit grant) for the frontend to redirect to.
    """
    try:
        return {"auth_url": build_authorize_url()}
    except AuthorizationError as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.get("/callback", response_class=HTMLResponse)
def auth_callback() -> str:
    return _CALLBACK_PAGE


@router.post("/token", response_model=AuthStatusResponse)
def store_token(body: TokenFragmentRequest, request: Request) -> AuthStatusResponse:
    """
    Parse the redirect fragment and keep the credential for this session.
    """
    try:
        credential = parse_token_fragment(body.fragment)
    except AuthorizationError as e:
        log_warning(f"Rejected authorization redirect: {e}")
        raise HTTPException(status_code=400, detail=str(e))

    _ensure_idle(request)
    request.app.state.session_store.store(credential)
    log_info("Spotify credential stored for this session.")
    return AuthStatusResponse(authenticated=True, expires_at=credential.expires_at)


@router.get("/status", response_model=AuthStatusResponse)
def auth_status(request: Request) -> AuthStatusResponse:
    credential = request.app.state.session_store.current_credential()
    if credential is None:
        return AuthStatusResponse(authenticated=False)
    return AuthStatusResponse(authenticated=True, expires_at=credential.expires_at)


@router.post("/logout", response_model=AuthStatusResponse)
def logout(request: Request) -> AuthStatusResponse:
    _ensure_idle(request)
    request.app.state.session_store.clear()
    return AuthStatusResponse(authenticated=False)
