from typing import Optional

from pydantic import BaseModel


class TokenFragmentRequest(BaseModel):
    """Redirect fragment (or full redirect URL) captured by the callback page."""

    fragment: str


class AuthStatusResponse(BaseModel):
    authenticated: bool
    expires_at: Optional[int] = None
