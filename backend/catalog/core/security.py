from typing import Optional

from fastapi import Header, HTTPException, Request


async def verify_token(request: Request, token: Optional[str] = Header(default=None)) -> None:
    """Reject the request unless the "token" header matches the configured secret."""
    expected = request.app.state.settings.token
    if token is None or token != expected:
        raise HTTPException(status_code=401, detail="invalid token")
