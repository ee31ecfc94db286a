"""Caller identity for API requests."""

from fastapi import HTTPException, Depends, Header
from typing import Optional


async def get_current_identity(x_identity: Optional[str] = Header(None)) -> Optional[str]:
    """Read the caller's identity from the X-Identity header.
    
    Wallet connectivity and signatures are handled upstream; the header is
    trusted as-is.
    """
    if not x_identity or not x_identity.strip():
        return None
    return x_identity.strip()


async def require_identity(identity: Optional[str] = Depends(get_current_identity)) -> str:
    """Require an identified caller."""
    if not identity:
        raise HTTPException(status_code=401, detail="X-Identity header required")
    return identity
