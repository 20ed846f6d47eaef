import os
from typing import Optional
from fastapi import Depends, Header, HTTPException

DEFAULT_USER_ID = int(os.getenv("DEFAULT_USER_ID", "1"))

def get_header_user_id(x_user_id: Optional[str] = Header(None)) -> Optional[int]:
    """User id from the X-User-ID header, or None when the header is absent."""
    if not x_user_id:
        return None
    try:
        return int(x_user_id)
    except ValueError:
        raise HTTPException(status_code=400, detail="X-User-ID header must be an integer")

def get_user_id(header_user_id: Optional[int] = Depends(get_header_user_id)) -> int:
    """Acting user for journal entries and audit rows.

    There is no authentication layer; callers identify themselves with the
    X-User-ID header and everything else is attributed to DEFAULT_USER_ID.
    """
    return DEFAULT_USER_ID if header_user_id is None else header_user_id

def resolve_user_id(header_user_id: Optional[int], body_user_id: Optional[int]) -> int:
    # header, then the payload's user_id, then the default
    if header_user_id is not None:
        return header_user_id
    if body_user_id is not None:
        return body_user_id
    return DEFAULT_USER_ID
