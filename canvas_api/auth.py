"""
Auth — tokens signés "<user_id>.<hmac-sha256 hex>" (clé AUTH_SECRET).

Header attendu : Authorization: Bearer <token>
Token absent ou invalide → invité (lecture des projets publics seulement).
"""
import hashlib
import hmac
import os
from typing import Optional

from fastapi import Depends, HTTPException, Request


def _auth_secret() -> str:
    return os.getenv("AUTH_SECRET", "changeme")


def _sign(user_id: str) -> str:
    return hmac.new(_auth_secret().encode(), user_id.encode(), hashlib.sha256).hexdigest()


def issue_token(user_id: str) -> str:
    return f"{user_id}.{_sign(user_id)}"


def verify_token(token: Optional[str]) -> Optional[str]:
    """user_id si la signature est valide, None sinon."""
    if not token:
        return None
    user_id, _, signature = token.rpartition(".")
    if not user_id or not signature:
        return None
    return user_id if hmac.compare_digest(_sign(user_id), signature) else None


def bearer_token(request: Request) -> Optional[str]:
    header = request.headers.get("authorization", "")
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def current_user(request: Request) -> Optional[str]:
    return verify_token(bearer_token(request))


def require_user(user_id: Optional[str] = Depends(current_user)) -> str:
    if not user_id:
        raise HTTPException(401, "Authentification requise")
    return user_id
