# alexa_auth.py

import logging

logger = logging.getLogger(__name__)


class InvalidAccessTokenError(Exception):
    """Discovery mit fehlendem oder ungültigem Token."""


def get_access_token(request):
    """Holt das OAuth Token aus payload.accessToken (None, wenn es fehlt oder leer ist)."""
    payload = request.get("payload") or {}
    token = payload.get("accessToken") if isinstance(payload, dict) else None
    if not isinstance(token, str):
        return None
    return token.strip() or None


def is_valid_token(token):
    """
    Hier würde das Token gegen den eigenen Cloud-Dienst geprüft.
    Es gibt keinen, also reicht ein vorhandenes Token.
    """
    return bool(token)


def check_access_token(request, validator=is_valid_token):
    token = get_access_token(request)
    if not token or not validator(token):
        message_id = (request.get("header") or {}).get("messageId")
        logger.error(f"Request [{message_id}] failed. Invalid access token: {token}")
        return False
    return True
