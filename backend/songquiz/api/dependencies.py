"""Request Dependencies — acting identity from the upstream identity provider.

Invariants:
    - Every quiz endpoint receives an explicit Identity; no ambient session lookup
    - Missing or blank user id header -> AUTHENTICATION_REQUIRED (401)

Design Decisions:
    - Credentials are verified upstream (auth proxy); this service trusts the
      forwarded headers and never sees passwords or tokens
"""

from fastapi import Request

from songquiz.config import get_settings
from songquiz.core.domain_types import UserId
from songquiz.core.errors import AuthenticationRequiredError
from songquiz.services.identity import Identity


async def get_identity(request: Request) -> Identity:
    settings = get_settings()
    user_id = (request.headers.get(settings.user_id_header) or "").strip()
    if not user_id:
        raise AuthenticationRequiredError()
    display_name = (request.headers.get(settings.user_name_header) or "").strip()
    return Identity(user_id=UserId(user_id), display_name=display_name or None)
