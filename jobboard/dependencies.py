import logging

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from jobboard.database import get_db
from jobboard.core.security import read_session_token
from jobboard.repos.user_repo import get_by_id
from jobboard.schemas.listing import ListingSubmission

logger = logging.getLogger(__name__)

SESSION_TOKEN_KEY = "identity"


class NotAuthenticated(Exception):
    """Raised when a login-only route is hit without a session user."""


def get_current_user_optional(
    request: Request,
    db: Session = Depends(get_db),
):
    """Resolve the session user, or None for guests."""
    token = request.session.get(SESSION_TOKEN_KEY)
    if not token:
        return None
    user_id = read_session_token(token)
    if not user_id:
        logger.info("Session token invalid or expired; clearing it")
        request.session.pop(SESSION_TOKEN_KEY, None)
        return None
    user = get_by_id(db, user_id)
    if not user:
        logger.info("Session user %s no longer exists", user_id)
        request.session.pop(SESSION_TOKEN_KEY, None)
        return None
    request.state.user = user
    return user


def get_current_user(
    user=Depends(get_current_user_optional),
):
    """Require a logged-in user."""
    if user is None:
        raise NotAuthenticated()
    return user


async def get_form_data(request: Request) -> dict[str, str]:
    """Text fields of the posted form; file parts are skipped."""
    form = await request.form()
    return {key: value for key, value in form.items() if isinstance(value, str)}


def get_listing_submission(
    form: dict[str, str] = Depends(get_form_data),
) -> ListingSubmission:
    """Parse the posted form through the listing allow-list."""
    return ListingSubmission.model_validate(form)
