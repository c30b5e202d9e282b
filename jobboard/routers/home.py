from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from jobboard.config import settings
from jobboard.database import get_db
from jobboard.dependencies import get_current_user_optional
from jobboard.repos.listing_repo import get_all
from jobboard.views import render

router = APIRouter(tags=["home"])


@router.get("/")
def home(
    request: Request,
    db: Session = Depends(get_db),
    _user=Depends(get_current_user_optional),
):
    """Landing page with the most recent listings."""
    listings = get_all(db, limit=settings.home_listing_limit)
    return render(request, "home.html", {"listings": listings})
