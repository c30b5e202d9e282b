import logging

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import RedirectResponse
from sqlalchemy.orm import Session

from jobboard.core.authorization import is_owner
from jobboard.core.flash import set_flash
from jobboard.core.validation import sanitize
from jobboard.database import get_db
from jobboard.dependencies import get_current_user, get_current_user_optional, get_listing_submission
from jobboard.models.user import User
from jobboard.repos.listing_repo import (
    get_all,
    get_by_id,
    create_one,
    update_fields,
    delete_one,
    search as search_listings,
)
from jobboard.schemas.listing import ListingSubmission, validate_required, normalize_optional
from jobboard.views import FORM_ERROR_STATUS, render, render_not_found

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/listings", tags=["listings"])

NOT_FOUND_MESSAGE = "Listing not found"


def _redirect(url: str) -> RedirectResponse:
    return RedirectResponse(url, status_code=status.HTTP_303_SEE_OTHER)


def _deny(request: Request, listing, user, action: str) -> RedirectResponse:
    logger.info("User %s not authorized to %s listing %s", user.id, action, listing.id)
    set_flash(request, "error", f"You are not authorized to {action} this listing")
    return _redirect(f"/listings/{listing.id}")


@router.get("")
def index(
    request: Request,
    db: Session = Depends(get_db),
    _user=Depends(get_current_user_optional),
):
    listings = get_all(db)
    return render(request, "listings/index.html", {"listings": listings})


@router.get("/create")
def create_form(
    request: Request,
    _user: User = Depends(get_current_user),
):
    return render(request, "listings/create.html", {"errors": {}, "listing": {}})


@router.get("/search")
def search(
    request: Request,
    keywords: str = "",
    location: str = "",
    db: Session = Depends(get_db),
    _user=Depends(get_current_user_optional),
):
    """Search listings by keywords (title/description/tags/company) and location (city/state)."""
    keywords = keywords.strip()
    location = location.strip()
    # Stored values are escaped, so match against the escaped terms
    listings = search_listings(db, sanitize(keywords), sanitize(location))
    logger.debug("Search keywords=%r location=%r count=%d", keywords, location, len(listings))
    return render(
        request,
        "listings/index.html",
        {"listings": listings, "keywords": keywords, "location": location},
    )


@router.post("")
def store(
    request: Request,
    submission: ListingSubmission = Depends(get_listing_submission),
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    values = submission.cleaned()
    errors = validate_required(values)
    if errors:
        return render(
            request,
            "listings/create.html",
            {"errors": errors, "listing": values},
            status_code=FORM_ERROR_STATUS,
        )

    create_one(db, user.id, normalize_optional(values))
    set_flash(request, "success", "Listing created successfully")
    return _redirect("/listings")


@router.get("/edit/{listing_id}")
def edit_form(
    listing_id: int,
    request: Request,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    listing = get_by_id(db, listing_id)
    if not listing:
        return render_not_found(request, NOT_FOUND_MESSAGE)
    if not is_owner(listing.user_id, user):
        return _deny(request, listing, user, "update")
    return render(request, "listings/edit.html", {"errors": {}, "listing": listing})


@router.get("/{listing_id}")
def show(
    listing_id: int,
    request: Request,
    db: Session = Depends(get_db),
    user=Depends(get_current_user_optional),
):
    listing = get_by_id(db, listing_id)
    if not listing:
        return render_not_found(request, NOT_FOUND_MESSAGE)
    return render(
        request,
        "listings/show.html",
        {"listing": listing, "can_manage": is_owner(listing.user_id, user)},
    )


@router.api_route("/{listing_id}", methods=["PUT", "POST"])
def update(
    listing_id: int,
    request: Request,
    submission: ListingSubmission = Depends(get_listing_submission),
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    listing = get_by_id(db, listing_id)
    if not listing:
        return render_not_found(request, NOT_FOUND_MESSAGE)
    if not is_owner(listing.user_id, user):
        return _deny(request, listing, user, "update")

    values = submission.cleaned()
    errors = validate_required(values)
    if errors:
        # The form is redrawn from the stored listing, not the rejected input
        return render(
            request,
            "listings/edit.html",
            {"errors": errors, "listing": listing},
            status_code=FORM_ERROR_STATUS,
        )

    update_fields(db, listing_id, normalize_optional(values))
    set_flash(request, "success", "Listing updated successfully")
    return _redirect(f"/listings/{listing_id}")


@router.delete("/{listing_id}")
@router.post("/{listing_id}/delete")
def destroy(
    listing_id: int,
    request: Request,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    listing = get_by_id(db, listing_id)
    if not listing:
        return render_not_found(request, NOT_FOUND_MESSAGE)
    if not is_owner(listing.user_id, user):
        return _deny(request, listing, user, "delete")

    delete_one(db, listing_id)
    set_flash(request, "success", "Listing deleted successfully")
    return _redirect("/listings")
