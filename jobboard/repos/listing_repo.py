import logging

from sqlalchemy import or_
from sqlalchemy.orm import Session

from jobboard.models.listing import Listing
from jobboard.schemas.listing import ListingField

logger = logging.getLogger(__name__)

LIKE_ESCAPE = "\\"


def _contains_term(value: str) -> str:
    """LIKE pattern matching value as a literal substring."""
    escaped = (
        value.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )
    return f"%{escaped}%"


def get_all(db: Session, limit: int | None = None) -> list[Listing]:
    """All listings, newest first."""
    q = db.query(Listing).order_by(Listing.created_at.desc(), Listing.id.desc())
    if limit is not None:
        q = q.limit(limit)
    return q.all()


def get_by_id(db: Session, listing_id: int) -> Listing | None:
    return db.query(Listing).filter(Listing.id == listing_id).first()


def create_one(db: Session, user_id: str, values: dict) -> Listing:
    listing = Listing(user_id=user_id)
    for field in ListingField:
        if field.value in values:
            setattr(listing, field.value, values[field.value])
    db.add(listing)
    db.commit()
    db.refresh(listing)
    logger.info("Listing created: id=%s user=%s", listing.id, user_id)
    return listing


def update_fields(db: Session, listing_id: int, values: dict) -> int:
    """
    Update exactly the given allow-listed columns of one listing.
    Returns the number of rows changed.
    """
    changes = {getattr(Listing, field.value): values[field.value] for field in ListingField if field.value in values}
    if not changes:
        return 0
    count = (
        db.query(Listing)
        .filter(Listing.id == listing_id)
        .update(changes, synchronize_session=False)
    )
    db.commit()
    logger.info("Listing updated: id=%s fields=%s", listing_id, ",".join(sorted(c.key for c in changes)))
    return count


def delete_one(db: Session, listing_id: int) -> bool:
    count = db.query(Listing).filter(Listing.id == listing_id).delete(synchronize_session=False)
    db.commit()
    if count:
        logger.info("Listing deleted: id=%s", listing_id)
    return bool(count)


def search(db: Session, keywords: str = "", location: str = "") -> list[Listing]:
    """
    Case-insensitive substring search. keywords must appear in title, description,
    tags or company; location in city or state. Empty terms match every listing.
    On SQLite only ASCII letters fold case.
    """
    keyword_term = _contains_term(keywords)
    location_term = _contains_term(location)
    q = db.query(Listing).filter(
        or_(
            Listing.title.ilike(keyword_term, escape=LIKE_ESCAPE),
            Listing.description.ilike(keyword_term, escape=LIKE_ESCAPE),
            Listing.tags.ilike(keyword_term, escape=LIKE_ESCAPE),
            Listing.company.ilike(keyword_term, escape=LIKE_ESCAPE),
        ),
        or_(
            Listing.city.ilike(location_term, escape=LIKE_ESCAPE),
            Listing.state.ilike(location_term, escape=LIKE_ESCAPE),
        ),
    )
    return q.order_by(Listing.created_at.desc(), Listing.id.desc()).all()
