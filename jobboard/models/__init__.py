from jobboard.models.user import User
from jobboard.models.listing import Listing

__all__ = [
    "User",
    "Listing",
]
