def is_owner(owner_id, user) -> bool:
    """True if the given session user owns a resource whose owner is owner_id."""
    if user is None or owner_id is None:
        return False
    return str(user.id) == str(owner_id)
