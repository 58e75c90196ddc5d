"""Chat mention strings for users and roles."""


def mention_user(user_id) -> str:
    """Return the mention markup for a user id."""
    return f"<@{user_id}>"


def mention_role(role_id) -> str:
    """Return the mention markup for a role id."""
    return f"<@&{role_id}>"