"""Per-request identity established by token validation."""
from dataclasses import dataclass


@dataclass(frozen=True)
class Identity:
    """
    Trusted identity of the caller, decoded from a verified access token.

    Handlers receive this explicitly via the `get_current_identity` dependency
    and use `user_id` as the owner for every scoped query.
    """

    user_id: int
    email: str
