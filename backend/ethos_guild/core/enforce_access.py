"""Access Rules — who may view, edit, or administer an artifact.

Invariants:
    - PUBLIC and UNLISTED artifacts are visible to anyone, including anonymous callers
    - PRIVATE and FRIENDS artifacts are visible only to the owner or a listed collaborator
    - Edit rights: owner or collaborator. Owner-only operations check is_owner.
    - All predicates are PURE booleans; services decide which error to raise
"""

from typing import Protocol

from ethos_guild.core.domain_types import Visibility


class ArtifactAccessLike(Protocol):
    owner_id: str
    collaborators: list
    visibility: str


def is_owner(artifact: ArtifactAccessLike, user_id: str | None) -> bool:
    return user_id is not None and artifact.owner_id == user_id


def can_edit(artifact: ArtifactAccessLike, user_id: str | None) -> bool:
    if user_id is None:
        return False
    if artifact.owner_id == user_id:
        return True
    return user_id in (artifact.collaborators or [])


def can_view(artifact: ArtifactAccessLike, user_id: str | None) -> bool:
    if artifact.visibility in (Visibility.PUBLIC, Visibility.UNLISTED):
        return True
    return can_edit(artifact, user_id)
