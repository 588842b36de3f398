from __future__ import annotations

from collections.abc import Iterable

from lendbridge.domain.entities.profile import ProfileEntity
from lendbridge.domain.entities.role import RoleAssignment


class AuthorizationPolicy:
    """Role membership rules.

    Granted roles are the union of the identity's role assignments and the
    role classification on its profile. A missing profile or an empty
    assignment list simply grants nothing.
    """

    @staticmethod
    def granted_roles(
        assignments: Iterable[RoleAssignment], profile: ProfileEntity | None
    ) -> set[str]:
        granted = {a.role for a in assignments if a.role}
        if profile is not None and profile.role:
            granted.add(profile.role)
        return granted

    @staticmethod
    def normalize_required(required: str | Iterable[str]) -> frozenset[str]:
        if isinstance(required, str):
            return frozenset({required})
        return frozenset(required)

    # Any overlap is enough; roles are not exclusive
    @staticmethod
    def permits(granted: set[str], required: str | Iterable[str]) -> bool:
        wanted = AuthorizationPolicy.normalize_required(required)
        if not wanted:
            return True
        return bool(granted & wanted)
