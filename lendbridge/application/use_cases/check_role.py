from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from loguru import logger

from lendbridge.domain.entities.identity import Identity
from lendbridge.domain.services.authorization import AuthorizationPolicy
from lendbridge.infrastructure.database.repositories.profile_repository import ProfileRepository
from lendbridge.infrastructure.database.repositories.role_repository import RoleRepository


@dataclass
class CheckRoleUseCase:
    roles: RoleRepository
    profiles: ProfileRepository

    def granted(self, identity: Identity) -> set[str]:
        assignments = self.roles.roles_for(identity.id)
        profile = self.profiles.get(identity.id)
        return AuthorizationPolicy.granted_roles(assignments, profile)

    def execute(self, identity: Identity, required: str | Iterable[str]) -> bool:
        """Return whether the identity holds any of the required roles."""
        granted = self.granted(identity)
        allowed = AuthorizationPolicy.permits(granted, required)
        if not allowed:
            logger.info(
                "User {} denied; needs one of {}",
                identity.id,
                sorted(AuthorizationPolicy.normalize_required(required)),
            )
        return allowed
