from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import CoordinatorProfile


class CoordinatorRepository(Protocol):
    def create_with_identity(
        self,
        *,
        email: str,
        password_hash: str,
        name: str,
        department: str,
    ) -> CoordinatorProfile:
        """Create identity (role claim ``coordinator``) and profile together.

        Raises ConflictError when the email already has an identity.
        """

        raise NotImplementedError

    def list_coordinators(self) -> Sequence[CoordinatorProfile]:
        raise NotImplementedError

    def get_by_id(self, profile_id: str) -> Optional[CoordinatorProfile]:
        raise NotImplementedError

    def update_profile(self, *, profile_id: str, name: str, department: str) -> bool:
        raise NotImplementedError

    def delete_identity(self, user_id: str) -> bool:
        """Remove the identity; its profile and sessions go with it."""

        raise NotImplementedError
