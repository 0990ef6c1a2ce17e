"""Custom user manager for identities created by seeding and admin tooling."""

import uuid

from django.contrib.auth.base_user import BaseUserManager


class UserManager(BaseUserManager):
    """Create identities bound to an RBAC role.

    Credentials are handled outside this service, so identities are created
    with an unusable password unless one is explicitly supplied.
    """

    use_in_migrations = True

    def create_user(self, username: str, email: str, role, password: str | None = None, **extra_fields):
        """Create an identity holding ``role``."""
        if not username:
            raise ValueError("The username must be set")
        if not email:
            raise ValueError("The Email must be set")
        if role is None:
            raise ValueError("A role must be provided")
        user = self.model(
            id=uuid.uuid4(),
            username=username,
            email=self.normalize_email(email),
            role=role,
            **extra_fields,
        )
        if password:
            user.set_password(password)
        else:
            user.set_unusable_password()
        user.save(using=self._db)
        return user


__all__ = ["UserManager"]
