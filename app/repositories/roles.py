"""Role lookup by title."""

from sqlalchemy.orm import Session

from app.models import Role


class RoleRepository:
    """Read access to roles. Roles are seeded by migrations and never written here."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get_by_title(self, title: str) -> Role | None:
        return self.session.query(Role).filter(Role.title == title).first()

    def get_id_by_title(self, title: str) -> int | None:
        """Resolve a role title to its id, or None when no such role exists."""
        role = self.get_by_title(title)
        return role.id if role is not None else None
