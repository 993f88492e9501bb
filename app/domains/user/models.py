"""SQLAlchemy models for the User domain.

Accounts live with the identity provider. This service keeps a profile
row per user, keyed by the provider's subject id, holding what other
users see: a display name and an avatar colour.
"""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from app.infra.database import Base


class UserProfile(Base):
    """Public profile of an authenticated user.

    Attributes:
        id: Identity-provider subject id (UUID) - inherited from Base
        email: Email claim at the time the profile was created
        display_name: Name shown on explore cards, optional
        avatar_color: Hex colour for the initials avatar
    """

    __tablename__ = "users"

    email: Mapped[str | None] = mapped_column(
        String(255),
        nullable=True,
        index=True,
    )
    display_name: Mapped[str | None] = mapped_column(
        String(100),
        nullable=True,
    )
    avatar_color: Mapped[str] = mapped_column(
        String(7),
        nullable=False,
        default="#f86f4d",
    )

    def __repr__(self) -> str:
        """String representation of the profile."""
        return f"<UserProfile(id={self.id}, email={self.email})>"
