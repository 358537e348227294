from datetime import datetime

from sqlalchemy import Boolean, Column, DateTime, Integer, String

from ..database import Base

EMAIL_MAX_LENGTH = 255
DISPLAY_NAME_MAX_LENGTH = 100
PASSWORD_HASH_MAX_LENGTH = 255


class User(Base):
    """Identity record looked up by email at login.

    Attributes:
        id (int): Surrogate key.
        email (str): Unique login identifier.
        display_name (str | None): Optional human-readable name.
        hashed_password (str): Password hash; never the raw password.
        enabled (bool): Disabled accounts cannot authenticate.
        created_at (datetime): Creation timestamp (UTC).
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True)
    email = Column(
        String(EMAIL_MAX_LENGTH),
        unique=True,
        nullable=False,
        index=True,
        doc="Unique login email",
    )
    display_name = Column(String(DISPLAY_NAME_MAX_LENGTH), nullable=True)
    hashed_password = Column(String(PASSWORD_HASH_MAX_LENGTH), nullable=False)
    enabled = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email!r})>"
