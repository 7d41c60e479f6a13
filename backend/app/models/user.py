"""
Inventory API: User SQLAlchemy Model
======================================

What:  ORM model for the `tbl_user` table (the credential store).
Who:   Used by AuthService for registration, login and /me lookups.

`password` holds a bcrypt hash produced by passlib. The plaintext is never
stored, and no response schema exposes this column.
"""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


class User(Base):
    """A registered account. Email is unique and compared case-insensitively."""

    __tablename__ = "tbl_user"

    id_user: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    nama_user: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        comment="Display name",
    )

    # Stored lowercased by AuthService; the unique index enforces one account per address
    email: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        unique=True,
        index=True,
    )

    password: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="bcrypt hash (cost 10)",
    )

    def __repr__(self) -> str:
        return f"<User(id_user={self.id_user}, email='{self.email}')>"
