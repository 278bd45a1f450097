"""Principal (API key holder) model."""

from __future__ import annotations

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from agentcrm.db.base import AUTOINCREMENT, Base
from agentcrm.db.enums import Role


class Principal(Base):
    """
    Registered actor identified by an opaque bearer API key.

    Looked up by api_key on every authenticated request (unique index).
    Never updated; removed by hard delete only.
    """

    __tablename__ = "users"
    __table_args__ = AUTOINCREMENT

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    role: Mapped[str] = mapped_column(
        String(20), nullable=False, default=Role.AGENT.value
    )
    api_key: Mapped[str] = mapped_column(
        String(255), unique=True, index=True, nullable=False
    )

    def __repr__(self) -> str:
        return f"<Principal id={self.id} email={self.email!r} role={self.role}>"
