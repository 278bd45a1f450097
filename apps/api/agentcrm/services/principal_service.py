"""Principal service - credential store for bearer API keys."""

import logging

from sqlalchemy import func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from agentcrm.core.errors import DuplicateError, NotFoundError
from agentcrm.db.models import Principal
from agentcrm.db.session import storage_guard

logger = logging.getLogger(__name__)

DUPLICATE_MESSAGE = "Email or API key already exists"


def register_principal(
    db: Session,
    *,
    name: str,
    email: str,
    role: str,
    api_key: str,
) -> Principal:
    """
    Create a principal.

    Raises:
        DuplicateError: email or api_key is already registered (no row written)
    """
    with storage_guard(db, "register principal"):
        existing = db.execute(
            select(Principal.id).where(
                or_(Principal.email == email, Principal.api_key == api_key)
            )
        ).first()
        if existing:
            raise DuplicateError(DUPLICATE_MESSAGE)

        principal = Principal(name=name, email=email, role=role, api_key=api_key)
        db.add(principal)
        try:
            db.commit()
        except IntegrityError as exc:
            # Lost a race against a concurrent registration
            db.rollback()
            raise DuplicateError(DUPLICATE_MESSAGE) from exc
        db.refresh(principal)

    logger.info("Registered principal id=%s role=%s", principal.id, principal.role)
    return principal


def find_by_key(db: Session, api_key: str) -> Principal | None:
    """Look up the principal holding api_key (indexed)."""
    with storage_guard(db, "find principal by key"):
        return db.execute(
            select(Principal).where(Principal.api_key == api_key)
        ).scalar_one_or_none()


def get_principal(db: Session, principal_id: int) -> Principal | None:
    with storage_guard(db, "get principal"):
        return db.get(Principal, principal_id)


def list_principals(db: Session) -> list[Principal]:
    """All principals, newest first."""
    with storage_guard(db, "list principals"):
        return list(db.execute(select(Principal).order_by(Principal.id.desc())).scalars())


def count_principals(db: Session) -> int:
    with storage_guard(db, "count principals"):
        return db.execute(select(func.count()).select_from(Principal)).scalar_one()


def delete_principal(db: Session, principal_id: int) -> None:
    """
    Hard-delete a principal.

    Raises:
        NotFoundError: no principal with that id
    """
    with storage_guard(db, "delete principal"):
        principal = db.get(Principal, principal_id)
        if principal is None:
            raise NotFoundError("User not found")
        db.delete(principal)
        db.commit()
    logger.info("Deleted principal id=%s", principal_id)
