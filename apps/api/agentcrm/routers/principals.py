"""Principal registration and administration endpoints."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from agentcrm.core.deps import get_current_principal, get_db
from agentcrm.core.errors import NotFoundError
from agentcrm.schemas.principal import PrincipalCreate, PrincipalCreated, PrincipalRead
from agentcrm.services import principal_service

router = APIRouter(prefix="/users", tags=["users"])


@router.post("", response_model=PrincipalCreated, status_code=201)
def register_principal(data: PrincipalCreate, db: Session = Depends(get_db)):
    """
    Register a principal.

    Public: this is how the first API key enters the system.
    Duplicate email or api_key is rejected with 400.
    """
    principal = principal_service.register_principal(
        db,
        name=data.name,
        email=data.email,
        role=data.role,
        api_key=data.api_key,
    )
    return {"id": principal.id}


@router.get(
    "",
    response_model=list[PrincipalRead],
    dependencies=[Depends(get_current_principal)],
)
def list_principals(db: Session = Depends(get_db)):
    """List principals, newest first."""
    return principal_service.list_principals(db)


@router.get(
    "/{principal_id}",
    response_model=PrincipalRead,
    dependencies=[Depends(get_current_principal)],
)
def get_principal(principal_id: int, db: Session = Depends(get_db)):
    principal = principal_service.get_principal(db, principal_id)
    if principal is None:
        raise NotFoundError("User not found")
    return principal


@router.delete("/{principal_id}", dependencies=[Depends(get_current_principal)])
def delete_principal(principal_id: int, db: Session = Depends(get_db)):
    principal_service.delete_principal(db, principal_id)
    return {"message": "User deleted successfully"}
