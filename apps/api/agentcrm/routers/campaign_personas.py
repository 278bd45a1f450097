"""Campaign <-> persona link endpoints."""

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from agentcrm.core.deps import get_current_principal, get_db
from agentcrm.core.errors import ValidationError
from agentcrm.schemas.registry import PERSONA_LIBRARY
from agentcrm.services import campaign_persona_service
from agentcrm.utils.request_body import read_json_body

router = APIRouter(
    prefix="/campaigns",
    tags=["campaigns"],
    dependencies=[Depends(get_current_principal)],
)


@router.post("/{campaign_id}/personas")
async def link_personas(
    campaign_id: int,
    request: Request,
    db: Session = Depends(get_db),
):
    """Link personas to a campaign. Existing links are left as they are."""
    body = await read_json_body(request)
    persona_ids = body.get("persona_ids") if isinstance(body, dict) else None
    if not isinstance(persona_ids, list):
        raise ValidationError("persona_ids must be an array")
    if any(isinstance(pid, bool) or not isinstance(pid, int) for pid in persona_ids):
        raise ValidationError("persona_ids must contain integer ids")

    campaign_persona_service.link_personas(db, campaign_id, persona_ids)
    return {"message": "Personas linked to campaign"}


@router.get("/{campaign_id}/personas")
def list_personas(campaign_id: int, db: Session = Depends(get_db)):
    """Persona records linked to a campaign."""
    personas = campaign_persona_service.list_campaign_personas(db, campaign_id)
    return [PERSONA_LIBRARY.serialize(persona) for persona in personas]
