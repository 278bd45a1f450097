"""Campaign persona service - many-to-many links between campaigns and personas."""

import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from agentcrm.db.models import CampaignPersona, Persona
from agentcrm.db.session import storage_guard

logger = logging.getLogger(__name__)


def link_personas(db: Session, campaign_id: int, persona_ids: list[int]) -> int:
    """
    Link personas to a campaign; pairs that already exist are skipped.

    Neither side is checked for existence (links are plain integers like
    every other reference column).

    Returns:
        Number of new links written
    """
    wanted = list(dict.fromkeys(persona_ids))
    with storage_guard(db, "link campaign personas"):
        existing = set(
            db.execute(
                select(CampaignPersona.persona_id).where(
                    CampaignPersona.campaign_id == campaign_id
                )
            ).scalars()
        )
        added = [pid for pid in wanted if pid not in existing]
        for persona_id in added:
            db.add(CampaignPersona(campaign_id=campaign_id, persona_id=persona_id))
        db.commit()

    logger.info("Linked %d persona(s) to campaign id=%s", len(added), campaign_id)
    return len(added)


def list_campaign_personas(db: Session, campaign_id: int) -> list[Persona]:
    """Personas linked to a campaign, by persona id."""
    stmt = (
        select(Persona)
        .join(CampaignPersona, CampaignPersona.persona_id == Persona.id)
        .where(CampaignPersona.campaign_id == campaign_id)
        .order_by(Persona.id)
    )
    with storage_guard(db, "list campaign personas"):
        return list(db.execute(stmt).scalars())
