"""SQLAlchemy ORM models (importing this package registers every table)."""

from agentcrm.db.models.auth import Principal
from agentcrm.db.models.crm import (
    AgentRequest,
    Contact,
    Lead,
    Meeting,
    Payment,
    Quote,
    SystemChange,
    Task,
)
from agentcrm.db.models.delivery import (
    Delivery,
    Freelancer,
    GrowthOpportunity,
    Project,
    ProjectAssignment,
    QAReview,
    SupportArticle,
    SupportRequest,
)
from agentcrm.db.models.marketing import (
    CampaignPersona,
    CampaignTest,
    ContentFeedback,
    ContentIdea,
    ContentPost,
    ContentRemix,
    MarketingCampaign,
    MarketingInsight,
    Persona,
    TrendScannerLog,
)

__all__ = [
    "AgentRequest",
    "CampaignPersona",
    "CampaignTest",
    "Contact",
    "ContentFeedback",
    "ContentIdea",
    "ContentPost",
    "ContentRemix",
    "Delivery",
    "Freelancer",
    "GrowthOpportunity",
    "Lead",
    "MarketingCampaign",
    "MarketingInsight",
    "Meeting",
    "Payment",
    "Persona",
    "Principal",
    "Project",
    "ProjectAssignment",
    "QAReview",
    "Quote",
    "SupportArticle",
    "SupportRequest",
    "SystemChange",
    "Task",
    "TrendScannerLog",
]
