"""Catalogue of every entity exposed through the generic resource router."""

from agentcrm.db.enums import FieldKind, Stamp
from agentcrm.db.models import (
    AgentRequest,
    CampaignTest,
    Contact,
    ContentFeedback,
    ContentIdea,
    ContentPost,
    ContentRemix,
    Delivery,
    Freelancer,
    GrowthOpportunity,
    Lead,
    MarketingCampaign,
    MarketingInsight,
    Meeting,
    Payment,
    Persona,
    Project,
    ProjectAssignment,
    QAReview,
    Quote,
    SupportArticle,
    SupportRequest,
    SystemChange,
    Task,
    TrendScannerLog,
)
from agentcrm.schemas.resource import FieldSpec as F
from agentcrm.schemas.resource import Lookup, ResourceSchema
from agentcrm.utils.timestamps import utc_now_iso


STR = FieldKind.STR
INT = FieldKind.INT
FLOAT = FieldKind.FLOAT
BOOL = FieldKind.BOOL
LIST = FieldKind.LIST
DICT = FieldKind.DICT


def _now(name: str) -> F:
    """Client-settable timestamp defaulting to the current time."""
    return F(name, default_factory=utc_now_iso)


# =============================================================================
# Sales
# =============================================================================

CONTACTS = ResourceSchema(
    path="contacts",
    model=Contact,
    label="Contact",
    fields=(
        F("full_name", required=True),
        F("phone"),
        F("email"),
        F("status"),
        F("notes"),
    ),
)

LEADS = ResourceSchema(
    path="leads",
    model=Lead,
    label="Lead",
    fields=(
        F("title", required=True),
        F("description"),
        F("contact_id", INT),
        F("channel"),
        F("funnel_stage"),
        F("status"),
    ),
)

TASKS = ResourceSchema(
    path="tasks",
    model=Task,
    label="Task",
    fields=(
        F("title", required=True),
        F("description"),
        F("type"),
        F("assigned_to"),
        F("due_date"),
        F("status"),
        F("priority"),
        F("related_to"),
        F("related_id", INT),
        F("notes"),
        F("created_at", stamp=Stamp.CREATED),
        F("updated_at", stamp=Stamp.UPDATED),
    ),
    order_by="created_at",
    descending=True,
)

MEETINGS = ResourceSchema(
    path="meetings",
    model=Meeting,
    label="Meeting",
    fields=(
        F("contact_id", INT),
        F("title", required=True),
        F("datetime"),
        F("location"),
        F("status"),
    ),
)

QUOTES = ResourceSchema(
    path="quotes",
    model=Quote,
    label="Quote",
    fields=(
        F("contact_id", INT),
        F("amount", FLOAT),
        F("status"),
        F("file_url"),
    ),
    attachment_field="file_url",
)

PAYMENTS = ResourceSchema(
    path="payments",
    model=Payment,
    label="Payment",
    fields=(
        F("quote_id", INT),
        F("amount", FLOAT, required=True),
        F("status"),
        F("due_date"),
        F("paid_at"),
        F("invoice_link"),
        F("reminder_count", INT, default=0),
        F("last_reminder_at"),
        F("client_email"),
        F("notes"),
    ),
    order_by="due_date",
    attachment_field="invoice_link",
)

AGENT_REQUESTS = ResourceSchema(
    path="agent-requests",
    model=AgentRequest,
    label="Agent request",
    fields=(
        F("agent_name", required=True),
        F("action", required=True),
        F("target_table"),
        F("target_id", INT),
        F("input_prompt"),
        F("output"),
        F("status"),
        F("timestamp", stamp=Stamp.CREATED),
    ),
    order_by="timestamp",
    descending=True,
)

SYSTEM_CHANGES = ResourceSchema(
    path="system-changes",
    model=SystemChange,
    label="System change",
    fields=(
        F("reason", required=True),
        F("affected_agents", LIST),
        F("proposed_structure"),
        F("impact_risks"),
        F("testing_plan"),
        F("status", default="draft"),
        F("approved_by"),
        F("version"),
        F("created_at", stamp=Stamp.CREATED),
        F("updated_at", stamp=Stamp.UPDATED),
    ),
    order_by="updated_at",
    descending=True,
)


# =============================================================================
# Delivery
# =============================================================================

FREELANCERS = ResourceSchema(
    path="freelancers",
    model=Freelancer,
    label="Freelancer",
    fields=(
        F("name", required=True),
        F("skill"),
        F("contact_email"),
        F("whatsapp"),
        F("is_available", BOOL, default=True),
        F("current_load", INT, default=0),
        F("rating", FLOAT, default=0.0),
        F("notes"),
        F("created_at", stamp=Stamp.CREATED),
    ),
    order_by="created_at",
    descending=True,
)

PROJECTS = ResourceSchema(
    path="projects",
    model=Project,
    label="Project",
    fields=(
        F("contact_id", INT),
        F("title", required=True),
        F("description"),
        F("status", default="new"),
        F("stage", default="intake"),
        F("current_agent"),
        F("next_action"),
        _now("start_date"),
        _now("last_update"),
        F("full_spec"),
        F("admin_notes"),
        F("tags", LIST),
    ),
    order_by="start_date",
    descending=True,
)

PROJECT_ASSIGNMENTS = ResourceSchema(
    path="project-assignments",
    model=ProjectAssignment,
    label="Project assignment",
    fields=(
        F("project_id", INT, required=True),
        F("freelancer_id", INT, required=True),
        _now("assigned_at"),
        F("due_date"),
        F("status", default="assigned"),
        F("delivery_link"),
        F("notes"),
    ),
    order_by="assigned_at",
    descending=True,
)

QA_REVIEWS = ResourceSchema(
    path="qa-reviews",
    model=QAReview,
    label="QA review",
    fields=(
        F("project_id", INT, required=True),
        F("reviewer"),
        F("status"),
        F("notes"),
        F("approved_at"),
        F("created_at", stamp=Stamp.CREATED),
    ),
    order_by="created_at",
    descending=True,
)

DELIVERIES = ResourceSchema(
    path="deliveries",
    model=Delivery,
    label="Delivery",
    fields=(
        F("project_id", INT, required=True),
        F("delivery_link"),
        _now("delivered_at"),
        F("delivered_by"),
        F("followup_status"),
        F("feedback"),
        F("notes"),
    ),
    order_by="delivered_at",
    descending=True,
)

SUPPORT_ARTICLES = ResourceSchema(
    path="support-articles",
    model=SupportArticle,
    label="Support article",
    fields=(
        F("question_keywords", required=True),
        F("answer_text", required=True),
        F("related_agent"),
        F("category"),
        F("media_link"),
        _now("last_updated"),
        F("times_used", INT, default=0),
    ),
    order_by="last_updated",
    descending=True,
)

GROWTH_OPPORTUNITIES = ResourceSchema(
    path="growth-opportunities",
    model=GrowthOpportunity,
    label="Growth opportunity",
    fields=(
        F("client_id", INT),
        F("project_id", INT),
        F("suggested_offer", required=True),
        F("status", default="sent"),
        F("response_date"),
        F("next_step"),
        F("sent_by"),
        F("notes"),
    ),
    order_by="response_date",
    descending=True,
)

SUPPORT_REQUESTS = ResourceSchema(
    path="support-requests",
    model=SupportRequest,
    label="Support request",
    fields=(
        F("client_id", INT),
        F("project_id", INT),
        F("message", required=True),
        F("type"),
        F("emotion"),
        F("status", default="new"),
        F("handled_by"),
        F("created_at", stamp=Stamp.CREATED),
        F("updated_at", stamp=Stamp.UPDATED),
    ),
    order_by="created_at",
    descending=True,
    lookups=(
        Lookup("client_name", via="client_id", model=Contact, column="full_name"),
        Lookup("project_title", via="project_id", model=Project, column="title"),
    ),
)


# =============================================================================
# Marketing
# =============================================================================

MARKETING_INSIGHTS = ResourceSchema(
    path="marketing-insights",
    model=MarketingInsight,
    label="Marketing insight",
    fields=(
        _now("date"),
        F("client_segment"),
        F("insight_type"),
        F("insight_text", required=True),
        F("source_type"),
        F("source_id", INT),
        F("impact_score", FLOAT),
        F("recommendation"),
        F("used_in_strategy", BOOL, default=False),
        F("used_by_agent"),
        F("notes"),
    ),
    order_by="date",
    descending=True,
)

CONTENT_POSTS = ResourceSchema(
    path="content-posts",
    model=ContentPost,
    label="Content post",
    fields=(
        F("platform", required=True),
        F("post_type"),
        F("title"),
        F("content_text"),
        F("media_link"),
        F("cta_text"),
        F("posted_at"),
        F("created_by"),
        F("related_campaign_id", INT),
        F("notes"),
    ),
    order_by="posted_at",
    descending=True,
)

CONTENT_FEEDBACK = ResourceSchema(
    path="content-feedback",
    model=ContentFeedback,
    label="Content feedback",
    fields=(
        F("post_id", INT, required=True),
        F("client_id", INT),
        F("feedback_text", required=True),
        F("rating", INT),
        _now("created_at"),
    ),
    order_by="created_at",
    descending=True,
)

CONTENT_IDEAS = ResourceSchema(
    path="content-ideas",
    model=ContentIdea,
    label="Content idea",
    fields=(
        F("idea_text", required=True),
        F("source"),
        F("status", default="draft"),
        F("intended_platform", default="all"),
        F("created_by"),
        F("used_in_post_id", INT),
        _now("created_at"),
    ),
    order_by="created_at",
    descending=True,
)

MARKETING_CAMPAIGNS = ResourceSchema(
    path="marketing-campaigns",
    model=MarketingCampaign,
    label="Marketing campaign",
    fields=(
        F("name", required=True),
        F("goal"),
        F("platform"),
        F("start_date"),
        F("end_date"),
        F("budget", FLOAT),
        F("status"),
        F("owner_agent"),
        F("summary"),
        F("results_json", DICT),
    ),
    order_by="start_date",
    descending=True,
)

PERSONA_LIBRARY = ResourceSchema(
    path="persona-library",
    model=Persona,
    label="Persona",
    fields=(
        F("name", required=True),
        F("pain_points"),
        F("goals"),
        F("triggers"),
        F("tone"),
        F("platforms"),
        F("tags"),
        F("updated_at", stamp=Stamp.UPDATED),
    ),
    order_by="updated_at",
    descending=True,
)

TREND_SCANNER_LOGS = ResourceSchema(
    path="trend-scanner-logs",
    model=TrendScannerLog,
    label="Trend scanner log",
    fields=(
        _now("date"),
        F("source"),
        F("title", required=True),
        F("relevance_score", FLOAT),
        F("category"),
        F("insight_text"),
        F("used_in"),
    ),
    order_by="date",
    descending=True,
)

CAMPAIGN_TESTS = ResourceSchema(
    path="campaign-tests",
    model=CampaignTest,
    label="Campaign test",
    fields=(
        F("campaign_id", INT, required=True),
        F("test_type"),
        F("version_a"),
        F("version_b"),
        F("result"),
        _now("tested_at"),
        F("notes"),
    ),
    order_by="tested_at",
    descending=True,
    lookups=(
        Lookup("campaign_name", via="campaign_id", model=MarketingCampaign, column="name"),
    ),
)

CONTENT_REMIXES = ResourceSchema(
    path="content-remixes",
    model=ContentRemix,
    label="Content remix",
    fields=(
        F("source_post_id", INT),
        F("platform"),
        F("remix_type"),
        F("title"),
        F("content_text"),
        F("media_link"),
        _now("created_at"),
        F("notes"),
    ),
    order_by="created_at",
    descending=True,
    lookups=(
        Lookup("source_post_title", via="source_post_id", model=ContentPost, column="title"),
    ),
)


RESOURCE_SCHEMAS: tuple[ResourceSchema, ...] = (
    CONTACTS,
    LEADS,
    TASKS,
    MEETINGS,
    QUOTES,
    PAYMENTS,
    AGENT_REQUESTS,
    FREELANCERS,
    PROJECTS,
    PROJECT_ASSIGNMENTS,
    QA_REVIEWS,
    DELIVERIES,
    SUPPORT_ARTICLES,
    GROWTH_OPPORTUNITIES,
    MARKETING_INSIGHTS,
    SYSTEM_CHANGES,
    CONTENT_POSTS,
    CONTENT_FEEDBACK,
    CONTENT_IDEAS,
    MARKETING_CAMPAIGNS,
    PERSONA_LIBRARY,
    TREND_SCANNER_LOGS,
    CAMPAIGN_TESTS,
    CONTENT_REMIXES,
    SUPPORT_REQUESTS,
)

SCHEMAS_BY_PATH: dict[str, ResourceSchema] = {schema.path: schema for schema in RESOURCE_SCHEMAS}
