"""Initial schema - principals and every CRM resource table

Revision ID: 0001_initial_schema
Revises:
Create Date: 2026-10-19

Reference columns (contact_id, project_id, ...) are plain integers without
foreign keys. Timestamps are ISO-8601 strings. Ids use AUTOINCREMENT on
SQLite so they are never reused.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '0001_initial_schema'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

TABLE_KWARGS = {"sqlite_autoincrement": True}


def _id() -> sa.Column:
    return sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True)


def _ts(name: str) -> sa.Column:
    return sa.Column(name, sa.String(64), nullable=True)


def _text(name: str, nullable: bool = True) -> sa.Column:
    return sa.Column(name, sa.Text(), nullable=nullable)


def _str(name: str, length: int = 255, nullable: bool = True) -> sa.Column:
    return sa.Column(name, sa.String(length), nullable=nullable)


def _int(name: str, nullable: bool = True) -> sa.Column:
    return sa.Column(name, sa.Integer(), nullable=nullable)


def upgrade() -> None:
    """Create all tables."""

    # ==========================================================================
    # Principals
    # ==========================================================================
    op.create_table(
        'users',
        _id(),
        _str('name', nullable=False),
        _str('email', nullable=False),
        _str('role', 20, nullable=False),
        _str('api_key', nullable=False),
        sa.UniqueConstraint('email'),
        **TABLE_KWARGS,
    )
    op.create_index('ix_users_api_key', 'users', ['api_key'], unique=True)

    # ==========================================================================
    # Sales
    # ==========================================================================
    op.create_table(
        'contacts',
        _id(),
        _str('full_name', nullable=False),
        _str('phone', 50),
        _str('email'),
        _str('status', 50),
        _text('notes'),
        **TABLE_KWARGS,
    )
    op.create_table(
        'leads',
        _id(),
        _str('title', nullable=False),
        _text('description'),
        _int('contact_id'),
        _str('channel', 100),
        _str('funnel_stage', 100),
        _str('status', 50),
        **TABLE_KWARGS,
    )
    op.create_table(
        'tasks',
        _id(),
        _str('title', nullable=False),
        _text('description'),
        _str('type', 50),
        _str('assigned_to'),
        _ts('due_date'),
        _str('status', 50),
        _str('priority', 50),
        _str('related_to', 100),
        _int('related_id'),
        _ts('created_at'),
        _ts('updated_at'),
        _text('notes'),
        **TABLE_KWARGS,
    )
    op.create_index('idx_tasks_created', 'tasks', ['created_at'])
    op.create_table(
        'meetings',
        _id(),
        _int('contact_id'),
        _str('title', nullable=False),
        _ts('datetime'),
        _str('location'),
        _str('status', 50),
        **TABLE_KWARGS,
    )
    op.create_table(
        'quotes',
        _id(),
        _int('contact_id'),
        sa.Column('amount', sa.Float(), nullable=True),
        _str('status', 50),
        _str('file_url', 1024),
        **TABLE_KWARGS,
    )
    op.create_table(
        'payments',
        _id(),
        _int('quote_id'),
        sa.Column('amount', sa.Float(), nullable=False),
        _str('status', 50),
        _ts('due_date'),
        _ts('paid_at'),
        _str('invoice_link', 1024),
        _int('reminder_count', nullable=False),
        _ts('last_reminder_at'),
        _str('client_email'),
        _text('notes'),
        **TABLE_KWARGS,
    )
    op.create_index('idx_payments_due', 'payments', ['due_date'])
    op.create_table(
        'agent_requests',
        _id(),
        _str('agent_name', nullable=False),
        _str('action', nullable=False),
        _str('target_table', 100),
        _int('target_id'),
        _text('input_prompt'),
        _text('output'),
        _str('status', 50),
        _ts('timestamp'),
        **TABLE_KWARGS,
    )
    op.create_table(
        'system_changes',
        _id(),
        _text('reason', nullable=False),
        _text('affected_agents'),
        _text('proposed_structure'),
        _text('impact_risks'),
        _text('testing_plan'),
        _str('status', 50),
        _str('approved_by'),
        _str('version', 50),
        _ts('created_at'),
        _ts('updated_at'),
        **TABLE_KWARGS,
    )

    # ==========================================================================
    # Delivery
    # ==========================================================================
    op.create_table(
        'freelancers',
        _id(),
        _str('name', nullable=False),
        _str('skill'),
        _str('contact_email'),
        _str('whatsapp', 50),
        sa.Column('is_available', sa.Boolean(), nullable=False),
        _int('current_load', nullable=False),
        sa.Column('rating', sa.Float(), nullable=False),
        _text('notes'),
        _ts('created_at'),
        **TABLE_KWARGS,
    )
    op.create_table(
        'projects',
        _id(),
        _int('contact_id'),
        _str('title', nullable=False),
        _text('description'),
        _str('status', 50),
        _str('stage', 50),
        _str('current_agent'),
        _text('next_action'),
        _ts('start_date'),
        _ts('last_update'),
        _text('full_spec'),
        _text('admin_notes'),
        _text('tags'),
        **TABLE_KWARGS,
    )
    op.create_table(
        'project_assignments',
        _id(),
        _int('project_id', nullable=False),
        _int('freelancer_id', nullable=False),
        _ts('assigned_at'),
        _ts('due_date'),
        _str('status', 50),
        _str('delivery_link', 1024),
        _text('notes'),
        **TABLE_KWARGS,
    )
    op.create_table(
        'qa_reviews',
        _id(),
        _int('project_id', nullable=False),
        _str('reviewer'),
        _str('status', 50),
        _text('notes'),
        _ts('approved_at'),
        _ts('created_at'),
        **TABLE_KWARGS,
    )
    op.create_table(
        'deliveries',
        _id(),
        _int('project_id', nullable=False),
        _str('delivery_link', 1024),
        _ts('delivered_at'),
        _str('delivered_by'),
        _str('followup_status', 50),
        _text('feedback'),
        _text('notes'),
        **TABLE_KWARGS,
    )
    op.create_table(
        'support_articles',
        _id(),
        _text('question_keywords', nullable=False),
        _text('answer_text', nullable=False),
        _str('related_agent'),
        _str('category', 100),
        _str('media_link', 1024),
        _ts('last_updated'),
        _int('times_used', nullable=False),
        **TABLE_KWARGS,
    )
    op.create_table(
        'support_requests',
        _id(),
        _int('client_id'),
        _int('project_id'),
        _text('message', nullable=False),
        _str('type', 50),
        _str('emotion', 50),
        _str('status', 50),
        _str('handled_by'),
        _ts('created_at'),
        _ts('updated_at'),
        **TABLE_KWARGS,
    )
    op.create_table(
        'growth_opportunities',
        _id(),
        _int('client_id'),
        _int('project_id'),
        _text('suggested_offer', nullable=False),
        _str('status', 50),
        _ts('response_date'),
        _text('next_step'),
        _str('sent_by'),
        _text('notes'),
        **TABLE_KWARGS,
    )

    # ==========================================================================
    # Marketing
    # ==========================================================================
    op.create_table(
        'marketing_insights',
        _id(),
        _ts('date'),
        _str('client_segment'),
        _str('insight_type', 100),
        _text('insight_text', nullable=False),
        _str('source_type', 100),
        _int('source_id'),
        sa.Column('impact_score', sa.Float(), nullable=True),
        _text('recommendation'),
        sa.Column('used_in_strategy', sa.Boolean(), nullable=False),
        _str('used_by_agent'),
        _text('notes'),
        **TABLE_KWARGS,
    )
    op.create_table(
        'content_posts',
        _id(),
        _str('platform', 100, nullable=False),
        _str('post_type', 100),
        _str('title'),
        _text('content_text'),
        _str('media_link', 1024),
        _str('cta_text'),
        _ts('posted_at'),
        _str('created_by'),
        _int('related_campaign_id'),
        _text('notes'),
        **TABLE_KWARGS,
    )
    op.create_table(
        'content_feedback',
        _id(),
        _int('post_id', nullable=False),
        _int('client_id'),
        _text('feedback_text', nullable=False),
        _int('rating'),
        _ts('created_at'),
        **TABLE_KWARGS,
    )
    op.create_table(
        'content_ideas',
        _id(),
        _text('idea_text', nullable=False),
        _str('source'),
        _str('status', 50),
        _str('intended_platform', 100),
        _str('created_by'),
        _int('used_in_post_id'),
        _ts('created_at'),
        **TABLE_KWARGS,
    )
    op.create_table(
        'marketing_campaigns',
        _id(),
        _str('name', nullable=False),
        _text('goal'),
        _str('platform', 100),
        _ts('start_date'),
        _ts('end_date'),
        sa.Column('budget', sa.Float(), nullable=True),
        _str('status', 50),
        _str('owner_agent'),
        _text('summary'),
        _text('results_json'),
        **TABLE_KWARGS,
    )
    op.create_table(
        'persona_library',
        _id(),
        _str('name', nullable=False),
        _text('pain_points'),
        _text('goals'),
        _text('triggers'),
        _str('tone'),
        _text('platforms'),
        _text('tags'),
        _ts('updated_at'),
        **TABLE_KWARGS,
    )
    op.create_table(
        'marketing_campaigns_personas',
        sa.Column('campaign_id', sa.Integer(), primary_key=True),
        sa.Column('persona_id', sa.Integer(), primary_key=True),
    )
    op.create_table(
        'trend_scanner_logs',
        _id(),
        _ts('date'),
        _str('source'),
        _str('title', nullable=False),
        sa.Column('relevance_score', sa.Float(), nullable=True),
        _str('category', 100),
        _text('insight_text'),
        _str('used_in'),
        **TABLE_KWARGS,
    )
    op.create_table(
        'campaign_tests',
        _id(),
        _int('campaign_id', nullable=False),
        _str('test_type', 100),
        _text('version_a'),
        _text('version_b'),
        _text('result'),
        _ts('tested_at'),
        _text('notes'),
        **TABLE_KWARGS,
    )
    op.create_table(
        'content_remixes',
        _id(),
        _int('source_post_id'),
        _str('platform', 100),
        _str('remix_type', 100),
        _str('title'),
        _text('content_text'),
        _str('media_link', 1024),
        _ts('created_at'),
        _text('notes'),
        **TABLE_KWARGS,
    )


TABLES = (
    'content_remixes',
    'campaign_tests',
    'trend_scanner_logs',
    'marketing_campaigns_personas',
    'persona_library',
    'marketing_campaigns',
    'content_ideas',
    'content_feedback',
    'content_posts',
    'marketing_insights',
    'growth_opportunities',
    'support_requests',
    'support_articles',
    'deliveries',
    'qa_reviews',
    'project_assignments',
    'projects',
    'freelancers',
    'system_changes',
    'agent_requests',
    'payments',
    'quotes',
    'meetings',
    'tasks',
    'leads',
    'contacts',
    'users',
)


def downgrade() -> None:
    """Drop all tables."""
    op.drop_index('idx_payments_due', table_name='payments')
    op.drop_index('idx_tasks_created', table_name='tasks')
    op.drop_index('ix_users_api_key', table_name='users')
    for table in TABLES:
        op.drop_table(table)
