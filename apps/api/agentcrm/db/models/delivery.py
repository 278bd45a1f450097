"""SQLAlchemy ORM models for project delivery and client support."""

from __future__ import annotations

from sqlalchemy import Boolean, Float, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from agentcrm.db.base import AUTOINCREMENT, Base
from agentcrm.db.types import JSONEncodedList


class Freelancer(Base):
    __tablename__ = "freelancers"
    __table_args__ = AUTOINCREMENT

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    skill: Mapped[str | None] = mapped_column(String(255))
    contact_email: Mapped[str | None] = mapped_column(String(255))
    whatsapp: Mapped[str | None] = mapped_column(String(50))
    is_available: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    current_load: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    rating: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    notes: Mapped[str | None] = mapped_column(Text)
    created_at: Mapped[str | None] = mapped_column(String(64))


class Project(Base):
    """Client project; tags are stored as a JSON array in a text column."""

    __tablename__ = "projects"
    __table_args__ = AUTOINCREMENT

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    contact_id: Mapped[int | None] = mapped_column(Integer)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text)
    status: Mapped[str | None] = mapped_column(String(50))
    stage: Mapped[str | None] = mapped_column(String(50))
    current_agent: Mapped[str | None] = mapped_column(String(255))
    next_action: Mapped[str | None] = mapped_column(Text)
    start_date: Mapped[str | None] = mapped_column(String(64))
    last_update: Mapped[str | None] = mapped_column(String(64))
    full_spec: Mapped[str | None] = mapped_column(Text)
    admin_notes: Mapped[str | None] = mapped_column(Text)
    tags: Mapped[list] = mapped_column(JSONEncodedList)


class ProjectAssignment(Base):
    __tablename__ = "project_assignments"
    __table_args__ = AUTOINCREMENT

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    project_id: Mapped[int] = mapped_column(Integer, nullable=False)
    freelancer_id: Mapped[int] = mapped_column(Integer, nullable=False)
    assigned_at: Mapped[str | None] = mapped_column(String(64))
    due_date: Mapped[str | None] = mapped_column(String(64))
    status: Mapped[str | None] = mapped_column(String(50))
    delivery_link: Mapped[str | None] = mapped_column(String(1024))
    notes: Mapped[str | None] = mapped_column(Text)


class QAReview(Base):
    __tablename__ = "qa_reviews"
    __table_args__ = AUTOINCREMENT

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    project_id: Mapped[int] = mapped_column(Integer, nullable=False)
    reviewer: Mapped[str | None] = mapped_column(String(255))
    status: Mapped[str | None] = mapped_column(String(50))
    notes: Mapped[str | None] = mapped_column(Text)
    approved_at: Mapped[str | None] = mapped_column(String(64))
    created_at: Mapped[str | None] = mapped_column(String(64))


class Delivery(Base):
    __tablename__ = "deliveries"
    __table_args__ = AUTOINCREMENT

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    project_id: Mapped[int] = mapped_column(Integer, nullable=False)
    delivery_link: Mapped[str | None] = mapped_column(String(1024))
    delivered_at: Mapped[str | None] = mapped_column(String(64))
    delivered_by: Mapped[str | None] = mapped_column(String(255))
    followup_status: Mapped[str | None] = mapped_column(String(50))
    feedback: Mapped[str | None] = mapped_column(Text)
    notes: Mapped[str | None] = mapped_column(Text)


class SupportArticle(Base):
    __tablename__ = "support_articles"
    __table_args__ = AUTOINCREMENT

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    question_keywords: Mapped[str] = mapped_column(Text, nullable=False)
    answer_text: Mapped[str] = mapped_column(Text, nullable=False)
    related_agent: Mapped[str | None] = mapped_column(String(255))
    category: Mapped[str | None] = mapped_column(String(100))
    media_link: Mapped[str | None] = mapped_column(String(1024))
    last_updated: Mapped[str | None] = mapped_column(String(64))
    times_used: Mapped[int] = mapped_column(Integer, nullable=False, default=0)


class SupportRequest(Base):
    """Inbound client support message; client_id references contacts."""

    __tablename__ = "support_requests"
    __table_args__ = AUTOINCREMENT

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    client_id: Mapped[int | None] = mapped_column(Integer)
    project_id: Mapped[int | None] = mapped_column(Integer)
    message: Mapped[str] = mapped_column(Text, nullable=False)
    type: Mapped[str | None] = mapped_column(String(50))
    emotion: Mapped[str | None] = mapped_column(String(50))
    status: Mapped[str | None] = mapped_column(String(50))
    handled_by: Mapped[str | None] = mapped_column(String(255))
    created_at: Mapped[str | None] = mapped_column(String(64))
    updated_at: Mapped[str | None] = mapped_column(String(64))


class GrowthOpportunity(Base):
    """Upsell offer sent to an existing client (client_id references contacts)."""

    __tablename__ = "growth_opportunities"
    __table_args__ = AUTOINCREMENT

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    client_id: Mapped[int | None] = mapped_column(Integer)
    project_id: Mapped[int | None] = mapped_column(Integer)
    suggested_offer: Mapped[str] = mapped_column(Text, nullable=False)
    status: Mapped[str | None] = mapped_column(String(50))
    response_date: Mapped[str | None] = mapped_column(String(64))
    next_step: Mapped[str | None] = mapped_column(Text)
    sent_by: Mapped[str | None] = mapped_column(String(255))
    notes: Mapped[str | None] = mapped_column(Text)

