"""AgentCRM: internal CRM API for an agent-driven service business."""

__version__ = "1.0.0"
