# app/services/leave/__init__.py
from .leave_workflow_service import LeaveWorkflowService, can_transition

__all__ = ["LeaveWorkflowService", "can_transition"]
