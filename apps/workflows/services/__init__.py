"""Workflow service layer exports"""
from .workflow_service import WORKFLOW_HANDLERS, WorkflowService

__all__ = [
    'WORKFLOW_HANDLERS',
    'WorkflowService',
]
