"""Workflow execution and validation logic."""

from .validator import WorkflowValidator
from .execution_engine import WorkflowExecutionEngine

__all__ = [
    'WorkflowValidator',
    'WorkflowExecutionEngine'
]
