"""Utility functions and helper classes."""

from .exceptions import (
    ChainWeaverError,
    ProviderError,
    UnsupportedProviderError,
    ProviderNotRegisteredError,
    ProviderExecutionError,
    WorkflowExecutionError,
    NodeExecutionError,
    ErrorResponse,
    handle_api_errors,
    handle_llm_error
)

from .general import (
    elapsed_ms,
    truncate_text
)

__all__ = [
    # Exceptions
    'ChainWeaverError',
    'ProviderError',
    'UnsupportedProviderError',
    'ProviderNotRegisteredError',
    'ProviderExecutionError',
    'WorkflowExecutionError',
    'NodeExecutionError',
    # Exception handling
    'ErrorResponse',
    'handle_api_errors',
    'handle_llm_error',
    # General utilities
    'elapsed_ms',
    'truncate_text'
]
