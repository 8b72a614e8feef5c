"""
Centralized exception types and error handling utilities.

Provides the domain exception hierarchy raised by providers and the
execution engine, plus decorators and factory functions for consistent
error handling across API endpoints.
"""

import asyncio
import logging
import traceback
from functools import wraps
from typing import Callable, Optional
from fastapi import HTTPException

logger = logging.getLogger(__name__)


class ChainWeaverError(Exception):
    """Base class for every error raised by this package."""


class ProviderError(ChainWeaverError):
    """Base class for provider configuration and upstream failures."""

    def __init__(self, message: str, provider: Optional[str] = None):
        super().__init__(message)
        self.provider = provider


class UnsupportedProviderError(ProviderError):
    """The provider id has no implementation."""


class ProviderNotRegisteredError(ProviderError):
    """The workflow references a provider the caller supplied no key for."""


class ProviderExecutionError(ProviderError):
    """The vendor call failed: non-success status or transport error."""


class WorkflowExecutionError(ChainWeaverError):
    """The graph walk could not continue."""


class NodeExecutionError(WorkflowExecutionError):
    """A single node failed; fatal to the whole execution."""

    def __init__(self, message: str, node_id: str):
        super().__init__(message)
        self.node_id = node_id


class ErrorResponse:
    """Factory for creating standardized HTTPException responses."""

    @staticmethod
    def validation_error(detail) -> HTTPException:
        """Create a 400 validation error response."""
        return HTTPException(status_code=400, detail=detail)

    @staticmethod
    def unauthorized(detail) -> HTTPException:
        """Create a 401 unauthorized error response."""
        return HTTPException(status_code=401, detail=detail)


def handle_api_errors(
    default_status: int = 500,
    log_errors: bool = True
):
    """
    Decorator for consistent error handling in API endpoints.

    HTTPException passes through untouched; anything else is logged and
    turned into an HTTPException with ``default_status``.

    Usage:
        @handle_api_errors(default_status=500)
        async def my_endpoint():
            ...
    """
    def decorator(func: Callable):
        @wraps(func)
        async def async_wrapper(*args, **kwargs):
            try:
                return await func(*args, **kwargs)
            except HTTPException:
                raise
            except Exception as e:
                if log_errors:
                    logger.error(f"Unexpected error in {func.__name__}: {str(e)}\n{traceback.format_exc()}")
                raise HTTPException(
                    status_code=default_status,
                    detail={"error": "Internal server error", "details": str(e)}
                )

        @wraps(func)
        def sync_wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except HTTPException:
                raise
            except Exception as e:
                if log_errors:
                    logger.error(f"Unexpected error in {func.__name__}: {str(e)}\n{traceback.format_exc()}")
                raise HTTPException(
                    status_code=default_status,
                    detail={"error": "Internal server error", "details": str(e)}
                )

        if asyncio.iscoroutinefunction(func):
            return async_wrapper
        return sync_wrapper

    return decorator


def handle_llm_error(
    provider: str,
    model: str,
    error: Exception,
    log_error: bool = True
) -> str:
    """
    Create standardized error message for LLM failures.

    Returns:
        Formatted error message string
    """
    if log_error:
        logger.error(f"LLM error [{provider}/{model}]: {str(error)}")

    return str(error) or f"{type(error).__name__} from {provider}/{model}"
