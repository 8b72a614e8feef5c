"""ChainWeaver - linear LLM workflow execution server."""

__version__ = "1.0.0"
