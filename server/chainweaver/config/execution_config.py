"""Execution engine configurations."""

import os

EXECUTION_CONFIG = {
    "max_chain_length": int(os.getenv("CHAINWEAVER_MAX_CHAIN_LENGTH", "100")),
    "log_preview_length": 80
}
