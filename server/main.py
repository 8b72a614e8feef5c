#!/usr/bin/env python3
"""
ChainWeaver Server
Main entry point for the server application
"""

import sys
import os

# Allow running from a source checkout without installing the package
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from chainweaver.api.api_server import app
from chainweaver.config import API_CONFIG
import uvicorn

if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host=API_CONFIG["host"],
        port=API_CONFIG["port"],
        reload=False
    )
