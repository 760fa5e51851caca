"""Configuration module for School Manager.

This module provides centralized configuration management: directory paths,
the database URL and logging defaults. All configuration values can be
overridden via environment variables.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# --- Directory Configuration ---

# Root directory of the project
ROOT_DIR = Path(__file__).parent.parent.resolve()

# Data directory name
DATA_DIR_NAME = "data"
DATA_DIR = ROOT_DIR / DATA_DIR_NAME

# --- Database Configuration ---

DATABASE_FILE_NAME = "school.db"

DATABASE_URL: str = os.getenv(
    "SCHOOL_DATABASE_URL", f"sqlite:///{DATA_DIR / DATABASE_FILE_NAME}"
)

# Echo every emitted SQL statement (set to "true" to enable)
SQL_ECHO: bool = os.getenv("SQL_ECHO", "false").lower() == "true"

# --- Logging Configuration ---

LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
