# vfi_models/io/file_utils.py
"""
File I/O utilities for loading configuration data.

This module provides safe file operations with proper error handling
and logging for parameter files.

Example:
    >>> from vfi_models.io.file_utils import load_json_file
    >>> data = load_json_file("config/params.json")
"""

import json
import os
import sys
import logging
from typing import Dict, Any

logger = logging.getLogger(__name__)


def load_json_file(filename: str) -> Dict[str, Any]:
    """
    Safely load a JSON file with comprehensive error handling.

    Args:
        filename: Path to the JSON file.

    Returns:
        Parsed JSON data as a dictionary.

    Raises:
        SystemExit: If file not found, invalid JSON, not a JSON object,
            or read error.
    """
    if not os.path.exists(filename):
        logger.error(f"File '{filename}' not found.")
        sys.exit(1)

    try:
        with open(filename, 'r') as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        logger.error(f"Invalid JSON in {filename}: {e}")
        sys.exit(1)
    except OSError as e:
        logger.error(f"Error reading {filename}: {e}")
        sys.exit(1)

    if not isinstance(data, dict):
        logger.error(f"Expected a JSON object in {filename}, got {type(data).__name__}.")
        sys.exit(1)
    return data
