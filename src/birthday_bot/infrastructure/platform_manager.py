#!/usr/bin/env python3
# platform_manager.py
"""
Helper functions for running on the AWS Lambda platform.
"""

from __future__ import annotations

import logging
import os

""" Parameters """


def get_parameters(param_names: list[str] | str) -> dict[str, str | None]:
    """
    Retrieve parameters from the process environment.

    Parameters are stored in the environment in uppercase, but the result dictionary
    is keyed by the lowercase name. Missing parameters map to None so callers can
    decide whether the absence matters.

    Args:
        param_names (list[str] | str): One or more parameter names.

    Returns:
        dict[str, str | None]: Mapping of lowercase parameter name to its value.
    """
    if isinstance(param_names, str):
        param_names = [param_names]

    result: dict[str, str | None] = {}
    for param_name in param_names:
        value = os.getenv(param_name.upper())
        result[param_name.lower()] = value if value else None
    return result


""" AWS CloudWatch """


def create_logger(log_level: str = "INFO", logger_name: str = __name__) -> logging.Logger:
    """
    Create a logger for AWS Lambda that outputs to CloudWatch.

    Args:
        log_level (str): Logging level (e.g., "INFO", "DEBUG").
        logger_name (str): Name for the logger instance.

    Returns:
        logging.Logger: Configured logger instance.
    """
    level = getattr(logging, log_level.upper(), logging.INFO)
    logger = logging.getLogger(logger_name)
    logger.setLevel(level)

    # Check if the logger already has handlers to avoid duplication
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setLevel(level)
        handler.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
        logger.addHandler(handler)

    return logger
