# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .logger import (
    DEFAULT_LOG_FILE,
    clear_correlation_id,
    log_file_path,
    logger,
    set_correlation_id,
    setup_logging,
)
from .sensitive_filter import sanitize_message

__all__ = [
    "DEFAULT_LOG_FILE",
    "clear_correlation_id",
    "log_file_path",
    "logger",
    "sanitize_message",
    "set_correlation_id",
    "setup_logging",
]
