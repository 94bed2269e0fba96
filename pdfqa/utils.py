"""
Utility functions for the AI PDF Reader Backend.
"""

import time
import functools
import inspect
from typing import Dict, Any, List, Optional
from datetime import datetime, timezone
import logging

from .config import settings

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def validate_file_type(filename: str, allowed_types: Optional[List[str]] = None) -> bool:
    """Validate if the file type is allowed."""
    if allowed_types is None:
        allowed_types = settings.allowed_file_types

    if not filename or '.' not in filename:
        return False

    file_extension = filename.lower().rsplit('.', 1)[-1]
    return file_extension in allowed_types


def validate_file_size(file_size: int, max_file_size_mb: Optional[int] = None) -> bool:
    """Validate if the file size is within limits."""
    if max_file_size_mb is None:
        max_file_size_mb = settings.max_file_size_mb
    max_size_bytes = max_file_size_mb * 1024 * 1024
    return file_size <= max_size_bytes


def format_timestamp() -> str:
    """Get current timestamp in ISO format."""
    return datetime.now(timezone.utc).isoformat()


def measure_time(func):
    """Decorator to measure function execution time."""
    if inspect.iscoroutinefunction(func):
        @functools.wraps(func)
        async def async_wrapper(*args, **kwargs):
            start_time = time.time()
            try:
                return await func(*args, **kwargs)
            finally:
                logger.info(f"{func.__name__} executed in {time.time() - start_time:.2f} seconds")
        return async_wrapper

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        start_time = time.time()
        try:
            return func(*args, **kwargs)
        finally:
            logger.info(f"{func.__name__} executed in {time.time() - start_time:.2f} seconds")
    return wrapper


def sanitize_filename(filename: str) -> str:
    """Sanitize filename for logging and echoing back to the client."""
    # Remove or replace dangerous characters
    dangerous_chars = ['/', '\\', ':', '*', '?', '"', '<', '>', '|']
    sanitized = filename

    for char in dangerous_chars:
        sanitized = sanitized.replace(char, '_')

    # Limit length
    if len(sanitized) > 255:
        name, ext = sanitized.rsplit('.', 1) if '.' in sanitized else (sanitized, '')
        sanitized = name[:255-len(ext)-1] + ('.' + ext if ext else '')

    return sanitized


def log_processing_info(operation: str, details: Dict[str, Any]) -> None:
    """Log processing information."""
    logger.info(f"{operation}: {details}")


def handle_processing_error(operation: str, error: Exception, context: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Handle and log processing errors."""
    error_info = {
        'operation': operation,
        'error_type': type(error).__name__,
        'error_message': str(error),
        'timestamp': format_timestamp()
    }

    if context:
        error_info.update(context)

    logger.error(f"Processing error: {error_info}")
    return error_info
