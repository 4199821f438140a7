"""Centralized logging infrastructure.

Every module obtains its logger here instead of calling
``logging.getLogger`` directly, so the handlers and formats follow the
configured environment.

Usage:
    ```python
    from learnbyai_data.infrastructure.logging import get_logger

    logger = get_logger(__name__)
    logger.error("Error fetching book pages", extra={"book_id": book_id})
    ```
"""

from .config import configure_testing_logging, setup_logging_configuration
from .factory import configure_logging, get_logger

__all__ = [
    "get_logger",
    "configure_logging",
    "configure_testing_logging",
    "setup_logging_configuration",
]
