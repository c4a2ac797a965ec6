"""Structured logging for entity endpoint outcomes."""

import logging
from typing import Any

logger = logging.getLogger(__name__)


class EntityEventLogger:
    """Structured logger for entity operations."""

    def __init__(self, log: logging.Logger | None = None) -> None:
        self._log = log or logger

    def entity_updated(self, entity_id: str) -> None:
        """Log a successful update."""
        self._log.info(
            "Entity updated successfully",
            extra={"structured": {"entity_id": entity_id}},
        )

    def entity_removed(self, entity_id: str, permanent: bool) -> None:
        """Log a successful archive or permanent delete."""
        self._log.info(
            "Entity deleted/archived successfully",
            extra={"structured": {"entity_id": entity_id, "permanent": permanent}},
        )

    def operation_failed(self, action: str, entity_id: str, error: BaseException) -> None:
        """Log an unexpected failure with full detail.

        Args:
            action: Verb for the message, e.g. "fetching"
            entity_id: Requested entity ID
            error: The exception caught at the handler boundary
        """
        log_data: dict[str, Any] = {
            "entity_id": entity_id,
            "error_type": type(error).__name__,
        }
        self._log.error(
            f"Error {action} entity",
            exc_info=error,
            extra={"structured": log_data},
        )
