# FinanTech - Multi-tenant financial management for SMBs
# Copyright (c) 2025 The FinanTech Authors
# Licensed under the MIT License. See LICENSE file for details.

"""
Exception types raised by FinanTech.

Library code raises these exceptions; user-facing layers (the CLI) catch
`FinanTechError` and render the message as a warning instead of a traceback.
"""


class FinanTechError(Exception):
    """Base class for all FinanTech errors."""


class ValidationError(FinanTechError):
    """Raised when user-provided data breaks a business rule."""


class DeletionBlockedError(FinanTechError):
    """
    Raised when an entity cannot be deleted because transactions link to it.

    Attributes
    ----------
    linked_count:
        Number of transactions referencing the entity.
    """

    def __init__(self, message: str, linked_count: int) -> None:
        super().__init__(message)
        self.linked_count = linked_count


class PersistenceError(FinanTechError):
    """Raised when a snapshot could not be written to the database."""


class ReconciliationError(FinanTechError):
    """Raised when the AI reconciliation service fails."""


class AIServiceError(FinanTechError):
    """Raised when the generative-language API is unavailable or fails."""
