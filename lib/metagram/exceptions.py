"""
Metagram Exceptions

This module contains exception classes raised by the handler registry and the
update dispatcher. Both kinds aggregate every underlying failure instead of
keeping only the first one.
"""

import logging
from typing import Any, List, Optional, Sequence

logger = logging.getLogger(__name__)


class MetagramError(Exception):
    """Base exception class for all Metagram errors.

    Holds an ordered list of underlying errors. The first one is the primary
    error (also set as ``__cause__``), the rest are suppressed ones.

    Attributes:
        message: Human-readable error message
        errors: Underlying errors in the order they occurred
    """

    def __init__(self, message: str, errors: Optional[Sequence[BaseException]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.errors: List[BaseException] = list(errors or [])
        if self.errors:
            self.__cause__ = self.errors[0]
        logger.debug(f"{self.__class__.__name__}: {message} ({len(self.errors)} causes)")

    @property
    def primary(self) -> Optional[BaseException]:
        """First underlying error, if any"""
        return self.errors[0] if self.errors else None

    @property
    def suppressed(self) -> List[BaseException]:
        """Every underlying error after the primary one"""
        return self.errors[1:]

    def addError(self, error: BaseException) -> None:
        """Attach one more underlying error, keeping the order.

        Args:
            error: The error to attach
        """
        if not self.errors:
            self.__cause__ = error
        self.errors.append(error)

    def __str__(self) -> str:
        if len(self.errors) > 1:
            return f"{self.message} (+{len(self.errors) - 1} more errors)"
        return self.message


class RegisterError(MetagramError):
    """Raised when a handler source can not be registered.

    This occurs when:
    - The candidate lacks the handler source marker
    - Building or instantiating the handler source fails
    - One or more sources of a batch registration failed
    """


class UpdateProcessError(MetagramError):
    """Raised when one or more handlers failed while processing a single update.

    Every other handler was still invoked. ``errors`` holds every failure in
    invocation order.

    Attributes:
        update: The update being processed
    """

    def __init__(
        self,
        message: str,
        errors: Optional[Sequence[BaseException]] = None,
        update: Optional[Any] = None,
    ) -> None:
        super().__init__(message, errors)
        self.update = update
