"""Custom exception hierarchy for remi."""

from __future__ import annotations


class RemiError(Exception):
    """Base class for all custom errors raised by remi."""


# --- 3-layer hierarchy ---

class DomainError(RemiError):
    """Base class for domain-level errors."""


class InfrastructureError(RemiError):
    """Base class for infrastructure-level errors."""


class SettingsError(RemiError):
    """Base class for settings related failures."""


# --- Domain errors ---

class NookNotFoundError(DomainError):
    """Raised when the requested nook cannot be located."""


class NookNameConflictError(DomainError):
    """Raised when trying to create or rename a nook to an existing name."""


class InvalidNookNameError(DomainError):
    """Raised when a nook name is empty or otherwise unusable."""


# --- Infrastructure errors ---

class DatabaseError(InfrastructureError):
    """Raised when a database operation fails."""


class ConnectionPoolExhausted(InfrastructureError):
    """Raised when no connections are available in the pool."""


# --- Settings errors ---

class SettingsLoadError(SettingsError):
    """Raised when the settings file cannot be parsed or loaded."""


class SettingsValidationError(SettingsError):
    """Raised when settings data fails schema validation."""


# --- DI-specific errors ---

class CircularDependencyError(RemiError):
    """Raised when a circular dependency is detected during resolution."""


class ResolutionError(RemiError):
    """Raised when a dependency cannot be resolved."""
