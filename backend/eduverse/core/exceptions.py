"""
Errors signaled by the EduVerse domain layer.

Most actions treat unmet preconditions as silent no-ops. Only actions whose
return value the caller depends on raise one of these.
"""


class EduverseError(Exception):
    """Base class for signaled domain failures."""

    def __init__(self, message: str = "") -> None:
        super().__init__(message)
        self.message = message


class NotAuthenticated(EduverseError):
    """Raised when an action needs a session and none is active."""

    def __init__(self, message: str = "User not logged in") -> None:
        super().__init__(message)


class NotFound(EduverseError):
    """Raised when an identifier does not resolve to an entity."""

    def __init__(self, entity: str, entity_id: str) -> None:
        super().__init__(f"{entity} not found: {entity_id}")
        self.entity = entity
        self.entity_id = entity_id
