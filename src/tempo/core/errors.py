"""Error types raised by Tempo."""


class TempoError(Exception):
    """Base class for all errors reported to the user."""

    category = "error"


class DuplicateIdError(TempoError, ValueError):
    """An explicit id is already registered for the entity type."""

    def __init__(self, kind: str, entity_id: int):
        super().__init__(f"{kind} id {entity_id} already exists")
        self.kind = kind
        self.entity_id = entity_id


class InvalidArgumentError(TempoError, TypeError):
    """A value of the wrong type or range was supplied."""


class PreconditionError(TempoError, ValueError):
    """An operation was requested in a state that does not allow it."""


class DuplicateProjectError(PreconditionError):
    """A project with the same title already exists."""

    def __init__(self, title: str):
        super().__init__(f"project '{title}' already exists")
        self.title = title
