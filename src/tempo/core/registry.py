"""Per-entity-type integer id bookkeeping."""

from typing import Optional

from tempo.core.errors import DuplicateIdError, InvalidArgumentError


class IdRegistry:
    """Assign and track unique non-negative integer ids for one entity type.

    Ids handed out by :meth:`next_id` are the smallest unused integer at or
    above an internal counter. The counter only moves forward, so ids are
    never reclaimed within a process run.
    """

    def __init__(self, kind: str = "entity"):
        """Initialize an empty registry.

        Args:
            kind: Entity type label used in error messages
        """
        self.kind = kind
        self._counter = 0
        self._ids: set[int] = set()

    def __contains__(self, entity_id: object) -> bool:
        return entity_id in self._ids

    def __len__(self) -> int:
        return len(self._ids)

    @property
    def ids(self) -> tuple[int, ...]:
        """Registered ids in ascending order."""
        return tuple(sorted(self._ids))

    def next_id(self) -> int:
        """Register and return the smallest unused id at or above the counter."""
        while self._counter in self._ids:
            self._counter += 1
        self._ids.add(self._counter)
        return self._counter

    def register(self, entity_id: int) -> int:
        """Register a caller-supplied id.

        Args:
            entity_id: Id to register, e.g. one read back from storage

        Returns:
            The registered id

        Raises:
            InvalidArgumentError: If the id is not a non-negative integer
            DuplicateIdError: If the id is already registered
        """
        if isinstance(entity_id, bool) or not isinstance(entity_id, int) or entity_id < 0:
            raise InvalidArgumentError(f"invalid {self.kind} id: {entity_id!r}")
        if entity_id in self._ids:
            raise DuplicateIdError(self.kind, entity_id)
        self._ids.add(entity_id)
        return entity_id

    def claim(self, entity_id: Optional[int] = None) -> int:
        """Register ``entity_id`` if given, otherwise hand out the next free id."""
        if entity_id is None:
            return self.next_id()
        return self.register(entity_id)
