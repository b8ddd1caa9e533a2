class DatabaseError(Exception):
    """Base for all database errors."""


class NotFoundError(DatabaseError):
    """Player, session or course not found."""

    def __init__(self, entity: str, entity_id: str):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} {entity_id} not found")


class DuplicateError(DatabaseError):
    """A player listed twice in one session."""


class IntegrityError(DatabaseError):
    """Session references a player or course that does not exist."""
