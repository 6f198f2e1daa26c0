"""Domain exceptions for HabitPro."""


class HabitProError(Exception):
    """Base exception for HabitPro domain errors."""


class NotFoundError(HabitProError):
    """Raised when a task, completion or achievement does not exist."""

    def __init__(self, resource: str, identifier: str):
        super().__init__(f"{resource.capitalize()} not found: {identifier}")
        self.resource = resource
        self.identifier = identifier


class AmbiguousIdError(HabitProError):
    """Raised when an ID suffix matches more than one record."""
