"""Category model for grouping tasks."""

from dataclasses import dataclass


@dataclass
class Category:
    """Represents a named group of tasks.

    Attributes:
        id: Unique identifier (auto-generated).
        name: Category name (unique).
    """

    id: int
    name: str

    def to_dict(self) -> dict:
        """Convert category to dictionary for API responses."""
        return {"id": self.id, "name": self.name}
