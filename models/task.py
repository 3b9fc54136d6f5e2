from dataclasses import dataclass
from typing import Optional


@dataclass
class Task:
    id: int
    title: str
    description: str
    category_id: int
    parent_id: Optional[int]  # None for top-level tasks
    order: int  # position within the (category_id, parent_id) sibling group
    completed: bool = False  # completed tasks are deleted, so always False when read

    def to_dict(self) -> dict:
        """Convert task to dictionary for API responses."""
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "category_id": self.category_id,
            "parent_id": self.parent_id,
            "order": self.order,
            "completed": self.completed,
        }


@dataclass
class TaskPosition:
    """One entry of a reorder request: a task and the parent it should sit under."""

    id: int
    parent_id: Optional[int] = None
