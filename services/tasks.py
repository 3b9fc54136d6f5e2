"""Task service for database operations.

Tasks are ordered within their sibling group, the set of tasks sharing a
(category_id, parent_id) pair. Top-level tasks (parent_id NULL) form their
own group per category.

Completing a task deletes it. Subtasks go with it through the
ON DELETE CASCADE on tasks.parent_id, so every connection must have
foreign keys enabled.
"""

from typing import List, Optional, Sequence

from models.task import Task, TaskPosition

TASK_COLUMNS = "id, title, description, category_id, parent_id, task_order, completed"


def _row_to_task(row) -> Task:
    return Task(
        id=row[0],
        title=row[1],
        description=row[2] or "",
        category_id=row[3],
        parent_id=row[4],
        order=row[5],
        completed=bool(row[6]),
    )


class TaskService:
    """Service for managing tasks."""

    def __init__(self, db_manager):
        """Initialize the task service.

        Args:
            db_manager: Database manager instance for database operations.
        """
        self.db_manager = db_manager

    def find_all(self, category_id: Optional[int] = None) -> List[Task]:
        """Get all open tasks, optionally limited to one category.

        Args:
            category_id: Only return tasks in this category if given.

        Returns:
            List of Task objects ordered by (category_id, order), or by
            order alone when filtered to a category.
        """
        with self.db_manager.connect() as conn:
            if category_id is not None:
                cursor = conn.execute(
                    f"""
                    SELECT {TASK_COLUMNS} FROM tasks
                    WHERE category_id = ? AND completed = 0
                    ORDER BY task_order, id
                    """,
                    (category_id,),
                )
            else:
                cursor = conn.execute(
                    f"""
                    SELECT {TASK_COLUMNS} FROM tasks
                    WHERE completed = 0
                    ORDER BY category_id, task_order, id
                    """
                )

            return [_row_to_task(row) for row in cursor.fetchall()]

    def find(self, task_id: int) -> Optional[Task]:
        """Get a single task by ID.

        Args:
            task_id: The task ID to find.

        Returns:
            Task object if found, None otherwise.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                f"SELECT {TASK_COLUMNS} FROM tasks WHERE id = ?", (task_id,)
            )
            row = cursor.fetchone()

            if row:
                return _row_to_task(row)
            return None

    def create(
        self,
        title: str,
        description: str,
        category_id: int,
        parent_id: Optional[int] = None,
    ) -> Task:
        """Create a task at the end of its sibling group.

        The order is read before the insert without a lock, so two concurrent
        creates in one group can get the same order. A later reorder
        makes the group dense again.

        Args:
            title: Task title.
            description: Free-form description.
            category_id: Category the task belongs to.
            parent_id: Parent task ID for a subtask, None for a top-level task.

        Returns:
            The created Task with id and order populated.

        Raises:
            sqlite3.IntegrityError: If the category or parent doesn't exist.
        """
        with self.db_manager.connect() as conn:
            # "parent_id IS ?" matches NULL against NULL, so top-level
            # tasks share one group
            cursor = conn.execute(
                """
                SELECT COALESCE(MAX(task_order), -1) FROM tasks
                WHERE category_id = ? AND parent_id IS ? AND completed = 0
                """,
                (category_id, parent_id),
            )
            order = cursor.fetchone()[0] + 1

            with conn:
                cursor = conn.execute(
                    """
                    INSERT INTO tasks (title, description, category_id, parent_id, task_order)
                    VALUES (?, ?, ?, ?, ?)
                    """,
                    (title, description, category_id, parent_id, order),
                )

            return Task(
                id=cursor.lastrowid,
                title=title,
                description=description,
                category_id=category_id,
                parent_id=parent_id,
                order=order,
                completed=False,
            )

    def update(
        self,
        task_id: int,
        title: str,
        description: str,
        category_id: int,
        parent_id: Optional[int] = None,
    ) -> bool:
        """Overwrite a task's fields and move its direct children to its category.

        Only direct children follow the category change; grandchildren keep
        their category. Both writes happen in one transaction.

        Args:
            task_id: The task ID to update.
            title: New title.
            description: New description.
            category_id: New category ID.
            parent_id: New parent task ID (None for top-level).

        Returns:
            True if the task existed, False otherwise. A missing task is not an error.
        """
        with self.db_manager.connect() as conn:
            with conn:
                cursor = conn.execute(
                    """
                    UPDATE tasks
                    SET title = ?, description = ?, category_id = ?, parent_id = ?
                    WHERE id = ?
                    """,
                    (title, description, category_id, parent_id, task_id),
                )
                conn.execute(
                    "UPDATE tasks SET category_id = ? WHERE parent_id = ?",
                    (category_id, task_id),
                )

            return cursor.rowcount > 0

    def complete(self, task_id: int) -> bool:
        """Complete a task by deleting it along with all of its subtasks.

        Args:
            task_id: The task ID to complete.

        Returns:
            True if the task was deleted, False if not found.
        """
        with self.db_manager.connect() as conn:
            with conn:
                cursor = conn.execute("DELETE FROM tasks WHERE id = ?", (task_id,))

            return cursor.rowcount > 0

    def reorder(self, positions: Sequence[TaskPosition]) -> None:
        """Rewrite order and parent for a batch of tasks.

        Each task gets its index in ``positions`` as its order and the given
        parent. The whole batch commits or none of it does. The caller is
        responsible for submitting a consistent ordering; gaps and parent
        cycles are not checked.

        Args:
            positions: Tasks in their desired order.
        """
        with self.db_manager.connect() as conn:
            with conn:
                conn.executemany(
                    "UPDATE tasks SET task_order = ?, parent_id = ? WHERE id = ?",
                    [
                        (index, position.parent_id, position.id)
                        for index, position in enumerate(positions)
                    ],
                )
