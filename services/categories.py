"""Category service for database operations."""

from typing import List, Optional
from models.category import Category


class CategoryService:
    """Service for managing categories."""

    def __init__(self, db_manager):
        """Initialize the category service.

        Args:
            db_manager: Database manager instance for database operations.
        """
        self.db_manager = db_manager

    def find_all(self) -> List[Category]:
        """Get all categories from the database.

        Returns:
            List of Category objects, ordered by name.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute("SELECT id, name FROM categories ORDER BY name")
            rows = cursor.fetchall()

            return [Category(id=row[0], name=row[1]) for row in rows]

    def find(self, category_id: int) -> Optional[Category]:
        """Get a single category by ID.

        Args:
            category_id: The category ID to find.

        Returns:
            Category object if found, None otherwise.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                "SELECT id, name FROM categories WHERE id = ?", (category_id,)
            )
            row = cursor.fetchone()

            if row:
                return Category(id=row[0], name=row[1])
            return None

    def find_by_name(self, name: str) -> Optional[Category]:
        """Get a single category by name.

        Args:
            name: The category name to find.

        Returns:
            Category object if found, None otherwise.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                "SELECT id, name FROM categories WHERE name = ?", (name,)
            )
            row = cursor.fetchone()

            if row:
                return Category(id=row[0], name=row[1])
            return None

    def create(self, name: str) -> Category:
        """Create a new category.

        Args:
            name: Category name (must be unique).

        Returns:
            The created Category object with id populated.

        Raises:
            sqlite3.IntegrityError: If a category with this name already exists.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute("INSERT INTO categories (name) VALUES (?)", (name,))
            conn.commit()

            return Category(id=cursor.lastrowid, name=name)
