"""Category domain service."""

from typing import Optional

from ledgerkeep.database.base import Database
from ledgerkeep.domain.entities import Category as CategoryEntity
from ledgerkeep.domain.errors import (
    ConflictError,
    DependencyError,
    NotFoundError,
    category_delete_blocked,
    category_name_not_found,
    category_not_found,
    duplicate_category_name,
)
from ledgerkeep.domain.validation import require_name, validate_color

# Categories seeded for a new owner: (name, color)
DEFAULT_CATEGORIES = [
    ("Dining", "#EF4444"),
    ("Entertainment", "#8B5CF6"),
    ("Groceries", "#10B981"),
    ("Healthcare", "#06B6D4"),
    ("Income", "#84CC16"),
    ("Other", "#6B7280"),
    ("Shopping", "#F59E0B"),
    ("Transfer", "#6366F1"),
    ("Transportation", "#F97316"),
    ("Utilities", "#EC4899"),
]


class CategoryService:
    """Service for managing categories."""

    def __init__(self, db: Database):
        """Initialize category service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_category(
        self,
        owner_id: int,
        name: str,
        color: str,
        icon: Optional[str] = None,
        is_default: bool = False,
    ) -> int:
        """Create a category.

        Args:
            owner_id: Owning user ID
            name: Category name
            color: Display color as #RRGGBB
            icon: Optional icon name
            is_default: Whether this is one of the seeded categories

        Returns:
            Category ID

        Raises:
            ValidationError: If name or color is invalid
            ConflictError: If the owner already has a category with this name
        """
        name = require_name(name)
        color = validate_color(color)
        if self.db.get_category_by_name(owner_id, name) is not None:
            raise ConflictError(duplicate_category_name(name))

        return self.db.create_category(
            owner_id=owner_id, name=name, color=color, icon=icon, is_default=is_default
        )

    def create_default_categories(self, owner_id: int) -> list[int]:
        """Create the default categories the owner does not have yet.

        Returns:
            IDs of the categories created
        """
        created = []
        for name, color in DEFAULT_CATEGORIES:
            if self.db.get_category_by_name(owner_id, name) is None:
                created.append(
                    self.db.create_category(
                        owner_id=owner_id, name=name, color=color, is_default=True
                    )
                )
        return created

    def get_category(self, category_id: int, owner_id: Optional[int] = None) -> Optional[CategoryEntity]:
        """Get category by ID.

        Args:
            category_id: Category ID
            owner_id: If given, categories of other owners are treated as missing

        Returns:
            Category entity or None if not found
        """
        category = self.db.get_category(category_id)
        if category is None:
            return None
        if owner_id is not None and category.owner_id != owner_id:
            return None
        return category

    def require_category(self, category_id: int, owner_id: Optional[int] = None) -> CategoryEntity:
        category = self.get_category(category_id, owner_id=owner_id)
        if category is None:
            raise NotFoundError(category_not_found(category_id))
        return category

    def require_category_by_name(self, owner_id: int, name: str) -> CategoryEntity:
        """Get category by name or raise NotFoundError."""
        category = self.db.get_category_by_name(owner_id, name)
        if category is None:
            raise NotFoundError(category_name_not_found(name))
        return category

    def list_categories(self, owner_id: int) -> list[CategoryEntity]:
        """List an owner's categories ordered by name."""
        return self.db.list_categories(owner_id)

    def update_category(
        self,
        owner_id: int,
        category_id: int,
        name: Optional[str] = None,
        color: Optional[str] = None,
        icon: Optional[str] = None,
        is_default: Optional[bool] = None,
    ) -> None:
        """Update category fields.

        Raises:
            NotFoundError: If category not found
            ConflictError: If the new name is already used by another category
        """
        self.require_category(category_id, owner_id=owner_id)

        if name is not None:
            name = require_name(name)
            existing = self.db.get_category_by_name(owner_id, name)
            if existing is not None and existing.id != category_id:
                raise ConflictError(duplicate_category_name(name))
        if color is not None:
            color = validate_color(color)

        self.db.update_category(
            category_id, name=name, color=color, icon=icon, is_default=is_default
        )

    def delete_category(self, owner_id: int, category_id: int) -> None:
        """Delete a category.

        Raises:
            NotFoundError: If category not found
            DependencyError: If transactions are still filed under it
        """
        self.require_category(category_id, owner_id=owner_id)

        transaction_count = self.db.get_category_transaction_count(category_id)
        if transaction_count > 0:
            raise DependencyError(category_delete_blocked(category_id, transaction_count))

        self.db.delete_category(category_id)
