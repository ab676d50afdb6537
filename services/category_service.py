import logging

from database.category_dao import CategoryDAO
from models.category import Category
from utils.errors import ResourceNotFound, ValidationError

logger = logging.getLogger(__name__)


class CategoryService:
    def __init__(self, category_dao: CategoryDAO):
        self._dao = category_dao

    def get_all(self) -> list[Category]:
        return self._dao.get_all()

    def get_by_id(self, category_id: int) -> Category:
        category = self._dao.get_by_id(category_id)
        if category is None:
            raise ResourceNotFound(f"Category not found with id: {category_id}")
        return category

    def create(self, name: str, description: str = "") -> Category:
        name = name.strip()
        if not name:
            raise ValidationError("Category name cannot be empty.")
        existing = [c.name.lower() for c in self._dao.get_all()]
        if name.lower() in existing:
            raise ValidationError(f"A category named '{name}' already exists.")
        category = self._dao.create(name, description.strip())
        logger.info("Category created with id: %s", category.id)
        return category

    def update(self, category_id: int, name: str, description: str = "") -> Category:
        category = self.get_by_id(category_id)
        if category.is_default:
            raise ValidationError("Default categories cannot be changed.")
        name = name.strip()
        if not name:
            raise ValidationError("Category name cannot be empty.")
        others = [c for c in self._dao.get_all() if c.id != category_id]
        if any(c.name.lower() == name.lower() for c in others):
            raise ValidationError(f"A category named '{name}' already exists.")
        logger.info("Updating category with id: %s", category_id)
        return self._dao.update(category_id, name, description.strip())

    def delete(self, category_id: int):
        category = self.get_by_id(category_id)
        if category.is_default:
            raise ValidationError("Default categories cannot be deleted.")
        if self._dao.is_in_use(category_id):
            raise ValidationError(f"Category '{category.name}' is still used by expenses.")
        self._dao.delete(category_id)
        logger.info("Deleted category with id: %s", category_id)
