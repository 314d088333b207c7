from typing import Any, Dict, List

from portal import models
from portal.categories import schemas
from portal.storage import JsonStore


class CategoryNotFound(Exception):
    pass


class CategoryInUse(Exception):
    pass


def list_categories(store: JsonStore) -> List[Dict[str, Any]]:
    return store.read_categories()


def create_category(store: JsonStore, category: schemas.CategoryCreate) -> Dict[str, Any]:
    """
    Append a new category with a random id.
    """
    categories = store.read_categories()
    db_category = models.new_category(category.name, category.description)
    categories.append(db_category)
    store.write_categories(categories)
    return db_category


def update_category(store: JsonStore, category_id: str, category_update: schemas.CategoryUpdate) -> Dict[str, Any]:
    """
    Rename and/or redescribe a category. An empty name leaves the name alone;
    any provided description, including an empty one, replaces the old one.
    """
    categories = store.read_categories()
    idx = models.index_of(categories, 'id', category_id)
    if idx == -1:
        raise CategoryNotFound(category_id)

    if category_update.name:
        categories[idx]['name'] = category_update.name
    if category_update.description is not None:
        categories[idx]['description'] = category_update.description

    store.write_categories(categories)
    return categories[idx]


def delete_category(store: JsonStore, category_id: str) -> None:
    """
    Remove a category that no feedback refers to.
    """
    categories = store.read_categories()
    if models.find_by_id(categories, 'id', category_id) is None:
        raise CategoryNotFound(category_id)
    if models.category_in_use(store.read_feedback(), category_id):
        raise CategoryInUse(category_id)

    store.write_categories([c for c in categories if c.get('id') != category_id])
