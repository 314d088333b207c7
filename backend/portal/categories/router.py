import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from portal.auth.dependencies import require_admin
from portal.categories import crud, schemas
from portal.errors import INTERNAL_ERROR
from portal.storage import JsonStore, get_store

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api",
    tags=["categories"],
    responses={404: {"description": "Not found"}},
)

@router.get("/categories", response_model=List[schemas.Category])
def list_public_categories(store: JsonStore = Depends(get_store)):
    """
    List every category. Used to populate the submission form.
    """
    try:
        return crud.list_categories(store)
    except Exception as e:
        logger.error(f"Error fetching categories: {e}")
        raise HTTPException(status_code=500, detail=INTERNAL_ERROR)

@router.get("/admin/categories", response_model=List[schemas.Category], dependencies=[Depends(require_admin)])
def list_admin_categories(store: JsonStore = Depends(get_store)):
    return crud.list_categories(store)

@router.post(
    "/admin/categories",
    response_model=schemas.Category,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
def create_category_endpoint(
    category: schemas.CategoryCreate,
    store: JsonStore = Depends(get_store),
):
    if not category.name or not category.name.strip():
        raise HTTPException(status_code=400, detail="Name is required")
    try:
        db_category = crud.create_category(store, category)
    except Exception as e:
        logger.error(f"Error creating category: {e}")
        raise HTTPException(status_code=500, detail=INTERNAL_ERROR)
    logger.info(f"Created category {db_category['id']} ({db_category['name']})")
    return db_category

@router.put("/admin/categories/{category_id}", response_model=schemas.Category, dependencies=[Depends(require_admin)])
def update_category_endpoint(
    category_id: str,
    category_update: schemas.CategoryUpdate,
    store: JsonStore = Depends(get_store),
):
    try:
        return crud.update_category(store, category_id, category_update)
    except crud.CategoryNotFound:
        raise HTTPException(status_code=404, detail="Category not found")
    except Exception as e:
        logger.error(f"Error updating category: {e}")
        raise HTTPException(status_code=500, detail=INTERNAL_ERROR)

@router.delete(
    "/admin/categories/{category_id}",
    response_model=schemas.CategoryDeleteResponse,
    dependencies=[Depends(require_admin)],
)
def delete_category_endpoint(category_id: str, store: JsonStore = Depends(get_store)):
    """
    Delete a category. Categories still referenced by feedback are kept.
    """
    try:
        crud.delete_category(store, category_id)
    except crud.CategoryNotFound:
        raise HTTPException(status_code=404, detail="Category not found")
    except crud.CategoryInUse:
        raise HTTPException(status_code=400, detail="Cannot delete category in use by feedback")
    except Exception as e:
        logger.error(f"Error deleting category: {e}")
        raise HTTPException(status_code=500, detail=INTERNAL_ERROR)
    logger.info(f"Deleted category {category_id}")
    return {'success': True}
