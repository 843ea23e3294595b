from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from typing import List, Optional

from auth.service import require_admin
from database import get_db
from .models import Product, ProductCreate, ProductUpdate
from . import service

router = APIRouter(prefix='/products', tags=['products'])
admin_router = APIRouter(prefix='/admin/products', tags=['products'])


# ============================================================
# PUBLIC CATALOG
# ============================================================

@router.get('/', response_model=List[Product])
def get_products(category: Optional[str] = None, db: Session = Depends(get_db)):
    """Get all products, optionally filtered by category"""
    return service.get_all_products(db, category)


@router.get('/{product_id}', response_model=Product)
def get_product(product_id: str, db: Session = Depends(get_db)):
    """Get a single product"""
    product = service.get_product_by_id(db, product_id)
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    return product


# ============================================================
# ADMIN
# ============================================================

@admin_router.get('/', response_model=List[Product])
def admin_get_products(db: Session = Depends(get_db), current_user: dict = Depends(require_admin)):
    return service.get_all_products(db)


@admin_router.post('/', response_model=Product)
def create_product(
    product: ProductCreate,
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_admin)
):
    """Create a new product"""
    return service.create_product(db, product)


@admin_router.put('/{product_id}', response_model=Product)
def update_product(
    product_id: str,
    product: ProductUpdate,
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_admin)
):
    """Update an existing product"""
    updated = service.update_product(db, product_id, product)
    if not updated:
        raise HTTPException(status_code=404, detail="Product not found")
    return updated


@admin_router.delete('/{product_id}')
def delete_product(product_id: str, db: Session = Depends(get_db), current_user: dict = Depends(require_admin)):
    """Delete a product"""
    if not service.delete_product(db, product_id):
        raise HTTPException(status_code=404, detail="Product not found")
    return {"message": "Product deleted successfully"}
