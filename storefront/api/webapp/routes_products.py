from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query

from storefront.core.exceptions import ProductNotFoundException

from .common import CategoryResponse, ProductResponse, get_catalog

router = APIRouter()


@router.get("/products", response_model=list[ProductResponse])
async def list_products(
    category: str | None = Query(None, description="Category label"),
    featured: bool | None = Query(None),
    catalog=Depends(get_catalog),
):
    products = catalog.list_products(category=category, featured=featured)
    return [ProductResponse.from_entity(product) for product in products]


@router.get("/products/featured", response_model=ProductResponse)
async def get_featured_product(catalog=Depends(get_catalog)):
    """Product highlighted on the home page."""
    product = catalog.get_featured_product()
    if product is None:
        raise HTTPException(status_code=404, detail="No featured product")
    return ProductResponse.from_entity(product)


@router.get("/products/{product_id}", response_model=ProductResponse)
async def get_product(product_id: int, catalog=Depends(get_catalog)):
    try:
        product = catalog.get_product(product_id)
    except ProductNotFoundException as e:
        raise HTTPException(status_code=404, detail=e.message) from e
    return ProductResponse.from_entity(product)


@router.get("/categories", response_model=list[CategoryResponse])
async def list_categories(catalog=Depends(get_catalog)):
    return [CategoryResponse.from_entity(category) for category in catalog.list_categories()]
