"""
Catalog API router.

Translates HTTP requests into catalog service calls and maps domain
outcomes to status codes.
"""

from typing import List

import structlog
from fastapi import APIRouter, Depends, HTTPException, Path, Response, status

from ..dependencies import get_catalog_service
from ..domain.exceptions import CatalogItemNotFoundException, ValidationException
from ..schemas import MAX_ID, CatalogBrandView, CatalogItemInput, CatalogItemView, CatalogTypeView
from ..services.catalog_service import ICatalogService

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api/catalog", tags=["catalog"])


def _not_found(e: CatalogItemNotFoundException) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail={
            "success": False,
            "error": "not_found",
            "message": e.message,
            "details": e.details,
        },
    )


def _invalid(e: ValidationException) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail={
            "success": False,
            "error": "validation_error",
            "message": e.message,
            "details": e.details,
        },
    )


@router.get("", response_model=List[CatalogItemView], summary="List all catalog items")
async def list_items(service: ICatalogService = Depends(get_catalog_service)):
    return await service.list_items()


@router.get("/brands", response_model=List[CatalogBrandView], summary="List catalog brands")
async def list_brands(service: ICatalogService = Depends(get_catalog_service)):
    return await service.list_brands()


@router.get("/types", response_model=List[CatalogTypeView], summary="List catalog types")
async def list_types(service: ICatalogService = Depends(get_catalog_service)):
    return await service.list_types()


@router.get(
    "/brand/{brand_id}",
    response_model=List[CatalogItemView],
    summary="List catalog items of a brand",
)
async def list_items_by_brand(
    brand_id: int = Path(..., ge=1, le=MAX_ID),
    service: ICatalogService = Depends(get_catalog_service),
):
    return await service.list_items_by_brand(brand_id)


@router.get(
    "/type/{type_id}",
    response_model=List[CatalogItemView],
    summary="List catalog items of a type",
)
async def list_items_by_type(
    type_id: int = Path(..., ge=1, le=MAX_ID),
    service: ICatalogService = Depends(get_catalog_service),
):
    return await service.list_items_by_type(type_id)


@router.get(
    "/{item_id}",
    response_model=CatalogItemView,
    responses={404: {"description": "Catalog item not found"}},
    summary="Get a catalog item",
)
async def get_item(
    item_id: int = Path(..., ge=1, le=MAX_ID),
    service: ICatalogService = Depends(get_catalog_service),
):
    item = await service.get_item(item_id)
    if item is None:
        raise _not_found(CatalogItemNotFoundException(item_id))
    return item


@router.post(
    "",
    response_model=CatalogItemView,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"description": "Unknown brand or type"}},
    summary="Create a catalog item",
)
async def create_item(
    data: CatalogItemInput,
    response: Response,
    service: ICatalogService = Depends(get_catalog_service),
):
    try:
        item = await service.create_item(data)
    except ValidationException as e:
        raise _invalid(e)

    response.headers["Location"] = f"{router.prefix}/{item.id}"
    logger.info("Catalog item created", item_id=item.id)
    return item


@router.put(
    "/{item_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={400: {"description": "Unknown brand or type"}, 404: {"description": "Not found"}},
    summary="Replace a catalog item",
)
async def update_item(
    data: CatalogItemInput,
    item_id: int = Path(..., ge=1, le=MAX_ID),
    service: ICatalogService = Depends(get_catalog_service),
):
    try:
        await service.update_item(item_id, data)
    except CatalogItemNotFoundException as e:
        raise _not_found(e)
    except ValidationException as e:
        raise _invalid(e)

    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "/{item_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Delete a catalog item",
)
async def delete_item(
    item_id: int = Path(..., ge=1, le=MAX_ID),
    service: ICatalogService = Depends(get_catalog_service),
):
    await service.delete_item(item_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
