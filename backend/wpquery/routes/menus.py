from typing import List

from fastapi import APIRouter, Depends, HTTPException

from wpquery.database import get_query_service
from wpquery.errors import NotFoundError
from wpquery.models.derived import Menu, MenuItem
from wpquery.services.query_service import QueryService

router = APIRouter()


@router.get("/menus", response_model=List[Menu])
async def list_menus(service: QueryService = Depends(get_query_service)):
    return await service.get_menus()


@router.get("/menus/{name}", response_model=List[MenuItem])
async def get_menu(name: str, service: QueryService = Depends(get_query_service)):
    """
    Ordered menu tree by menu slug.

    Items serialise with camelCase keys (parentId, menuOrder) and nested
    ``children``.
    """
    try:
        return await service.get_menu(name)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
