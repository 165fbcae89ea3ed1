from fastapi import APIRouter, Depends, HTTPException

from wpquery.database import get_query_service
from wpquery.errors import NotFoundError
from wpquery.models.derived import Viewer
from wpquery.models.term import Term
from wpquery.services.query_service import QueryService

router = APIRouter()


@router.get("/viewer", response_model=Viewer)
async def get_viewer(service: QueryService = Depends(get_query_service)):
    return await service.get_viewer()


@router.get("/terms/{term_id}", response_model=Term)
async def get_term(term_id: int, service: QueryService = Depends(get_query_service)):
    try:
        return await service.get_term_by_id(term_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
