"""
Read-only post endpoints.

Thin wrappers over QueryService; NotFoundError maps to 404 and
QueryValidationError to 422.
"""
from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel

from wpquery.database import get_query_service
from wpquery.errors import NotFoundError, QueryValidationError
from wpquery.models.derived import PostTerm
from wpquery.models.post import Post
from wpquery.models.postmeta import PostMeta
from wpquery.services.query_service import DEFAULT_POST_TYPE, QueryService

router = APIRouter()


class ThumbnailResponse(BaseModel):
    post_id: int
    url: Optional[str] = None


@router.get("/posts", response_model=List[Post])
async def list_posts(
    post_type: str = Query(default=DEFAULT_POST_TYPE),
    service: QueryService = Depends(get_query_service),
):
    """Published posts of one type, ascending id."""
    return await service.get_posts({"post_type": post_type})


@router.get("/posts/by-name/{name}", response_model=Post)
async def get_post_by_name(name: str, service: QueryService = Depends(get_query_service)):
    try:
        return await service.get_post_by_name(name)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("/posts/{post_id}", response_model=Post)
async def get_post(post_id: int, service: QueryService = Depends(get_query_service)):
    """Post by id in any status (drafts included)."""
    try:
        return await service.get_post_by_id(post_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("/posts/{post_id}/thumbnail", response_model=ThumbnailResponse)
async def get_post_thumbnail(post_id: int, service: QueryService = Depends(get_query_service)):
    return ThumbnailResponse(post_id=post_id, url=await service.get_post_thumbnail(post_id))


@router.get("/posts/{post_id}/meta", response_model=Dict[str, Optional[str]])
async def get_post_meta(
    post_id: int,
    key: Optional[List[str]] = Query(default=None),
    service: QueryService = Depends(get_query_service),
):
    """All meta for a post, or only the repeated ``key`` params."""
    try:
        return await service.get_postmeta(post_id, key)
    except QueryValidationError as e:
        raise HTTPException(status_code=422, detail=str(e))


@router.get("/posts/{post_id}/terms", response_model=List[PostTerm])
async def get_post_terms(
    post_id: int,
    taxonomy: Optional[str] = Query(default=None),
    service: QueryService = Depends(get_query_service),
):
    return await service.get_post_terms(post_id, taxonomy)


@router.get("/postmeta/{meta_id}", response_model=PostMeta)
async def get_post_meta_row(meta_id: int, service: QueryService = Depends(get_query_service)):
    try:
        return await service.get_post_meta_by_id(meta_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
