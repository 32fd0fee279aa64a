from typing import List

from fastapi import APIRouter, Depends, status
from tinylink_app.schemas.link import ErrorResponse, LinkCreate, LinkResponse, OkResponse
from tinylink_app.services.link_service import LinkService
from tinylink_app.dependencies import get_link_service

router = APIRouter(prefix="/api/links", tags=["links"])


@router.post(
    "",
    response_model=LinkResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
def create_link(
    payload: LinkCreate,
    link_service: LinkService = Depends(get_link_service)
):
    """Create a short link, with a generated code unless one is given"""
    return link_service.create_link(payload.url, payload.code)


@router.get("", response_model=List[LinkResponse])
def list_links(link_service: LinkService = Depends(get_link_service)):
    """All links, newest first"""
    return link_service.list_links()


@router.get("/{code}", response_model=LinkResponse, responses={404: {"model": ErrorResponse}})
def get_link(code: str, link_service: LinkService = Depends(get_link_service)):
    return link_service.get_link(code)


@router.delete("/{code}", response_model=OkResponse, responses={404: {"model": ErrorResponse}})
def delete_link(code: str, link_service: LinkService = Depends(get_link_service)):
    link_service.delete_link(code)
    return OkResponse()
