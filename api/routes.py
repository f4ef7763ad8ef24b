"""
Book endpoints, mounted under the configured API prefix.
"""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Depends, Request
from fastapi.responses import JSONResponse

from api.models import BookResponse, MessageResponse
from api.service import BookService, ServiceResponse

router = APIRouter(tags=["Books"])

ERROR_RESPONSES = {
    404: {"model": MessageResponse, "description": "Book not found"},
    500: {"model": MessageResponse, "description": "Database failure"},
}


def get_book_service(request: Request) -> BookService:
    """Book service created by the application lifespan."""
    return request.app.state.book_service


def to_response(result: ServiceResponse) -> JSONResponse:
    return JSONResponse(status_code=result.status_code, content=result.content)


@router.get(
    "",
    response_model=List[BookResponse],
    responses={500: ERROR_RESPONSES[500]},
)
@router.get("/", include_in_schema=False)
async def get_all_books(service: BookService = Depends(get_book_service)):
    """Get every book."""
    return to_response(await service.list_books())


@router.post(
    "/add",
    response_model=BookResponse,
    status_code=201,
    responses={500: ERROR_RESPONSES[500]},
)
async def create_book(
    payload: Optional[Dict[str, Any]] = Body(None),
    service: BookService = Depends(get_book_service)
):
    """
    Create a new book.

    - **title**, **author**, **publishedDate**, **genre**: all optional
    """
    return to_response(await service.create_book(payload))


@router.get("/{book_id}", response_model=BookResponse, responses=ERROR_RESPONSES)
async def get_book_by_id(
    book_id: str,
    service: BookService = Depends(get_book_service)
):
    """
    Get a single book by ID.

    - **book_id**: MongoDB ObjectId of the book
    """
    return to_response(await service.get_book_by_id(book_id))


@router.put(
    "/{book_id}",
    response_model=BookResponse,
    status_code=201,
    responses=ERROR_RESPONSES,
)
async def update_book_by_id(
    book_id: str,
    payload: Optional[Dict[str, Any]] = Body(None),
    service: BookService = Depends(get_book_service)
):
    """Replace the supplied fields of a book."""
    return to_response(await service.update_book_by_id(book_id, payload))


@router.delete("/{book_id}", response_model=MessageResponse, responses=ERROR_RESPONSES)
async def delete_book_by_id(
    book_id: str,
    service: BookService = Depends(get_book_service)
):
    """Permanently delete a book."""
    return to_response(await service.delete_book_by_id(book_id))
