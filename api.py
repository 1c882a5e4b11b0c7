import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Depends, FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict

from config import settings
from library import BookNotFoundError, InvalidBookError, Library

logger = logging.getLogger(__name__)


# --- Models ---
class BookPayload(BaseModel):
    """Request body for create, replace and partial update; extra keys are kept."""
    model_config = ConfigDict(extra="allow")

    title: Optional[Any] = None
    author: Optional[Any] = None
    publicationYear: Optional[Any] = None


class BookModel(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: str
    title: Any
    author: Any
    publicationYear: Optional[Any] = None


class MessageModel(BaseModel):
    message: str


class HealthModel(BaseModel):
    status: str
    timestamp: str
    total_books: int


def _supplied_fields(payload: Optional[BookPayload]) -> Dict[str, Any]:
    """Return only the keys the client actually sent, extras included."""
    if payload is None:
        return {}
    declared = type(payload).model_fields
    data = {name: getattr(payload, name) for name in payload.model_fields_set if name in declared}
    data.update(payload.model_extra or {})
    return data


# --- Dependencies ---
def get_library(request: Request) -> Library:
    return request.app.state.library


# --- Routes ---
router = APIRouter()

NOT_FOUND = {404: {"model": MessageModel}}
BAD_REQUEST = {400: {"model": MessageModel}}


@router.get("", response_model=List[BookModel])
def list_books(library: Library = Depends(get_library)):
    """Return every book in insertion order."""
    return [book.to_dict() for book in library.list_books()]


@router.get("/{book_id}", response_model=BookModel, responses=NOT_FOUND)
def get_book(book_id: str, library: Library = Depends(get_library)):
    return library.get_book(book_id).to_dict()


@router.post("", response_model=BookModel, status_code=201, responses=BAD_REQUEST)
def create_book(payload: Optional[BookPayload] = Body(default=None), library: Library = Depends(get_library)):
    fields = _supplied_fields(payload)
    book = library.add_book(fields.get("title"), fields.get("author"), fields.get("publicationYear"))
    return book.to_dict()


@router.put("/{book_id}", response_model=BookModel, responses={**BAD_REQUEST, **NOT_FOUND})
def replace_book(book_id: str, payload: Optional[BookPayload] = Body(default=None),
                 library: Library = Depends(get_library)):
    """Full replacement: fields not sent are reset, extra fields are dropped."""
    fields = _supplied_fields(payload)
    book = library.replace_book(book_id, fields.get("title"), fields.get("author"), fields.get("publicationYear"))
    return book.to_dict()


@router.patch("/{book_id}", response_model=BookModel, responses=NOT_FOUND)
def update_book(book_id: str, payload: Optional[BookPayload] = Body(default=None),
                library: Library = Depends(get_library)):
    """Partial update: only the fields present in the body are changed."""
    return library.update_book(book_id, _supplied_fields(payload)).to_dict()


@router.delete("/{book_id}", status_code=204, response_class=Response, responses=NOT_FOUND)
def delete_book(book_id: str, library: Library = Depends(get_library)):
    library.remove_book(book_id)
    return Response(status_code=204)


# --- Error handlers ---
async def _invalid_book_handler(request: Request, exc: InvalidBookError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"message": str(exc)})


async def _not_found_handler(request: Request, exc: BookNotFoundError) -> JSONResponse:
    return JSONResponse(status_code=404, content={"message": str(exc)})


async def _bad_body_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.debug("Rejected request body on %s %s: %s", request.method, request.url.path, exc.errors())
    return JSONResponse(status_code=400, content={"message": "Request body must be a JSON object."})


# --- Application factory ---
def create_app(library: Optional[Library] = None) -> FastAPI:
    """Build the FastAPI application around ``library`` (a fresh seeded store by default)."""
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("%s ready with %d books", settings.app_name, len(app.state.library))
        yield

    app = FastAPI(title=settings.app_name, version=settings.app_version, debug=settings.debug, lifespan=lifespan)
    app.state.library = library if library is not None else Library(seed=settings.seed_books)

    app.add_exception_handler(InvalidBookError, _invalid_book_handler)
    app.add_exception_handler(BookNotFoundError, _not_found_handler)
    app.add_exception_handler(RequestValidationError, _bad_body_handler)

    app.include_router(router, prefix="/api/books", tags=["books"])

    @app.get("/health", response_model=HealthModel)
    def health():
        """Lightweight health check for container probes."""
        return {
            "status": "healthy",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "total_books": len(app.state.library),
        }

    return app


app = create_app()
