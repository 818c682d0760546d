import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import APIRouter, Depends, FastAPI, Form, HTTPException, Request
from fastapi.responses import PlainTextResponse, RedirectResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from book import InvalidBookId, InvalidCost, parse_book_id, parse_cost
from config import settings
from database import Store, connect_store
from library import Library, StoreError
from views import BookListView, LoginView, SignupView, TemplateRenderer

logger = logging.getLogger(__name__)

router = APIRouter()
renderer = TemplateRenderer()


# --- Dependencies ---
def get_library(request: Request) -> Library:
    """Library bound to the store opened at startup."""
    return Library(request.app.state.store)


def see_other(url: str) -> RedirectResponse:
    return RedirectResponse(url=url, status_code=303)


# --- Views ---
@router.get("/")
@router.get("/login")
def login_page(request: Request):
    return renderer.render(request, LoginView())


@router.get("/signup")
def signup_page(request: Request):
    return renderer.render(request, SignupView())


# --- Users ---
@router.post("/signup")
def signup(
    name: str = Form(""),
    email: str = Form(""),
    password: str = Form(""),
    library: Library = Depends(get_library),
):
    try:
        library.signup(name, email, password)
    except StoreError as e:
        raise HTTPException(status_code=500, detail=str(e))
    return see_other("/login")


@router.post("/login")
def login(
    email: str = Form(""),
    password: str = Form(""),
    library: Library = Depends(get_library),
):
    try:
        user = library.authenticate(email, password)
    except StoreError as e:
        raise HTTPException(status_code=500, detail=str(e))
    if user is None:
        logger.warning(f"Failed login for {email!r}")
        raise HTTPException(status_code=401, detail="Invalid email or password")
    return see_other("/book")


# --- Books ---
@router.get("/book")
def list_books(request: Request, library: Library = Depends(get_library)):
    try:
        books = library.list_books()
    except StoreError as e:
        raise HTTPException(status_code=500, detail=str(e))
    return renderer.render(request, BookListView(books=books))


@router.post("/submit")
def submit_book(
    name: str = Form(""),
    author: str = Form(""),
    cost: str = Form(""),
    library: Library = Depends(get_library),
):
    try:
        book_cost = parse_cost(cost)
    except InvalidCost:
        raise HTTPException(status_code=400, detail="Invalid cost")
    try:
        library.add_book(name, author, book_cost)
    except StoreError as e:
        raise HTTPException(status_code=500, detail=str(e))
    return see_other("/book")


@router.post("/modify")
def modify_book(
    id: str = Form(""),
    name: str = Form(""),
    author: str = Form(""),
    cost: str = Form(""),
    library: Library = Depends(get_library),
):
    try:
        book_id = parse_book_id(id)
    except InvalidBookId:
        raise HTTPException(status_code=400, detail="Invalid book ID")
    try:
        book_cost = parse_cost(cost)
    except InvalidCost:
        raise HTTPException(status_code=400, detail="Invalid cost")
    try:
        library.update_book(book_id, name, author, book_cost)
    except StoreError as e:
        raise HTTPException(status_code=500, detail=str(e))
    return see_other("/book")


@router.post("/delete")
def delete_book(id: str = Form(""), library: Library = Depends(get_library)):
    try:
        book_id = parse_book_id(id)
    except InvalidBookId:
        raise HTTPException(status_code=400, detail="Invalid book ID")
    try:
        library.remove_book(book_id)
    except StoreError as e:
        raise HTTPException(status_code=500, detail=str(e))
    return see_other("/book")


# --- Application ---
async def plain_text_error(request: Request, exc: StarletteHTTPException):
    """Errors go back as a status code and a short line of text."""
    return PlainTextResponse(str(exc.detail), status_code=exc.status_code, headers=getattr(exc, "headers", None))


def create_app(store: Optional[Store] = None) -> FastAPI:
    """Build the application.

    Without ``store`` the lifespan connects to MongoDB and aborts startup if the
    server cannot be reached. A given store is used as-is and left open.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        app.state.store = store if store is not None else connect_store(settings)
        try:
            yield
        finally:
            if store is None:
                app.state.store.close()

    app = FastAPI(title=settings.app_name, debug=settings.debug, lifespan=lifespan)
    app.add_exception_handler(StarletteHTTPException, plain_text_error)

    @app.middleware("http")
    async def add_security_headers(request: Request, call_next):
        response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        return response

    app.include_router(router)
    return app


app = create_app()
