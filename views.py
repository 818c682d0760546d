"""Page views and their templates.

Each view is a small dataclass naming the template it renders and carrying
exactly the data that template reads.
"""
import logging
from dataclasses import dataclass, field
from typing import ClassVar, List, Union

from fastapi import HTTPException, Request
from fastapi.templating import Jinja2Templates
from jinja2 import TemplateError

from book import Book
from config import settings

logger = logging.getLogger(__name__)


@dataclass
class LoginView:
    template: ClassVar[str] = "login.html"
    title: str = "Log in"


@dataclass
class SignupView:
    template: ClassVar[str] = "signup.html"
    title: str = "Sign up"


@dataclass
class BookListView:
    template: ClassVar[str] = "book.html"
    books: List[Book] = field(default_factory=list)
    title: str = "Books"


View = Union[LoginView, SignupView, BookListView]


class TemplateRenderer:
    """Renders a view through Jinja2, loading the template by name per request."""

    def __init__(self, directory: str = settings.templates_dir) -> None:
        self.templates = Jinja2Templates(directory=directory)
        # Pick up template edits without a restart
        self.templates.env.auto_reload = True

    def render(self, request: Request, view: View):
        context = {"view": view, "app_name": settings.app_name}
        try:
            return self.templates.TemplateResponse(request, view.template, context)
        except TemplateError as e:
            logger.error(f"Failed to render {view.template}: {e}")
            raise HTTPException(status_code=500, detail="Internal Server Error") from e
