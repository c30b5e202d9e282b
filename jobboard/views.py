"""Template rendering: shared context, filters and the error page."""
from pathlib import Path

from fastapi import Request, status
from fastapi.templating import Jinja2Templates

from jobboard.core.flash import pop_flash

TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"
# Forms re-rendered with validation errors
FORM_ERROR_STATUS = 422


def _page_context(request: Request) -> dict:
    # Flash messages are consumed by whichever page renders first
    return {
        "flash": pop_flash(request),
        "current_user": getattr(request.state, "user", None),
    }


def format_salary(value):
    """Format numeric salaries as dollars; anything else passes through untouched."""
    try:
        return f"${float(value):,.0f}"
    except (TypeError, ValueError):
        # Keep Markup from |safe so escaped text isn't escaped again
        return value or ""


templates = Jinja2Templates(directory=str(TEMPLATES_DIR), context_processors=[_page_context])
templates.env.filters["salary"] = format_salary


def render(request: Request, name: str, context: dict | None = None, status_code: int = status.HTTP_200_OK):
    return templates.TemplateResponse(request, name, context or {}, status_code=status_code)


def render_error(request: Request, status_code: int, message: str, headers: dict | None = None):
    response = render(
        request,
        "errors/error.html",
        {"status_code": status_code, "message": message},
        status_code=status_code,
    )
    if headers:
        response.headers.update(headers)
    return response


def render_not_found(request: Request, message: str = "Resource not found"):
    return render_error(request, status.HTTP_404_NOT_FOUND, message)
