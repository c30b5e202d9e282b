import logging

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import RedirectResponse
from pydantic import ValidationError
from sqlalchemy.orm import Session

from jobboard.core.flash import set_flash
from jobboard.core.security import issue_session_token, verify_password
from jobboard.database import get_db
from jobboard.dependencies import SESSION_TOKEN_KEY, get_current_user_optional, get_form_data
from jobboard.repos.user_repo import get_by_email, create as create_user
from jobboard.schemas.auth import UserLogin, UserRegister
from jobboard.views import FORM_ERROR_STATUS, render

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/auth", tags=["auth"])

INVALID_EMAIL_MESSAGE = "Please enter a valid email"


def _redirect(url: str) -> RedirectResponse:
    return RedirectResponse(url, status_code=status.HTTP_303_SEE_OTHER)


def _field_errors(exc: ValidationError, form_level_field: str) -> dict[str, str]:
    """Flatten pydantic errors into field -> first message."""
    errors: dict[str, str] = {}
    for err in exc.errors():
        field = str(err["loc"][0]) if err["loc"] else form_level_field
        if field in errors:
            continue
        if err["type"] == "missing":
            message = f"{field.replace('_', ' ').capitalize()} is required"
        elif field == "email":
            message = INVALID_EMAIL_MESSAGE
        else:
            message = err["msg"].removeprefix("Value error, ")
        errors[field] = message
    return errors


def _start_session(request: Request, user) -> None:
    request.session.clear()
    request.session[SESSION_TOKEN_KEY] = issue_session_token(user.id)


@router.get("/register")
def register_form(request: Request, user=Depends(get_current_user_optional)):
    if user is not None:
        return _redirect("/")
    return render(request, "auth/register.html", {"errors": {}, "user": {}})


@router.post("/register")
def register(
    request: Request,
    form: dict[str, str] = Depends(get_form_data),
    db: Session = Depends(get_db),
    current=Depends(get_current_user_optional),
):
    if current is not None:
        return _redirect("/")
    echoed = {k: form.get(k, "") for k in ("name", "email", "city", "state")}
    try:
        data = UserRegister.model_validate(form)
    except ValidationError as e:
        errors = _field_errors(e, form_level_field="password_confirmation")
        return render(
            request,
            "auth/register.html",
            {"errors": errors, "user": echoed},
            status_code=FORM_ERROR_STATUS,
        )

    if get_by_email(db, data.email):
        return render(
            request,
            "auth/register.html",
            {"errors": {"email": "That email already exists"}, "user": echoed},
            status_code=FORM_ERROR_STATUS,
        )

    user = create_user(db, data.name, data.email, data.password, city=data.city, state=data.state)
    logger.info("User registered: %s", user.email)
    _start_session(request, user)
    return _redirect("/")


@router.get("/login")
def login_form(request: Request, user=Depends(get_current_user_optional)):
    if user is not None:
        return _redirect("/")
    return render(request, "auth/login.html", {"errors": {}, "user": {}})


@router.post("/login")
def login(
    request: Request,
    form: dict[str, str] = Depends(get_form_data),
    db: Session = Depends(get_db),
    current=Depends(get_current_user_optional),
):
    if current is not None:
        return _redirect("/")
    echoed = {"email": form.get("email", "")}
    try:
        data = UserLogin.model_validate(form)
    except ValidationError as e:
        return render(
            request,
            "auth/login.html",
            {"errors": _field_errors(e, form_level_field="email"), "user": echoed},
            status_code=FORM_ERROR_STATUS,
        )

    user = get_by_email(db, data.email)
    if not user or not verify_password(data.password, user.password_hash):
        logger.info("Login failed for email=%s", data.email)
        return render(
            request,
            "auth/login.html",
            {"errors": {"email": "Incorrect credentials"}, "user": echoed},
            status_code=status.HTTP_401_UNAUTHORIZED,
        )

    logger.info("User logged in: %s", user.email)
    _start_session(request, user)
    return _redirect("/")


@router.post("/logout")
def logout(request: Request):
    request.session.clear()
    set_flash(request, "success", "You have been logged out")
    return _redirect("/")
