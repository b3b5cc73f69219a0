"""HTTP interface for the expense store.

The app is built by :func:`create_app` around an existing repository; the
repository is shared by every request for the life of the process. Routes
are plain functions, so FastAPI runs them in its threadpool.
"""

import logging
import sqlite3
from collections.abc import Sequence
from typing import Any

from fastapi import APIRouter, Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from monthlies.dates import parse_month
from monthlies.domain.expenses import AMOUNT_ERROR, DEFAULT_CAPITAL_RATIO, DEFAULT_CATEGORIES, capital_needed
from monthlies.domain.models import ExpenseId, Month
from monthlies.errors import ExpenseConsistencyError, ExpenseNotFoundError, ExpenseValidationError
from monthlies.schemas import ExpenseCreateBody, ExpensePatchBody
from monthlies.store.repository import ExpenseRepository

logger = logging.getLogger(__name__)

router = APIRouter()


def get_repository(request: Request) -> ExpenseRepository:
    return request.app.state.repository


def parse_expense_id(raw: str) -> ExpenseId:
    try:
        return ExpenseId(int(raw))
    except ValueError:
        raise ExpenseValidationError("Invalid expense ID") from None


@router.get("/")
def health() -> dict[str, str]:
    return {"status": "ok", "message": "Expense Tracker API"}


@router.get("/api/categories")
def list_categories() -> dict[str, list[str]]:
    return {"categories": list(DEFAULT_CATEGORIES)}


@router.get("/api/expenses")
def list_expenses(
    request: Request,
    month: str | None = None,
    repository: ExpenseRepository = Depends(get_repository),
) -> dict[str, Any]:
    """All expenses plus their total. Without ?month= nothing is filtered.

    ``total`` and ``capital_needed`` are rounded to cents for display only;
    the repository total is the unrounded float sum.
    """
    selected: Month | None = None
    if month:
        try:
            selected = parse_month(month)
        except ValueError:
            raise ExpenseValidationError("Month must be in YYYY-MM format") from None

    expenses = repository.list_all(selected)
    total = repository.sum_amounts(selected)
    capital = capital_needed(total, request.app.state.capital_ratio)
    return {
        "expenses": [expense.to_dict() for expense in expenses],
        "total": round(total, 2),
        "capital_needed": round(capital, 2),
    }


@router.get("/api/expenses/{expense_id}")
def get_expense(expense_id: str, repository: ExpenseRepository = Depends(get_repository)) -> dict[str, Any]:
    parsed_id = parse_expense_id(expense_id)
    expense = repository.get_by_id(parsed_id)
    if expense is None:
        raise ExpenseNotFoundError(parsed_id)
    return expense.to_dict()


@router.post("/api/expenses", status_code=201)
def create_expense(body: ExpenseCreateBody, repository: ExpenseRepository = Depends(get_repository)) -> dict[str, Any]:
    return repository.create(body.to_input()).to_dict()


@router.put("/api/expenses/{expense_id}")
def update_expense(
    expense_id: str,
    body: ExpensePatchBody,
    repository: ExpenseRepository = Depends(get_repository),
) -> dict[str, Any]:
    return repository.update(parse_expense_id(expense_id), body.to_patch()).to_dict()


@router.delete("/api/expenses/{expense_id}")
def delete_expense(expense_id: str, repository: ExpenseRepository = Depends(get_repository)) -> dict[str, bool]:
    parsed_id = parse_expense_id(expense_id)
    if not repository.delete(parsed_id):
        raise ExpenseNotFoundError(parsed_id)
    return {"success": True}


def describe_request_error(errors: Sequence[Any]) -> str:
    """Reduce pydantic errors to the single message the client sees."""
    if any(error.get("type") == "missing" for error in errors):
        return "Missing required fields"

    first = errors[0] if errors else {}
    if first.get("type") == "json_invalid":
        return "Request body must be valid JSON"

    loc = first.get("loc", ())
    field = loc[1] if len(loc) > 1 and loc[0] == "body" else None
    if field == "amount":
        return AMOUNT_ERROR
    if field in ("description", "category"):
        return f"{field.capitalize()} must be a non-empty string"
    if loc[:1] == ("body",):
        return "Request body must be a JSON object"
    return str(first.get("msg", "Invalid request"))


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"error": describe_request_error(exc.errors())})


async def validation_error_handler(request: Request, exc: Exception) -> JSONResponse:
    return JSONResponse(status_code=400, content={"error": str(exc)})


async def not_found_handler(request: Request, exc: Exception) -> JSONResponse:
    return JSONResponse(status_code=404, content={"error": str(exc)})


async def storage_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("%s %s failed", request.method, request.url.path, exc_info=exc)
    return JSONResponse(status_code=500, content={"error": "Internal Server Error"})


def create_app(
    repository: ExpenseRepository,
    cors_origins: Sequence[str] = ("*",),
    capital_ratio: float = DEFAULT_CAPITAL_RATIO,
) -> FastAPI:
    """Build the HTTP app around a repository.

    Args:
        repository: Store shared by all requests.
        cors_origins: Origins allowed by the CORS middleware.
        capital_ratio: Multiplier for the capital needed figure.

    Returns:
        Configured FastAPI application.
    """
    app = FastAPI(title="monthlies", summary="Recurring monthly expense tracker")
    app.state.repository = repository
    app.state.capital_ratio = capital_ratio

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(cors_origins),
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(ExpenseValidationError, validation_error_handler)
    app.add_exception_handler(ExpenseNotFoundError, not_found_handler)
    app.add_exception_handler(ExpenseConsistencyError, storage_error_handler)
    app.add_exception_handler(sqlite3.Error, storage_error_handler)

    app.include_router(router)
    return app
