"""
Request pipeline: ordered stages over a shared request context.

Each stage inspects or fills in the ``Context`` and returns one of
``Continue``, ``Respond`` or ``Fail``. ``run_pipeline`` runs the stages in
order, stops at the first response or failure, then hands over to the route
handler. Every failure, returned or raised, is rendered by
``translate_error``.
"""

import hmac
import json
import logging
import math
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Union

from .config import Settings
from .database import ProductStore
from .errors import OperationalError, error_body, translate_error

logger = logging.getLogger(__name__)

API_KEY_HEADER = "x-api-key"


@dataclass
class Context:
    """Everything a stage or handler may read or write for one request."""

    method: str
    url: str
    store: ProductStore
    settings: Settings
    headers: Mapping[str, str] = field(default_factory=dict)
    query: Mapping[str, str] = field(default_factory=dict)
    path_params: Dict[str, str] = field(default_factory=dict)
    raw_body: bytes = b""
    body: Any = None
    received_at: Optional[str] = None


@dataclass(frozen=True)
class Continue:
    pass


@dataclass(frozen=True)
class Respond:
    status_code: int
    content: Any
    media_type: str = "application/json"


@dataclass(frozen=True)
class Fail:
    error: BaseException


CONTINUE = Continue()

Outcome = Union[Continue, Respond, Fail]
Stage = Callable[[Context], Outcome]
Handler = Callable[[Context], Respond]


def run_pipeline(stages: Sequence[Stage], handler: Handler, ctx: Context) -> Respond:
    for stage in stages:
        try:
            outcome = stage(ctx)
        except Exception as exc:
            outcome = Fail(exc)
        if isinstance(outcome, Respond):
            return outcome
        if isinstance(outcome, Fail):
            return Respond(*translate_error(outcome.error))

    try:
        return handler(ctx)
    except Exception as exc:
        return Respond(*translate_error(exc))


# ---------------------------
# Stages
# ---------------------------
def log_request(ctx: Context) -> Outcome:
    ctx.received_at = datetime.now(timezone.utc).isoformat()
    logger.info("method=%s url=%s timestamp=%s", ctx.method, ctx.url, ctx.received_at)
    return CONTINUE


def parse_json_body(ctx: Context) -> Outcome:
    if not ctx.raw_body or not ctx.raw_body.strip():
        ctx.body = {}
        return CONTINUE
    try:
        ctx.body = json.loads(ctx.raw_body)
    except (UnicodeDecodeError, ValueError):
        return Fail(OperationalError("Malformed JSON body", 400))
    return CONTINUE


def authenticate(ctx: Context) -> Outcome:
    supplied = ctx.headers.get(API_KEY_HEADER)
    if not supplied:
        return Respond(401, error_body("fail", "Api key required."))

    expected = ctx.settings.api_key
    if not expected or not hmac.compare_digest(supplied.encode(), expected.encode()):
        return Respond(403, error_body("fail", "Invalid API key"))
    return CONTINUE


def _non_empty_string(value: Any) -> bool:
    return isinstance(value, str) and value.strip() != ""


def _valid_price(price: Any) -> bool:
    if isinstance(price, bool) or not isinstance(price, (int, float)):
        return False
    try:
        return math.isfinite(price) and price >= 0
    except OverflowError:
        # integers beyond float range
        return False


def product_violations(body: Any) -> List[str]:
    """Every rule the payload breaks, in field order."""
    if not isinstance(body, dict):
        body = {}
    errors = []
    if not _non_empty_string(body.get("name")):
        errors.append("Name must be a non-empty string.")
    # description may be left out, but not sent blank
    if "description" in body and not _non_empty_string(body["description"]):
        errors.append("Description must be a non-empty string.")
    price = body.get("price")
    if not _valid_price(price):
        errors.append("Price must be a positive number.")
    if not _non_empty_string(body.get("category")):
        errors.append("Category must be a non-empty string.")
    if not isinstance(body.get("inStock"), bool):
        errors.append("inStock must be either true / false.")
    return errors


def validate_product(ctx: Context) -> Outcome:
    errors = product_violations(ctx.body)
    if errors:
        return Respond(400, {"error": "Validation failed", "details": errors})
    return CONTINUE


READ_STAGES: List[Stage] = [log_request]
WRITE_STAGES: List[Stage] = [log_request, parse_json_body, authenticate, validate_product]
DELETE_STAGES: List[Stage] = [log_request, authenticate]
