"""Order services: cart conversion and idempotent request handling."""

import hashlib
import json
import logging
from datetime import timedelta
from typing import Callable, Optional, Tuple

from cart.models import Cart
from cart.selectors import get_active_cart_for_user, list_cart_lines
from common.exceptions import FailedPrecondition, Internal
from django.conf import settings
from django.db import DatabaseError, IntegrityError, transaction
from django.utils import timezone

from .emails import send_order_placed_email
from .models import IdempotencyKey, Order, OrderItem

logger = logging.getLogger("storefront.orders")


def place_order(*, user) -> Order:
    """Convert the user's active cart into an immutable order.

    Runs as one transaction holding the active cart's row lock: the order,
    its items (priced from the live catalog) and the cart's transition to
    `converted` commit together or not at all. A concurrent call for the same
    user waits for the lock, then finds a fresh empty cart.

    Raises `FailedPrecondition` for an empty cart and `Internal` when the
    database fails; nothing is persisted in either case.
    """

    try:
        with transaction.atomic():
            cart = get_active_cart_for_user(user=user, for_update=True)
            lines = list(list_cart_lines(cart=cart))
            if not lines:
                raise FailedPrecondition("cart is empty")

            total_cents = sum(line.quantity * line.product.price_cents for line in lines)
            order = Order.objects.create(user=user, total_cents=total_cents, status=Order.STATUS_PENDING)
            OrderItem.objects.bulk_create(
                [
                    OrderItem(
                        order=order,
                        product_id=line.product_id,
                        unit_price_cents=line.product.price_cents,
                        quantity=line.quantity,
                    )
                    for line in lines
                ]
            )
            cart.status = Cart.STATUS_CONVERTED
            cart.save(update_fields=["status", "updated_at"])
            transaction.on_commit(lambda: send_order_placed_email(order))
    except DatabaseError:
        logger.exception(
            "order.place_failed",
            extra={"event": "order.place_failed", "user_id": getattr(user, "id", None)},
        )
        raise Internal("failed to place order")

    logger.info(
        "order.placed",
        extra={
            "event": "order.placed",
            "order_id": order.id,
            "cart_id": cart.id,
            "user_id": getattr(user, "id", None),
            "total_cents": total_cents,
            "item_count": len(lines),
        },
    )
    return order


def _in_progress_response() -> Tuple[dict, int]:
    return {"kind": "failed_precondition", "detail": "request with this idempotency key is in progress"}, 409


def with_idempotency(
    *,
    key: str,
    user,
    path: str,
    method: str,
    handler: Callable[[], Tuple[dict, int]],
    request_hash: Optional[str] = None,
) -> Tuple[dict, int]:
    """Run handler idempotently and persist its response for the given key and scope.

    - Scope is derived from the caller: for authenticated users, "user:<id>"; otherwise "anon".
    - If a record exists and the stored `request_hash` differs from the provided one, returns 409.
    - If a record exists but response is not yet stored, returns 409 to indicate in-progress.
    - Expired records are discarded and the request runs as new.
    - If the handler raises, the record is released so the caller can retry with the same key.
    """

    scope = f"user:{getattr(user, 'id', None)}" if getattr(user, "id", None) else "anon"
    method = str(method).upper()
    path = str(path)
    ttl = timedelta(hours=getattr(settings, "IDEMPOTENCY_TTL_HOURS", 24))
    lookup = {"key": key, "scope": scope, "path": path, "method": method}

    IdempotencyKey.objects.filter(expires_at__lt=timezone.now(), **lookup).delete()
    try:
        with transaction.atomic():
            idem = IdempotencyKey.objects.create(
                user=user if getattr(user, "id", None) else None,
                request_hash=request_hash,
                expires_at=timezone.now() + ttl,
                **lookup,
            )
    except IntegrityError:
        try:
            idem = IdempotencyKey.objects.get(**lookup)
        except IdempotencyKey.DoesNotExist:
            # The holder failed and released the key after our insert collided.
            return _in_progress_response()
        # Guard against key reuse with different fingerprints
        if idem.request_hash != request_hash:
            return {"kind": "failed_precondition", "detail": "idempotency key reused with a different payload"}, 409
        if idem.response_json is not None and idem.response_code is not None:
            logger.info(
                "idempotency.replayed",
                extra={"event": "idempotency.replayed", "scope": scope, "path": path, "method": method},
            )
            return idem.response_json, int(idem.response_code)
        # If another process is currently handling it, return a safe 409
        return _in_progress_response()

    # Fresh request; execute and persist the response
    try:
        body, code = handler()
    except Exception:
        IdempotencyKey.objects.filter(id=idem.id).delete()
        raise

    IdempotencyKey.objects.filter(id=idem.id).update(response_json=body, response_code=code)
    return body, code


def compute_request_hash(data: Optional[dict]) -> Optional[str]:
    """Compute a canonical SHA256 hash of the request body.

    Uses sorted keys JSON representation to stabilize the hash across equivalent payloads.
    Returns None when data is falsy.
    """
    if not data:
        return None
    try:
        payload = json.dumps(data, sort_keys=True, separators=(",", ":"), default=str)
    except (TypeError, ValueError):
        return None
    return hashlib.sha256(payload.encode("utf-8")).hexdigest()
