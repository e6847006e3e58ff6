"""Form handlers for the invoices dashboard.

Each handler validates a submitted form, issues a single statement through
the database client and, on success, revalidates the cached invoice list and
redirects to it. Failures come back as a `State` for the form to render.
"""

import logging
from datetime import date
from typing import Any, Callable, Mapping, Optional

from pydantic import ValidationError

from .auth import SignInError, SignInErrorKind, SupabaseSignIn, CREDENTIALS_PROVIDER
from .cache import ViewCache
from .database import DatabaseClient, DatabaseError
from .models import InvoiceForm, State, field_errors
from .navigation import INVOICES_PATH, redirect

logger = logging.getLogger(__name__)


def _validate(form_data: Mapping[str, Any], failure_message: str):
    try:
        return InvoiceForm.from_form(form_data), None
    except ValidationError as e:
        errors = field_errors(e)
        logger.info("Invoice form rejected: %s", sorted(errors))
        return None, State(errors=errors, message=failure_message)


def create_invoice(form_data: Mapping[str, Any], *, db: DatabaseClient, cache: ViewCache) -> State:
    form, state = _validate(form_data, "Missing fields. Failed to create invoice.")
    if state:
        return state

    try:
        db.create_invoice(form.customer_id, form.amount_in_cents, form.status, date.today())
    except DatabaseError:
        return State(message="Database Error: Failed to Create Invoice.")

    cache.revalidate_path(INVOICES_PATH)
    redirect(INVOICES_PATH)


def update_invoice(invoice_id: str, form_data: Mapping[str, Any], *, db: DatabaseClient, cache: ViewCache) -> State:
    form, state = _validate(form_data, "Missing fields. Failed to update invoice.")
    if state:
        return state

    try:
        matched = db.update_invoice(invoice_id, form.customer_id, form.amount_in_cents, form.status)
    except DatabaseError:
        return State(message="Database Error: Failed to Update Invoice.")

    if not matched:
        logger.warning("Update matched no invoice with id %s", invoice_id)

    cache.revalidate_path(INVOICES_PATH)
    redirect(INVOICES_PATH)


def delete_invoice(invoice_id: str, *, db: DatabaseClient, cache: ViewCache) -> Optional[State]:
    try:
        db.delete_invoice(invoice_id)
    except DatabaseError:
        return State(message="Database Error: Failed to Delete Invoice.")

    cache.revalidate_path(INVOICES_PATH)
    return None


def authenticate(
    form_data: Mapping[str, Any],
    *,
    sign_in: SupabaseSignIn,
    on_session: Optional[Callable[[Any], None]] = None,
) -> Optional[str]:
    """Sign in with the submitted credentials.

    Returns "CredentialsSignin" when the credentials were rejected so the form
    can show its invalid-credentials message. Anything else propagates. On
    success the new session goes to `on_session`, which hands it to the browser.
    """
    try:
        session = sign_in.sign_in(CREDENTIALS_PROVIDER, dict(form_data))
    except SignInError as e:
        if e.kind is SignInErrorKind.CREDENTIALS_SIGNIN:
            return SignInErrorKind.CREDENTIALS_SIGNIN.value
        raise
    if on_session is not None:
        on_session(session)
    return None
