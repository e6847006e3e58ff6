from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic_core import PydanticCustomError
from typing import List, Optional, Dict, Any, Mapping
from datetime import date
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from enum import Enum

class InvoiceStatus(str, Enum):
    PENDING = "pending"
    PAID = "paid"

class Invoice(BaseModel):
    id: str
    customer_id: str
    amount: int  # minor units (cents)
    status: InvoiceStatus
    date: date

# Shown when a field is missing or fails validation
FIELD_MESSAGES: Dict[str, str] = {
    "customerId": "Please select a customer",
    "amount": "Please enter an amount greater than $0.",
    "status": "Please select an invoice status.",
}

# Largest value of the integer amount column
MAX_AMOUNT_CENTS = 2_147_483_647

def to_minor_units(amount: Decimal) -> int:
    """Convert a currency amount to integer cents, rounding half up."""
    return int((amount * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))

class InvoiceForm(BaseModel):
    """Fields accepted by the create and edit invoice forms."""

    model_config = ConfigDict(extra="forbid")

    customer_id: str = Field(alias="customerId")
    amount: Decimal
    status: InvoiceStatus

    @field_validator("customer_id", mode="before")
    @classmethod
    def check_customer_id(cls, value: Any) -> Any:
        if not isinstance(value, str) or not value.strip():
            raise PydanticCustomError("customer_id", FIELD_MESSAGES["customerId"])
        return value

    @field_validator("amount", mode="before")
    @classmethod
    def coerce_amount(cls, value: Any) -> Decimal:
        # Blank input coerces to 0 and is then rejected like any other non-positive amount
        if value is None or isinstance(value, bool):
            raise PydanticCustomError("amount", FIELD_MESSAGES["amount"])
        text = str(value).strip()
        try:
            amount = Decimal(text) if text else Decimal(0)
        except InvalidOperation:
            raise PydanticCustomError("amount", FIELD_MESSAGES["amount"])
        if not amount.is_finite() or amount <= 0:
            raise PydanticCustomError("amount", FIELD_MESSAGES["amount"])
        try:
            cents = to_minor_units(amount)
        except ArithmeticError:
            # Too many digits for the decimal context
            raise PydanticCustomError("amount_too_large", "Please enter a smaller amount.")
        if cents > MAX_AMOUNT_CENTS:
            raise PydanticCustomError("amount_too_large", "Please enter a smaller amount.")
        if cents <= 0:
            raise PydanticCustomError("amount", FIELD_MESSAGES["amount"])
        return amount

    @field_validator("status", mode="before")
    @classmethod
    def check_status(cls, value: Any) -> InvoiceStatus:
        try:
            return InvoiceStatus(value)
        except ValueError:
            raise PydanticCustomError("status", FIELD_MESSAGES["status"])

    @property
    def amount_in_cents(self) -> int:
        return to_minor_units(self.amount)

    @classmethod
    def from_form(cls, form_data: Mapping[str, Any]) -> "InvoiceForm":
        return cls.model_validate(dict(form_data))

def field_errors(error: ValidationError) -> Dict[str, List[str]]:
    """Group validation messages by the form field they belong to."""
    errors: Dict[str, List[str]] = {}
    for item in error.errors():
        field = str(item["loc"][0]) if item["loc"] else "form"
        if item["type"] == "missing":
            message = FIELD_MESSAGES.get(field, item["msg"])
        else:
            message = item["msg"]
        errors.setdefault(field, []).append(message)
    return errors

class State(BaseModel):
    errors: Optional[Dict[str, List[str]]] = None
    message: Optional[str] = None

class APIResponse(BaseModel):
    success: bool
    message: str
    data: Optional[Any] = None

class ErrorResponse(BaseModel):
    success: bool = False
    error: str
    details: Optional[str] = None
