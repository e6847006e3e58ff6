import logging
from supabase import create_client, Client
from typing import List, Optional, Dict, Any
from datetime import date
from .config import Settings
from .models import Invoice, InvoiceStatus

logger = logging.getLogger(__name__)

class DatabaseError(Exception):
    """A statement against the invoices table failed."""

class DatabaseClient:
    def __init__(self, client: Optional[Client] = None, table: Optional[str] = None):
        settings = Settings.from_env()
        if client is None:
            settings.require("supabase_url", "supabase_service_role_key")
            client = create_client(settings.supabase_url, settings.supabase_service_role_key)
        self.supabase: Client = client
        self.table = table or settings.invoices_table

    def create_invoice(self, customer_id: str, amount: int, status: InvoiceStatus, issued_on: date) -> None:
        """Insert a new invoice row. `amount` is in minor units."""
        row = {
            "customer_id": customer_id,
            "amount": amount,
            "status": status.value,
            "date": issued_on.isoformat(),
        }
        try:
            self.supabase.table(self.table).insert(row).execute()
        except Exception as e:
            logger.exception("Error creating invoice for customer %s", customer_id)
            raise DatabaseError(f"Failed to create invoice: {e}") from e

    def update_invoice(self, invoice_id: str, customer_id: str, amount: int, status: InvoiceStatus) -> bool:
        """Update an invoice by id. Returns False when no row matched."""
        values = {
            "customer_id": customer_id,
            "amount": amount,
            "status": status.value,
        }
        try:
            result = self.supabase.table(self.table).update(values).eq("id", invoice_id).execute()
        except Exception as e:
            logger.exception("Error updating invoice %s", invoice_id)
            raise DatabaseError(f"Failed to update invoice {invoice_id}: {e}") from e
        return bool(result.data)

    def delete_invoice(self, invoice_id: str) -> None:
        try:
            self.supabase.table(self.table).delete().eq("id", invoice_id).execute()
        except Exception as e:
            logger.exception("Error deleting invoice %s", invoice_id)
            raise DatabaseError(f"Failed to delete invoice {invoice_id}: {e}") from e

    def get_invoice_by_id(self, invoice_id: str) -> Optional[Invoice]:
        """Get a single invoice by id"""
        try:
            result = self.supabase.table(self.table).select("*").eq("id", invoice_id).execute()
        except Exception as e:
            logger.exception("Error fetching invoice %s", invoice_id)
            raise DatabaseError(f"Failed to fetch invoice {invoice_id}: {e}") from e

        if result.data and len(result.data) > 0:
            return self._convert_to_invoice(result.data[0])
        return None

    def list_invoices(self, limit: Optional[int] = None) -> List[Invoice]:
        """List invoices, most recently issued first"""
        try:
            query = self.supabase.table(self.table).select("*").order("date", desc=True)
            if limit:
                query = query.limit(limit)
            result = query.execute()
        except Exception as e:
            logger.exception("Error listing invoices")
            raise DatabaseError(f"Failed to list invoices: {e}") from e

        return [self._convert_to_invoice(invoice_data) for invoice_data in result.data]

    def count_invoices(self) -> int:
        try:
            result = self.supabase.table(self.table).select("id").execute()
        except Exception as e:
            logger.exception("Error counting invoices")
            raise DatabaseError(f"Failed to count invoices: {e}") from e
        return len(result.data)

    def _convert_to_invoice(self, invoice_data: Dict[str, Any]) -> Invoice:
        """Convert database row to Invoice model"""
        issued_on = invoice_data["date"]
        if isinstance(issued_on, str):
            issued_on = date.fromisoformat(issued_on[:10])

        return Invoice(
            id=str(invoice_data["id"]),
            customer_id=str(invoice_data["customer_id"]),
            amount=int(invoice_data["amount"]),
            status=InvoiceStatus(invoice_data["status"]),
            date=issued_on,
        )
