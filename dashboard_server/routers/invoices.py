from fastapi import APIRouter, Depends, HTTPException, Path, Request
from fastapi.responses import JSONResponse
from typing import List
from ..actions import create_invoice, update_invoice, delete_invoice
from ..cache import ViewCache
from ..database import DatabaseClient, DatabaseError
from ..dependencies import get_db, get_view_cache
from ..models import Invoice, APIResponse, State
from ..navigation import INVOICES_PATH

router = APIRouter(
    prefix=INVOICES_PATH,
    tags=["invoices"]
)

async def read_form(request: Request) -> dict:
    """Flatten the submitted form into a plain mapping"""
    form = await request.form()
    return {key: value for key, value in form.items()}

def state_response(state: State) -> JSONResponse:
    # Field errors are the user's to fix; a bare message means the write failed
    status_code = 400 if state.errors else 500
    return JSONResponse(status_code=status_code, content=state.model_dump(exclude_none=True))

@router.get("", response_model=List[Invoice])
async def list_invoices(
    db: DatabaseClient = Depends(get_db),
    cache: ViewCache = Depends(get_view_cache)
):
    try:
        return cache.get_or_set(INVOICES_PATH, db.list_invoices)
    except DatabaseError as e:
        raise HTTPException(
            status_code=500,
            detail=f"Error listing invoices: {str(e)}"
        )

@router.post("/create")
async def create_invoice_form(
    request: Request,
    db: DatabaseClient = Depends(get_db),
    cache: ViewCache = Depends(get_view_cache)
):
    form_data = await read_form(request)
    return state_response(create_invoice(form_data, db=db, cache=cache))

@router.get("/{invoice_id}", response_model=Invoice)
async def get_invoice(
    invoice_id: str = Path(..., description="Invoice ID"),
    db: DatabaseClient = Depends(get_db)
):
    try:
        invoice = db.get_invoice_by_id(invoice_id)
    except DatabaseError as e:
        raise HTTPException(
            status_code=500,
            detail=f"Error retrieving invoice: {str(e)}"
        )
    if not invoice:
        raise HTTPException(
            status_code=404,
            detail=f"Invoice {invoice_id} not found"
        )
    return invoice

@router.post("/{invoice_id}/edit")
async def update_invoice_form(
    request: Request,
    invoice_id: str = Path(..., description="Invoice ID to update"),
    db: DatabaseClient = Depends(get_db),
    cache: ViewCache = Depends(get_view_cache)
):
    form_data = await read_form(request)
    return state_response(update_invoice(invoice_id, form_data, db=db, cache=cache))

@router.post("/{invoice_id}/delete")
async def delete_invoice_form(
    invoice_id: str = Path(..., description="Invoice ID to delete"),
    db: DatabaseClient = Depends(get_db),
    cache: ViewCache = Depends(get_view_cache)
):
    state = delete_invoice(invoice_id, db=db, cache=cache)
    if state:
        return state_response(state)
    return APIResponse(
        success=True,
        message="Deleted Invoice.",
        data={"id": invoice_id}
    )
