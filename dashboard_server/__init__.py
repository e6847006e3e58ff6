"""
Invoice Dashboard Server Package

This package provides the FastAPI server behind the invoices dashboard:
form handlers that validate invoice submissions, write them to Supabase
and send the browser back to the invoice list.
"""

__version__ = "1.0.0"
__author__ = "Invoice Dashboard Team"
