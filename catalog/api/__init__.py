"""
HTTP API over the catalog use cases.

Run with: uvicorn catalog.api.main:app --host 127.0.0.1 --port 8000
"""
