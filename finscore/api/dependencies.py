"""Dependency injection for FastAPI endpoints"""

from fastapi import Request
from finscore.infrastructure.clients.records import RecordStoreClient


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_record_store_client() -> RecordStoreClient:
    """Provide record store client instance"""
    return RecordStoreClient()
