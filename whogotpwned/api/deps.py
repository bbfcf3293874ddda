from fastapi import Request

from whogotpwned.database.store import LookupStore
from whogotpwned.services.query import QueryService


def get_store(request: Request) -> LookupStore:
    return request.app.state.store


def get_query_service(request: Request) -> QueryService:
    return request.app.state.query_service
