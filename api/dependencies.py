# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-18
# Description: dependencies.py
# -----------------------------------------------------------------------------
from fastapi import Request

from api.AppContainer import AppContainer
from services.HealthService import HealthService
from services.QueryService import QueryService


def get_container(request: Request) -> AppContainer:
    # built once in the app lifespan (or injected by tests)
    return request.app.state.container

def get_health_service(request: Request) -> HealthService:
    # use the singleton service from the container
    return get_container(request).health_service

def get_query_service(request: Request) -> QueryService:
    # use the singleton service from the container
    return get_container(request).query_service
