"""
Router principal de la API.

Se monta en /api (sin prefijo de version) porque los exportadores existentes
publican en /api/sync.
"""
from fastapi import APIRouter

from app.api.v1.endpoints import sync


api_router = APIRouter()

api_router.include_router(sync.router)
