"""API router aggregation"""
from fastapi import APIRouter
from userauth.api.endpoints import auth_endpoints, admin_endpoints

api_router = APIRouter()

api_router.include_router(auth_endpoints.router,  tags=["Authentication"])
api_router.include_router(admin_endpoints.router, tags=["Admin"])
