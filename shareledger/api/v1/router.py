"""Main v1 router aggregator"""
from fastapi import APIRouter

from shareledger.api.v1 import balances, expenses

# Create v1 router
api_router = APIRouter()

# Include all v1 routers
api_router.include_router(expenses.router)
api_router.include_router(balances.router)
