"""
API routes for the loan simulator.
"""

from fastapi import APIRouter

from app.api import banks, simulations

router = APIRouter()

# Include sub-routers
router.include_router(banks.router, prefix="/banks", tags=["banks"])
router.include_router(simulations.router, prefix="/simulations", tags=["simulations"])
