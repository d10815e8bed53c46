from fastapi import APIRouter

from app.modules.applications import router as applications_router
from app.modules.contacts import router as contacts_router

api_router = APIRouter()

api_router.include_router(applications_router, tags=["Admissions"])

api_router.include_router(contacts_router, tags=["Contact"])
