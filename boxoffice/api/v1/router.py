from fastapi import APIRouter

# Public: repertoire, spectacle pages, reviews
from boxoffice.api.v1.public.spectacles import router as public_spectacles_router

# Public: seat picker and booking
from boxoffice.api.v1.public.bookings import router as bookings_router

# Admin
from boxoffice.api.v1.admin.dashboard import router as dashboard_router
from boxoffice.api.v1.admin.stats import router as stats_router
from boxoffice.api.v1.admin.reports import router as reports_router
from boxoffice.api.v1.admin.spectacles import router as spectacles_router
from boxoffice.api.v1.admin.seances import router as seances_router, prices_router
from boxoffice.api.v1.admin.actors import router as actors_router

api_router = APIRouter()

# --- Public ---
api_router.include_router(public_spectacles_router)
api_router.include_router(bookings_router)

# --- Admin ---
api_router.include_router(dashboard_router)
api_router.include_router(stats_router)
api_router.include_router(reports_router)
api_router.include_router(spectacles_router)
api_router.include_router(seances_router)
api_router.include_router(prices_router)
api_router.include_router(actors_router)
