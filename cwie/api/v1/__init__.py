"""API v1 routes."""

from fastapi import APIRouter

from cwie.api.v1 import (
    auth,
    companies,
    departments,
    faculties,
    industries,
    internship_types,
    jobs,
    users,
)

api_router = APIRouter()

# Include all route modules
api_router.include_router(auth.router, prefix="/auth", tags=["Authentication"])
api_router.include_router(users.router, prefix="/users", tags=["Users"])
api_router.include_router(faculties.router, prefix="/faculty", tags=["Faculties"])
api_router.include_router(departments.router, prefix="/department", tags=["Departments"])
api_router.include_router(industries.router, prefix="/industries", tags=["Industries"])
api_router.include_router(
    internship_types.router, prefix="/internship-types", tags=["Internship Types"]
)
api_router.include_router(companies.router, prefix="/companies", tags=["Companies"])
api_router.include_router(jobs.router, prefix="/jobs", tags=["Jobs"])
