from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

router = APIRouter(prefix="/readyz", tags=["health"])


@router.get(
    "",
    summary="Readiness probe",
    description="200 with the live location count once the CSV is loaded, 503 before.",
)
async def readyz(request: Request):
    database = getattr(request.app.state, "location_database", None)
    if database is None:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "error": {
                    "code": "locations_not_loaded",
                    "message": "Location database is still loading",
                }
            },
        )
    return {"ok": True, "locations": database.size}
