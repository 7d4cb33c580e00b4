from fastapi import APIRouter

from timekeeper.database.session import get_database_status

router = APIRouter(tags=["Health"])


@router.get("/db-status")
def db_status():
    return {
        "success": True,
        "status": get_database_status(),
        "message": "Database status checked successfully",
    }
