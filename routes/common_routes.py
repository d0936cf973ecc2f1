from fastapi import APIRouter

router = APIRouter()

@router.get("/")
def read_root():
    return {"message": "Resume collector backend is running."}
