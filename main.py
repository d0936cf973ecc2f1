import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from routes import application_routes, common_routes
from middleware import AccessLogMiddleware
from config import FRONTEND_URL, PORT, UPLOAD_DIR
from database import get_application_collection, init_indexes
from services.storage_service import ensure_upload_dir

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

app = FastAPI(title="Resume Collector")

app.add_middleware(
    CORSMiddleware,
    allow_origins=[FRONTEND_URL],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_middleware(AccessLogMiddleware)

app.include_router(common_routes.router)
app.include_router(application_routes.router)

app.mount("/uploads", StaticFiles(directory=ensure_upload_dir(UPLOAD_DIR)), name="uploads")


@app.on_event("startup")
def create_indexes():
    try:
        init_indexes(get_application_collection())
    except Exception:
        logger.exception("MongoDB index initialization failed")

if __name__ == "__main__":
    import uvicorn
    logger.info("Server is running on port: %s", PORT)
    uvicorn.run(app, host="0.0.0.0", port=PORT)
