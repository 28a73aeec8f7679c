# backend/main.py
import logging
from pathlib import Path

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

load_dotenv()

from config import settings
from database import init_db
from utils.promotions import InvalidPromotionType

# Router imports
from routes.products import router as products_router
from routes.laptops import router as laptops_router
from routes.promotions import router as promotions_router
from routes.categories import router as categories_router
from routes.depots import router as depots_router
from routes.team import router as team_router
from routes.logs import router as logs_router

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# Initialisation
init_db()

app = FastAPI(title="Stock Admin API", version="1.0.0")

# Uploads - make sure the directory exists before mounting it
Path(settings.UPLOAD_DIR).mkdir(parents=True, exist_ok=True)
app.mount("/uploads", StaticFiles(directory=settings.UPLOAD_DIR), name="uploads")

# CORS Configuration
origins = [
    "http://localhost:5173",
    "http://127.0.0.1:5173",
]
if settings.FRONTEND_URL and settings.FRONTEND_URL not in origins:
    origins.append(settings.FRONTEND_URL)

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# A stored promotion with a type we cannot price has no safe numeric default
@app.exception_handler(InvalidPromotionType)
async def invalid_promotion_type_handler(request: Request, exc: InvalidPromotionType):
    logger.error(f"{request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=422,
        content={"detail": str(exc), "promotionType": exc.promotion_type},
    )


# Router registration
app.include_router(products_router)
app.include_router(laptops_router)
app.include_router(promotions_router)
app.include_router(categories_router)
app.include_router(depots_router)
app.include_router(team_router)
app.include_router(logs_router)

@app.get("/")
def read_root():
    return {"message": "Stock Admin API is running"}
