import logging
import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from routers.admin import router as admin_router

# Routers
from routers.health import router as health_router
from routers.sessions import router as sessions_router

logger = logging.getLogger("math-challenge")
logging.basicConfig(level=logging.INFO)

app = FastAPI(title="Math Challenge – Game API")

_DEFAULT_ORIGINS = "http://localhost:3000,http://127.0.0.1:3000"
CORS_ORIGINS = [
    o.strip() for o in os.getenv("CORS_ORIGINS", _DEFAULT_ORIGINS).split(",") if o.strip()
]

# Allow calls from the front-end dev server
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*", "x-admin-token"],
)


@app.get("/")
def health_root():
    return {"ok": True}


app.include_router(sessions_router)  # /modes, /sessions/...
app.include_router(admin_router)  # /admin/...
app.include_router(health_router)  # /health/...
