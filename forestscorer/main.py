from importlib.metadata import version as pkg_version

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from forestscorer.api import health_router, score_router
from forestscorer.config import settings

app = FastAPI(
    title=settings.app_name,
    version=pkg_version("forestscorer"),
)

app.include_router(health_router)
app.include_router(score_router)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)
