from dotenv import load_dotenv
load_dotenv()

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import sys
from pathlib import Path

# Add the root directory to the Python path
sys.path.append(str(Path(__file__).parent.parent))

from api.dependencies import get_hierarchy_service
from api.hierarchy_router import router as hierarchy_router
from core.config import settings


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    if get_hierarchy_service.cache_info().currsize:
        get_hierarchy_service().store.close()


app = FastAPI(
    title=settings.APP_NAME,
    description="Tenant-scoped reporting hierarchy: link employees and query the org forest.",
    version="1.0.0",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# --- Include all the Routers ---
app.include_router(hierarchy_router)

@app.get("/")
def read_root():
    return {"message": f"{settings.APP_NAME} is running."}
