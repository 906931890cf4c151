# natividade_map/main.py
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from natividade_map.core.config import settings
from natividade_map.routers import map as map_router
from natividade_map.schemas.geo import LayerInfo, MapConfigResponse
from natividade_map.services.map_controller import MapController

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    controller = MapController(settings)
    app.state.controller = controller
    logger.info("⏳ Carregando camadas iniciais...")
    await controller.load_initial_layers()
    yield


app = FastAPI(title=settings.PROJECT_NAME, lifespan=lifespan)

app.include_router(map_router.router, tags=["map"])


@app.get("/")
async def health_check():
    return {"status": "ok", "message": f"{settings.PROJECT_NAME} is running"}


@app.get("/config", response_model=MapConfigResponse)
async def get_map_config():
    """Configuração estática do mapa (visão inicial, mapas base, catálogo de camadas)."""
    return MapConfigResponse(
        center=list(settings.MAP_CENTER),
        zoom=settings.MAP_ZOOM,
        min_zoom=settings.MAP_MIN_ZOOM,
        max_zoom=settings.MAP_MAX_ZOOM,
        basemaps={name: b.model_dump() for name, b in settings.BASEMAPS.items()},
        default_basemap=settings.DEFAULT_BASEMAP,
        layers=[
            LayerInfo(name=name, label=cfg.name, color=cfg.color, visible_by_default=cfg.visible_by_default)
            for name, cfg in settings.LAYERS.items()
        ],
        thematic_layer=settings.THEMATIC_LAYER,
    )


# --- FRONTEND ---
if settings.FRONTEND_DIR and settings.FRONTEND_DIR.is_dir():
    app.mount("/view", StaticFiles(directory=settings.FRONTEND_DIR, html=True), name="frontend")


def run():
    import uvicorn

    uvicorn.run("natividade_map.main:app", host="0.0.0.0", port=8000)
