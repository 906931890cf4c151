# natividade_map/routers/map.py
from fastapi import APIRouter, Body, Depends, HTTPException
from fastapi.exceptions import RequestValidationError
from pydantic import TypeAdapter, ValidationError
from typing import Any, Dict, List

from natividade_map.api.deps import get_controller
from natividade_map.schemas.events import MapEvent, MapUpdate, StateSnapshot
from natividade_map.schemas.geo import FeatureCollection
from natividade_map.schemas.style import LegendView
from natividade_map.services.map_controller import MapController

router = APIRouter()

_event_adapter = TypeAdapter(MapEvent)


@router.get("/state", response_model=StateSnapshot)
async def get_state(controller: MapController = Depends(get_controller)):
    return controller.snapshot()


@router.get("/layers/{layer_name}", response_model=FeatureCollection)
async def get_layer(layer_name: str, controller: MapController = Depends(get_controller)):
    """GeoJSON da camada com o estilo atual de cada feição."""
    try:
        store = controller.get_store(layer_name)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return store.to_feature_collection()


@router.get("/layers/{layer_name}/numeric-attributes", response_model=List[str])
async def get_numeric_attributes(layer_name: str, controller: MapController = Depends(get_controller)):
    """Opções do seletor do mapa temático."""
    try:
        store = controller.get_store(layer_name)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return store.numeric_attributes()


@router.get("/legend", response_model=LegendView)
async def get_legend(controller: MapController = Depends(get_controller)):
    return controller.state.legend


@router.post("/events", response_model=MapUpdate)
async def post_event(
    payload: Dict[str, Any] = Body(...),
    controller: MapController = Depends(get_controller),
):
    """Recebe um evento da interface e devolve o que precisa ser redesenhado."""
    try:
        event = _event_adapter.validate_python(payload)
    except ValidationError as e:
        raise RequestValidationError(e.errors(include_url=False, include_context=False))

    try:
        return await controller.dispatch(event)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))
