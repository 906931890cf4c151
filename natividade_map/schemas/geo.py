# natividade_map/schemas/geo.py
from pydantic import BaseModel
from typing import List, Dict, Any, Optional

from natividade_map.schemas.style import PathStyle


class Feature(BaseModel):
    type: str = "Feature"
    id: int
    geometry: Optional[Dict[str, Any]] = None
    # Propriedades originais do GeoJSON, sem filtro (o popup decide o que mostrar)
    properties: Dict[str, Any]
    style: PathStyle
    label: Optional[str] = None  # Rótulo permanente (ex: nome do distrito)


class FeatureCollection(BaseModel):
    type: str = "FeatureCollection"
    name: str
    features: List[Feature]


class LayerInfo(BaseModel):
    name: str
    label: str
    color: str
    visible_by_default: bool = False


class MapConfigResponse(BaseModel):
    center: List[float]
    zoom: int
    min_zoom: int
    max_zoom: int
    basemaps: Dict[str, Dict[str, str]]
    default_basemap: str
    layers: List[LayerInfo]
    thematic_layer: str
