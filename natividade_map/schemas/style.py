# natividade_map/schemas/style.py
from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional


class PathStyle(BaseModel):
    """
    Estilo de renderização de UMA feição, com as chaves que o Leaflet espera
    (fillColor, fillOpacity...). Em Python usamos snake_case; o JSON sai com alias.
    """
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    fill_color: str = Field(alias="fillColor")
    color: str
    weight: float
    opacity: float = 1.0
    fill_opacity: float = Field(alias="fillOpacity")
    dash_array: str = Field(default="", alias="dashArray")
    radius: Optional[float] = None  # Só para circle markers (pontos)


class StyleUpdate(BaseModel):
    layer: str
    feature_id: int
    style: PathStyle
    bring_to_front: bool = False


class LegendEntry(BaseModel):
    start: float
    end: float
    color: str
    label: str


class LegendView(BaseModel):
    visible: bool = False
    title: str = ""
    entries: List[LegendEntry] = []


class PopupRow(BaseModel):
    label: str
    value: str


class PopupContent(BaseModel):
    title: str
    rows: List[PopupRow] = []
    lat: Optional[float] = None
    lng: Optional[float] = None


class AttributeTable(BaseModel):
    rows: List[PopupRow] = []
