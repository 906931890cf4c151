# natividade_map/schemas/events.py
from pydantic import BaseModel, Field
from typing import Annotated, List, Literal, Optional, Union

from natividade_map.schemas.style import (
    AttributeTable,
    LegendView,
    PopupContent,
    StyleUpdate,
)


# --- EVENTOS DA INTERFACE (entrada) ---

class SelectBasemap(BaseModel):
    type: Literal["select_basemap"] = "select_basemap"
    basemap: str


class ToggleLayer(BaseModel):
    type: Literal["toggle_layer"] = "toggle_layer"
    layer: str
    checked: bool


class ToggleAttribute(BaseModel):
    type: Literal["toggle_attribute"] = "toggle_attribute"
    attribute: str
    checked: bool


class ApplyThematic(BaseModel):
    type: Literal["apply_thematic"] = "apply_thematic"
    attribute: str = Field(..., min_length=1)  # Botão "Aplicar" só habilita com atributo


class ResetThematic(BaseModel):
    type: Literal["reset_thematic"] = "reset_thematic"


class HoverEnter(BaseModel):
    type: Literal["hover_enter"] = "hover_enter"
    layer: str
    feature_id: int


class HoverExit(BaseModel):
    type: Literal["hover_exit"] = "hover_exit"
    layer: str
    feature_id: int


class FeatureClick(BaseModel):
    type: Literal["feature_click"] = "feature_click"
    layer: str
    feature_id: int
    lat: Optional[float] = None
    lng: Optional[float] = None


MapEvent = Annotated[
    Union[
        SelectBasemap,
        ToggleLayer,
        ToggleAttribute,
        ApplyThematic,
        ResetThematic,
        HoverEnter,
        HoverExit,
        FeatureClick,
    ],
    Field(discriminator="type"),
]


# --- RESPOSTAS (saída) ---

class PanelsView(BaseModel):
    attribute_selector: bool = False
    thematic_panel: bool = False


class MapUpdate(BaseModel):
    """O que a interface precisa redesenhar depois de um evento."""
    styles: List[StyleUpdate] = []
    legend: Optional[LegendView] = None
    alert: Optional[str] = None
    popup: Optional[PopupContent] = None
    table: Optional[AttributeTable] = None
    panels: Optional[PanelsView] = None
    visible_layers: Optional[List[str]] = None
    basemap: Optional[str] = None
    selected_attributes: Optional[List[str]] = None


class ThematicSnapshot(BaseModel):
    attribute: Optional[str] = None
    breaks: List[float] = []
    palette: List[str] = []


class StateSnapshot(BaseModel):
    basemap: str
    loaded_layers: List[str]
    visible_layers: List[str]
    loading_layers: List[str]
    selected_attributes: List[str]
    thematic: ThematicSnapshot
    legend: LegendView
    panels: PanelsView
    notices: List[str] = []
