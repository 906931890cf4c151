# natividade_map/core/config.py
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class BasemapConfig(BaseModel):
    url: str
    attribution: str


class LayerConfig(BaseModel):
    file: str
    color: str
    name: str
    visible_by_default: bool = False

    # Borda fixa independente da cor de preenchimento (ex: distritos em preto)
    border_color: Optional[str] = None
    # CRS de origem quando o arquivo chega projetado (ex: UTM em metros)
    source_crs: Optional[str] = None
    # Atributo usado como rótulo permanente no centro da feição
    label_attribute: Optional[str] = None


DEFAULT_BASEMAPS = {
    "streets": BasemapConfig(
        url="https://{s}.tile.openstreetmap.org/{z}/{x}/{y}.png",
        attribution="© OpenStreetMap contributors",
    ),
    "satellite": BasemapConfig(
        url="https://server.arcgisonline.com/ArcGIS/rest/services/World_Imagery/MapServer/tile/{z}/{y}/{x}",
        attribution="© Esri",
    ),
    "terrain": BasemapConfig(
        url="https://{s}.tile.opentopomap.org/{z}/{x}/{y}.png",
        attribution="© OpenTopoMap contributors",
    ),
}

DEFAULT_LAYERS = {
    "distritos": LayerConfig(
        file="bairros_nat.geojson",
        color="#667eea",
        name="Distritos",
        visible_by_default=True,
        border_color="#000000",
        label_attribute="NM_DIST",
    ),
    "setores": LayerConfig(
        file="setores1_nat.geojson", color="#f093fb", name="Setores Censitários"
    ),
    "urb_rur": LayerConfig(
        file="urb_rur_nat.geojson", color="#4facfe", name="Urbano / Rural"
    ),
    "deficit_hab": LayerConfig(
        file="deficit_hab_nat.geojson",
        color="#fa709a",
        name="Déficit Habitacional",
        source_crs="EPSG:31983",  # SIRGAS 2000 / UTM 23S
    ),
    "residencia": LayerConfig(
        file="residencias_nat.geojson", color="#43e97b", name="Residências"
    ),
}


class Settings(BaseSettings):
    PROJECT_NAME: str = "Natividade Geo-Mapa"
    LOG_LEVEL: str = "INFO"

    DATA_DIR: Path = Path("data")
    FRONTEND_DIR: Optional[Path] = None
    HTTP_TIMEOUT: float = 30.0

    # Visão inicial (Natividade/RJ) [lat, lng]
    MAP_CENTER: Tuple[float, float] = (-21.0419, -41.9728)
    MAP_ZOOM: int = 12
    MAP_MIN_ZOOM: int = 10
    MAP_MAX_ZOOM: int = 18

    BASEMAPS: Dict[str, BasemapConfig] = DEFAULT_BASEMAPS
    DEFAULT_BASEMAP: str = "streets"

    LAYERS: Dict[str, LayerConfig] = DEFAULT_LAYERS
    INITIAL_LAYERS: List[str] = ["distritos"]
    TARGET_CRS: str = "EPSG:4326"

    # Mapeamento temático (ColorBrewer YlOrRd, 5 classes)
    THEMATIC_LAYER: str = "setores"
    THEMATIC_CLASSES: int = 5
    THEMATIC_PALETTE: List[str] = ["#ffffb2", "#fecc5c", "#fd8d3c", "#f03b20", "#bd0026"]
    NO_DATA_COLOR: str = "#cccccc"

    DEFAULT_SELECTED_ATTRIBUTES: List[str] = [
        "CD_SETOR", "NM_MUN", "NM_DIST", "AREA_KM2", "v0001", "v0002", "v0007"
    ]

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True)

    @model_validator(mode="after")
    def check_thematic(self):
        # Paleta indexada junto com as quebras: palette[i] colore valores <= breaks[i]
        if len(self.THEMATIC_PALETTE) != self.THEMATIC_CLASSES:
            raise ValueError("THEMATIC_PALETTE deve ter exatamente THEMATIC_CLASSES cores")
        if self.THEMATIC_LAYER not in self.LAYERS:
            raise ValueError(f"Camada temática desconhecida: {self.THEMATIC_LAYER}")
        return self

    def layer_source(self, layer_name: str) -> str:
        """Resolve o caminho (ou URL) do GeoJSON de uma camada."""
        source = self.LAYERS[layer_name].file
        if source.startswith(("http://", "https://")):
            return source
        return str(self.DATA_DIR / source)


settings = Settings()
