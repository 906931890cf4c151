# natividade_map/services/layers/loader.py
import asyncio
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import geopandas as gpd
import httpx
import shapely
from shapely.geometry import shape

from natividade_map.core.config import Settings
from natividade_map.core.exceptions import LayerLoadError, UnknownLayerError
from natividade_map.services.layers.store import FeatureStore, StoredFeature
from natividade_map.services.style_policy import StylePolicy

logger = logging.getLogger(__name__)


def needs_reprojection(geometries: gpd.GeoSeries) -> bool:
    """Coordenadas com módulo > 180 não são graus: o arquivo veio projetado (UTM)."""
    geoms = geometries.dropna()
    if geoms.empty:
        return False
    coords = shapely.get_coordinates(geoms.iloc[0])
    if len(coords) == 0:
        return False
    return abs(coords[0][0]) > 180


def parse_feature_collection(content: bytes) -> List[Dict[str, Any]]:
    data = json.loads(content)
    if not isinstance(data, dict) or not isinstance(data.get("features"), list):
        raise ValueError("GeoJSON inválido: esperado um FeatureCollection com 'features'")
    return data["features"]


class LayerLoaderService:
    def __init__(
        self,
        settings: Settings,
        policy: StylePolicy,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.settings = settings
        self.policy = policy
        self.transport = transport

    async def _read_source(self, source: str) -> bytes:
        if source.startswith(("http://", "https://")):
            async with httpx.AsyncClient(
                timeout=self.settings.HTTP_TIMEOUT, transport=self.transport
            ) as client:
                response = await client.get(source)
                response.raise_for_status()
                return response.content
        return await asyncio.to_thread(Path(source).read_bytes)

    def _reproject(self, layer_name: str, items: List[Dict[str, Any]]) -> None:
        """Reprojeta só a geometria de cada feição; as propriedades ficam como vieram."""
        config = self.settings.LAYERS[layer_name]
        if not config.source_crs:
            return

        geometries = gpd.GeoSeries(
            [shape(item["geometry"]) if item.get("geometry") else None for item in items],
            crs=config.source_crs,
        )
        if not needs_reprojection(geometries):
            return

        logger.info(f"🗺️ Reprojetando {layer_name} de {config.source_crs} para {self.settings.TARGET_CRS}...")
        geometries = geometries.to_crs(self.settings.TARGET_CRS)
        for item, geometry in zip(items, geometries):
            if geometry is not None:
                item["geometry"] = json.loads(shapely.to_geojson(geometry))
        logger.info("Reprojeção concluída!")

    async def load(self, layer_name: str) -> FeatureStore:
        """
        Baixa/lê o GeoJSON de uma camada e monta o FeatureStore com o estilo padrão.
        Qualquer falha vira LayerLoadError (com a mensagem para o usuário).
        """
        if layer_name not in self.settings.LAYERS:
            raise UnknownLayerError(layer_name)

        config = self.settings.LAYERS[layer_name]
        source = self.settings.layer_source(layer_name)
        logger.info(f"🌍 Carregando camada {layer_name} de {source}...")

        try:
            content = await self._read_source(source)
        except httpx.HTTPStatusError as e:
            logger.error(f"Erro HTTP ao carregar {layer_name}: {e.response.status_code}")
            raise LayerLoadError(layer_name, f"HTTP error! status: {e.response.status_code}", config.file) from e
        except (httpx.HTTPError, OSError) as e:
            logger.error(f"Erro ao ler fonte de {layer_name}: {e}")
            raise LayerLoadError(layer_name, str(e), config.file) from e

        try:
            items = parse_feature_collection(content)
            self._reproject(layer_name, items)
        except Exception as e:
            logger.error(f"Erro ao ler GeoJSON de {layer_name}: {e}")
            raise LayerLoadError(layer_name, str(e), config.file) from e

        store = FeatureStore(layer=layer_name, label_attribute=config.label_attribute)
        for index, item in enumerate(items):
            feature = StoredFeature(
                feature_id=index,
                geometry=item.get("geometry"),
                properties=item.get("properties") or {},
                style=None,
            )
            feature.style = self.policy.default_style(layer_name, feature)
            store.features.append(feature)

        logger.info(f"✅ Camada {layer_name} carregada com {len(store)} feições")
        return store
