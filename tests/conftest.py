"""Pytest configuration and fixtures."""

import json

import pytest

from natividade_map.core.config import Settings
from natividade_map.services.layers.store import FeatureStore, StoredFeature
from natividade_map.services.map_controller import MapController
from natividade_map.services.style_policy import StylePolicy

SECTOR_VALUES = [10, 20, 30, 40, 50, 60, 70, 80, 90, 100]


def square(x: float, y: float, size: float = 0.01) -> dict:
    return {
        "type": "Polygon",
        "coordinates": [[[x, y], [x + size, y], [x + size, y + size], [x, y + size], [x, y]]],
    }


def feature_collection(features: list) -> dict:
    return {"type": "FeatureCollection", "features": features}


def sector_features() -> list:
    features = []
    for i, population in enumerate(SECTOR_VALUES):
        features.append({
            "type": "Feature",
            "geometry": square(-41.99 + i * 0.01, -21.05),
            "properties": {
                "CD_SETOR": f"33034010500000{i}",
                "NM_MUN": "Natividade",
                "NM_DIST": "Natividade",
                "AREA_KM2": 0.123456 * (i + 1),
                "v0001": population,
                "v0002": (i + 1) * 1000,
                "texto": "sem dado",
            },
        })
    # Setor sem população informada
    features.append({
        "type": "Feature",
        "geometry": square(-41.89, -21.05),
        "properties": {
            "CD_SETOR": "330340105000099",
            "NM_MUN": "Natividade",
            "NM_DIST": None,
            "AREA_KM2": 0.5,
            "v0001": None,
            "v0002": 500,
            "texto": "sem dado",
        },
    })
    return features


def write_geojson(path, features):
    path.write_text(json.dumps(feature_collection(features)), encoding="utf-8")


@pytest.fixture
def data_dir(tmp_path):
    write_geojson(tmp_path / "setores1_nat.geojson", sector_features())
    write_geojson(tmp_path / "bairros_nat.geojson", [
        {"type": "Feature", "geometry": square(-42.0, -21.1, 0.05), "properties": {"NM_DIST": "Natividade"}},
        {"type": "Feature", "geometry": square(-41.9, -21.1, 0.05), "properties": {"NM_DIST": "Ourânia"}},
    ])
    write_geojson(tmp_path / "residencias_nat.geojson", [
        {"type": "Feature", "geometry": {"type": "Point", "coordinates": [-41.97, -21.04]}, "properties": {"v0007": 3}},
        {"type": "Feature", "geometry": {"type": "Point", "coordinates": [-41.96, -21.03]}, "properties": {"v0007": 5}},
    ])
    # Déficit habitacional em UTM 23S (metros)
    write_geojson(tmp_path / "deficit_hab_nat.geojson", [
        {
            "type": "Feature",
            "geometry": {
                "type": "Polygon",
                "coordinates": [[
                    [800000.0, 7670000.0], [801000.0, 7670000.0],
                    [801000.0, 7671000.0], [800000.0, 7671000.0], [800000.0, 7670000.0],
                ]],
            },
            "properties": {"deficit": 12},
        },
    ])
    # urb_rur fica ausente de propósito (falha de carregamento)
    return tmp_path


@pytest.fixture
def settings(data_dir):
    return Settings(DATA_DIR=data_dir)


@pytest.fixture
def policy(settings):
    return StylePolicy(settings)


@pytest.fixture
def controller(settings):
    return MapController(settings)


def build_store(policy: StylePolicy, layer: str, properties: list, point: bool = False) -> FeatureStore:
    """FeatureStore em memória, sem passar pelo geopandas."""
    store = FeatureStore(layer=layer)
    for index, props in enumerate(properties):
        if point:
            geometry = {"type": "Point", "coordinates": [-41.97, -21.04]}
        else:
            geometry = square(-41.99 + index * 0.01, -21.05)
        feature = StoredFeature(feature_id=index, geometry=geometry, properties=props, style=None)
        feature.style = policy.default_style(layer, feature)
        store.features.append(feature)
    return store


@pytest.fixture
def sector_store(policy):
    return build_store(policy, "setores", [f["properties"] for f in sector_features()])
