# natividade_map/services/layers/store.py
import math
import re
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional

from natividade_map.core.exceptions import FeatureNotFoundError
from natividade_map.schemas.geo import Feature, FeatureCollection
from natividade_map.schemas.style import PathStyle

# Prefixo numérico aceito (mesma regra do parseFloat do navegador: "12 hab" -> 12)
_NUMERIC_PREFIX = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")


def to_number(value: Any) -> Optional[float]:
    """
    Converte um valor de atributo em número finito.
    Retorna None para ausente, nulo, booleano, texto não numérico, NaN ou infinito.
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        match = _NUMERIC_PREFIX.match(value.strip())
        if not match:
            return None
        number = float(match.group(0))
    else:
        return None

    return number if math.isfinite(number) else None


def is_numeric(value: Any) -> bool:
    """Número finito ou texto que é inteiro um número ("12" sim, "12 hab" não)."""
    if isinstance(value, str):
        try:
            return math.isfinite(float(value.strip()))
        except ValueError:
            return False
    return to_number(value) is not None


@dataclass
class StoredFeature:
    feature_id: int
    geometry: Optional[Dict[str, Any]]
    properties: Dict[str, Any]
    style: PathStyle

    @property
    def geometry_type(self) -> Optional[str]:
        return (self.geometry or {}).get("type")

    @property
    def is_point(self) -> bool:
        return self.geometry_type in ("Point", "MultiPoint")

    def has(self, attribute: str) -> bool:
        return attribute in self.properties

    def value(self, attribute: str) -> Optional[float]:
        """Valor numérico do atributo, ou None se ausente/não numérico."""
        return to_number(self.properties.get(attribute))

    def text(self, attribute: str) -> Optional[str]:
        """Valor textual do atributo; None para ausente, nulo ou vazio."""
        raw = self.properties.get(attribute)
        if raw is None:
            return None
        if isinstance(raw, float) and math.isnan(raw):
            return None
        text = str(raw)
        return text if text != "" else None


@dataclass
class FeatureStore:
    """
    Feições de UMA camada já carregada.
    A geometria só muda no carregamento; depois disso apenas o estilo é reescrito.
    """
    layer: str
    features: List[StoredFeature] = field(default_factory=list)
    label_attribute: Optional[str] = None

    def __iter__(self) -> Iterator[StoredFeature]:
        return iter(self.features)

    def __len__(self) -> int:
        return len(self.features)

    def get(self, feature_id: int) -> StoredFeature:
        if 0 <= feature_id < len(self.features):
            return self.features[feature_id]
        raise FeatureNotFoundError(self.layer, feature_id)

    def numeric_values(self, attribute: str) -> List[float]:
        values = []
        for feature in self.features:
            number = feature.value(attribute)
            if number is not None:
                values.append(number)
        return values

    def numeric_attributes(self) -> List[str]:
        """
        Atributos oferecidos no mapa temático: a maioria dos valores preenchidos
        precisa ser numérica por inteiro ("2º Distrito" não conta).
        """
        filled: Dict[str, int] = {}
        numeric: Dict[str, int] = {}
        for feature in self.features:
            for key, raw in feature.properties.items():
                if raw is None or raw == "":
                    continue
                filled[key] = filled.get(key, 0) + 1
                if is_numeric(raw):
                    numeric[key] = numeric.get(key, 0) + 1
        return [key for key, total in filled.items() if numeric.get(key, 0) * 2 > total]

    def to_feature_collection(self) -> FeatureCollection:
        features = []
        for feature in self.features:
            label = feature.text(self.label_attribute) if self.label_attribute else None
            features.append(Feature(
                id=feature.feature_id,
                geometry=feature.geometry,
                properties=feature.properties,
                style=feature.style,
                label=label,
            ))
        return FeatureCollection(name=self.layer, features=features)
