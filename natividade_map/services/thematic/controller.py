# natividade_map/services/thematic/controller.py
import logging
from typing import List, Optional

from natividade_map.core.config import Settings
from natividade_map.core.exceptions import NoValidNumericDataError
from natividade_map.schemas.style import LegendView, PathStyle, StyleUpdate
from natividade_map.services.layers.store import FeatureStore, StoredFeature
from natividade_map.services.style_policy import StylePolicy
from natividade_map.services.thematic.classifier import calculate_breaks
from natividade_map.services.thematic.legend import build_legend, hidden_legend
from natividade_map.services.thematic.state import ThematicState

logger = logging.getLogger(__name__)


class ThematicController:
    """
    Ciclo de vida do mapa temático dos setores censitários (apply / reset).
    Único escritor de `state.thematic` e `state.legend`.

    Tudo aqui é síncrono: um apply termina por completo antes do próximo evento.
    """

    def __init__(self, settings: Settings, policy: StylePolicy, state):
        self.settings = settings
        self.policy = policy
        self.state = state

    @property
    def layer_name(self) -> str:
        return self.settings.THEMATIC_LAYER

    def _store(self) -> Optional[FeatureStore]:
        return self.state.layers.get(self.layer_name)

    def _restyle(self, store: FeatureStore, thematic: ThematicState) -> List[StyleUpdate]:
        updates = []
        for feature in store:
            feature.style = self.policy.resting_style(self.layer_name, feature, thematic)
            updates.append(StyleUpdate(layer=self.layer_name, feature_id=feature.feature_id, style=feature.style))
        return updates

    def apply(self, attribute: str) -> Optional[List[StyleUpdate]]:
        """
        Classifica os setores pelo atributo e recolore todos.
        Retorna None se a camada de setores não estiver carregada.
        """
        store = self._store()
        if store is None or not attribute:
            return None

        values = store.numeric_values(attribute)
        if not values:
            # Estado anterior intacto, nenhuma feição recolorida
            logger.warning(f"Atributo {attribute} sem valores numéricos em {self.layer_name}")
            raise NoValidNumericDataError(attribute)

        values.sort()
        breaks = calculate_breaks(values, self.settings.THEMATIC_CLASSES)
        thematic = ThematicState(
            attribute=attribute,
            breaks=tuple(breaks),
            palette=tuple(self.settings.THEMATIC_PALETTE),
        )
        logger.info(f"🎨 Mapa temático: {attribute} ({len(values)}/{len(store)} setores) quebras={breaks}")

        updates = self._restyle(store, thematic)
        self.state.thematic = thematic
        self.state.legend = build_legend(attribute, thematic.breaks, thematic.palette)
        return updates

    def reset(self) -> Optional[List[StyleUpdate]]:
        """Volta os setores para a cor fixa da camada e esconde a legenda."""
        store = self._store()
        if store is None:
            return None

        self.state.thematic = ThematicState()
        updates = self._restyle(store, self.state.thematic)
        self.state.legend = hidden_legend()
        return updates

    def restore(self, layer: str, feature: StoredFeature) -> PathStyle:
        """Estilo de repouso após o hover (temático tem precedência sobre o padrão)."""
        return self.policy.resting_style(layer, feature, self.state.thematic)

    @property
    def legend(self) -> LegendView:
        return self.state.legend
