# natividade_map/services/map_controller.py
import asyncio
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set

from natividade_map.core.config import Settings
from natividade_map.core.exceptions import (
    LayerLoadError,
    LayerNotLoadedError,
    NoValidNumericDataError,
    UnknownBasemapError,
    UnknownLayerError,
)
from natividade_map.schemas.events import (
    ApplyThematic,
    FeatureClick,
    HoverEnter,
    HoverExit,
    MapUpdate,
    PanelsView,
    ResetThematic,
    SelectBasemap,
    StateSnapshot,
    ThematicSnapshot,
    ToggleAttribute,
    ToggleLayer,
)
from natividade_map.schemas.style import LegendView, StyleUpdate
from natividade_map.services.layers.loader import LayerLoaderService
from natividade_map.services.layers.store import FeatureStore
from natividade_map.services.presentation import build_attribute_table, build_popup
from natividade_map.services.style_policy import StylePolicy
from natividade_map.services.thematic.controller import ThematicController
from natividade_map.services.thematic.state import ThematicState

logger = logging.getLogger(__name__)


@dataclass
class AppState:
    """Estado da aplicação inteira. Só o MapController (e o temático) escrevem aqui."""
    current_basemap: str
    selected_attributes: Set[str]
    layers: Dict[str, FeatureStore] = field(default_factory=dict)
    visible_layers: Set[str] = field(default_factory=set)
    loading_layers: Set[str] = field(default_factory=set)
    thematic: ThematicState = field(default_factory=ThematicState)
    legend: LegendView = field(default_factory=LegendView)
    panels: PanelsView = field(default_factory=PanelsView)
    notices: List[str] = field(default_factory=list)


class MapController:
    def __init__(self, settings: Settings, loader: Optional[LayerLoaderService] = None):
        self.settings = settings
        self.policy = StylePolicy(settings)
        self.loader = loader or LayerLoaderService(settings, self.policy)
        self.state = AppState(
            current_basemap=settings.DEFAULT_BASEMAP,
            selected_attributes=set(settings.DEFAULT_SELECTED_ATTRIBUTES),
        )
        self.thematic = ThematicController(settings, self.policy, self.state)
        self._pending: Dict[str, asyncio.Task] = {}

        self._handlers = {
            SelectBasemap: self.on_select_basemap,
            ToggleLayer: self.on_toggle_layer,
            ToggleAttribute: self.on_toggle_attribute,
            ApplyThematic: self.on_apply_thematic,
            ResetThematic: self.on_reset_thematic,
            HoverEnter: self.on_hover_enter,
            HoverExit: self.on_hover_exit,
            FeatureClick: self.on_feature_click,
        }

    # --- CARREGAMENTO ---

    async def load_layer(self, layer_name: str) -> FeatureStore:
        """
        Carrega uma camada uma única vez.
        Dois toggles simultâneos aguardam o mesmo carregamento em andamento.
        """
        if layer_name not in self.settings.LAYERS:
            raise UnknownLayerError(layer_name)
        if layer_name in self.state.layers:
            return self.state.layers[layer_name]

        task = self._pending.get(layer_name)
        if task is None:
            task = asyncio.ensure_future(self.loader.load(layer_name))
            self._pending[layer_name] = task
            self.state.loading_layers.add(layer_name)
        try:
            store = await task
        finally:
            self._pending.pop(layer_name, None)
            self.state.loading_layers.discard(layer_name)

        self.state.layers[layer_name] = store
        return store

    async def load_initial_layers(self):
        for layer_name in self.settings.INITIAL_LAYERS:
            try:
                await self.load_layer(layer_name)
            except LayerLoadError as e:
                logger.error(f"Erro ao carregar camadas iniciais: {e}")
                self.state.notices.append(e.alert)
                self.state.notices.append("Erro ao carregar camadas. Verifique o console para mais detalhes.")
                return
            if self.settings.LAYERS[layer_name].visible_by_default:
                self.state.visible_layers.add(layer_name)

    def get_store(self, layer_name: str) -> FeatureStore:
        if layer_name not in self.settings.LAYERS:
            raise UnknownLayerError(layer_name)
        store = self.state.layers.get(layer_name)
        if store is None:
            raise LayerNotLoadedError(layer_name)
        return store

    # --- DESPACHO DE EVENTOS ---

    async def dispatch(self, event) -> MapUpdate:
        handler = self._handlers.get(type(event))
        if handler is None:
            raise TypeError(f"Evento não suportado: {type(event).__name__}")

        result = handler(event)
        if asyncio.iscoroutine(result):
            result = await result
        return result

    def on_select_basemap(self, event: SelectBasemap) -> MapUpdate:
        if event.basemap not in self.settings.BASEMAPS:
            raise UnknownBasemapError(event.basemap)
        self.state.current_basemap = event.basemap
        return MapUpdate(basemap=event.basemap)

    async def on_toggle_layer(self, event: ToggleLayer) -> MapUpdate:
        layer_name = event.layer
        if layer_name not in self.settings.LAYERS:
            raise UnknownLayerError(layer_name)

        is_thematic_layer = layer_name == self.settings.THEMATIC_LAYER
        update = MapUpdate()

        if event.checked:
            try:
                await self.load_layer(layer_name)
            except LayerLoadError as e:
                logger.error(f"Erro ao carregar camada {layer_name}: {e}")
                update.alert = e.alert
                update.visible_layers = sorted(self.state.visible_layers)
                return update

            self.state.visible_layers.add(layer_name)
            if is_thematic_layer:
                self.state.panels = PanelsView(attribute_selector=True, thematic_panel=True)
                update.panels = self.state.panels
        else:
            self.state.visible_layers.discard(layer_name)
            if is_thematic_layer:
                self.state.panels = PanelsView()
                update.panels = self.state.panels
                styles = self.thematic.reset()
                if styles is not None:
                    update.styles = styles
                    update.legend = self.state.legend

        update.visible_layers = sorted(self.state.visible_layers)
        return update

    def on_toggle_attribute(self, event: ToggleAttribute) -> MapUpdate:
        if event.checked:
            self.state.selected_attributes.add(event.attribute)
        else:
            self.state.selected_attributes.discard(event.attribute)
        logger.debug(f"Atributos selecionados: {sorted(self.state.selected_attributes)}")
        return MapUpdate(selected_attributes=sorted(self.state.selected_attributes))

    def on_apply_thematic(self, event: ApplyThematic) -> MapUpdate:
        try:
            styles = self.thematic.apply(event.attribute)
        except NoValidNumericDataError as e:
            return MapUpdate(alert=e.alert)
        if styles is None:
            return MapUpdate()
        return MapUpdate(styles=styles, legend=self.state.legend)

    def on_reset_thematic(self, event: ResetThematic) -> MapUpdate:
        styles = self.thematic.reset()
        if styles is None:
            return MapUpdate()
        return MapUpdate(styles=styles, legend=self.state.legend)

    def on_hover_enter(self, event: HoverEnter) -> MapUpdate:
        feature = self.get_store(event.layer).get(event.feature_id)
        feature.style = self.policy.hover_style(feature)
        return MapUpdate(styles=[StyleUpdate(
            layer=event.layer,
            feature_id=feature.feature_id,
            style=feature.style,
            bring_to_front=not feature.is_point,
        )])

    def on_hover_exit(self, event: HoverExit) -> MapUpdate:
        feature = self.get_store(event.layer).get(event.feature_id)
        feature.style = self.thematic.restore(event.layer, feature)
        return MapUpdate(styles=[StyleUpdate(
            layer=event.layer, feature_id=feature.feature_id, style=feature.style
        )])

    def on_feature_click(self, event: FeatureClick) -> MapUpdate:
        feature = self.get_store(event.layer).get(event.feature_id)

        if event.layer == self.settings.THEMATIC_LAYER:
            popup = build_popup(feature, self.state.selected_attributes, event.lat, event.lng)
            return MapUpdate(popup=popup, table=build_attribute_table(feature))

        return MapUpdate(popup=build_popup(feature, None, event.lat, event.lng))

    # --- CONSULTAS ---

    def snapshot(self) -> StateSnapshot:
        thematic = self.state.thematic
        return StateSnapshot(
            basemap=self.state.current_basemap,
            loaded_layers=sorted(self.state.layers),
            visible_layers=sorted(self.state.visible_layers),
            loading_layers=sorted(self.state.loading_layers),
            selected_attributes=sorted(self.state.selected_attributes),
            thematic=ThematicSnapshot(
                attribute=thematic.attribute,
                breaks=list(thematic.breaks),
                palette=list(thematic.palette),
            ),
            legend=self.state.legend,
            panels=self.state.panels,
            notices=list(self.state.notices),
        )
