# natividade_map/services/style_policy.py
from natividade_map.core.config import Settings
from natividade_map.schemas.style import PathStyle
from natividade_map.services.layers.store import StoredFeature
from natividade_map.services.thematic.colors import color_for_value
from natividade_map.services.thematic.state import ThematicState

WHITE = "#ffffff"
THEMATIC_BORDER = "#333333"


class StylePolicy:
    """
    Decide o estilo de repouso de cada feição.
    Precedência: temático (camada de setores com atributo ativo) > estilo fixo da camada.
    """

    def __init__(self, settings: Settings):
        self.settings = settings

    def default_style(self, layer: str, feature: StoredFeature) -> PathStyle:
        config = self.settings.LAYERS[layer]

        if feature.is_point:
            return PathStyle(
                fill_color=config.color,
                color=WHITE,
                weight=2,
                opacity=1,
                fill_opacity=0.7,
                radius=6,
            )

        return PathStyle(
            fill_color=config.color,
            color=config.border_color or config.color,
            weight=2,
            opacity=1,
            fill_opacity=0.3,
            dash_array="",
        )

    def thematic_style(self, feature: StoredFeature, thematic: ThematicState) -> PathStyle:
        value = feature.value(thematic.attribute)
        return PathStyle(
            fill_color=color_for_value(
                value, thematic.breaks, thematic.palette, self.settings.NO_DATA_COLOR
            ),
            color=THEMATIC_BORDER,
            weight=1,
            opacity=1,
            fill_opacity=0.8,
        )

    def resting_style(self, layer: str, feature: StoredFeature, thematic: ThematicState) -> PathStyle:
        if thematic.active and layer == self.settings.THEMATIC_LAYER:
            return self.thematic_style(feature, thematic)
        return self.default_style(layer, feature)

    def hover_style(self, feature: StoredFeature) -> PathStyle:
        # Mantém o preenchimento atual, só destaca a borda
        current = feature.style
        update = {"weight": 3, "color": WHITE, "dash_array": ""}
        if feature.is_point:
            update["radius"] = 8
        return current.model_copy(update=update)
