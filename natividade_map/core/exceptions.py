# natividade_map/core/exceptions.py


class MapError(Exception):
    """Base de todos os erros do mapa."""


class LayerLoadError(MapError):
    """Falha de rede ou de parsing ao carregar o GeoJSON de uma camada."""

    def __init__(self, layer: str, message: str, source: str = ""):
        self.layer = layer
        self.message = message
        self.source = source
        super().__init__(f"{layer}: {message}")

    @property
    def alert(self) -> str:
        return (
            f"Erro ao carregar camada {self.layer}: {self.message}\n\n"
            f"Verifique se o arquivo {self.source} existe."
        )


class NoValidNumericDataError(MapError):
    def __init__(self, attribute: str):
        self.attribute = attribute
        super().__init__(f"Sem dados numéricos válidos para '{attribute}'")

    @property
    def alert(self) -> str:
        return "Não há dados numéricos válidos para este atributo."


# Erros de consulta: herdam de ValueError para virar 404 nas rotas
class UnknownLayerError(MapError, ValueError):
    def __init__(self, layer: str):
        self.layer = layer
        super().__init__(f"Camada desconhecida: {layer}")


class UnknownBasemapError(MapError, ValueError):
    def __init__(self, basemap: str):
        self.basemap = basemap
        super().__init__(f"Mapa base desconhecido: {basemap}")


class LayerNotLoadedError(MapError, ValueError):
    def __init__(self, layer: str):
        self.layer = layer
        super().__init__(f"Camada {layer} ainda não foi carregada")


class FeatureNotFoundError(MapError, ValueError):
    def __init__(self, layer: str, feature_id: int):
        self.layer = layer
        self.feature_id = feature_id
        super().__init__(f"Feição {feature_id} não encontrada em {layer}")
