# natividade_map/services/thematic/state.py
from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class ThematicState:
    """
    Atributo ativo + quebras + paleta do mapa temático.
    Imutável: o controlador troca o objeto inteiro de uma vez, assim quem lê
    (hover, legenda) nunca vê atributo de um apply com quebras de outro.
    """
    attribute: Optional[str] = None
    breaks: Tuple[float, ...] = ()
    palette: Tuple[str, ...] = ()

    @property
    def active(self) -> bool:
        return self.attribute is not None
