# natividade_map/services/thematic/legend.py
from typing import Sequence

from natividade_map.schemas.style import LegendEntry, LegendView
from natividade_map.services.formatting import format_max


def build_legend(attribute: str, breaks: Sequence[float], palette: Sequence[str]) -> LegendView:
    """
    Uma entrada por classe: do limiar anterior até breaks[i], com a cor palette[i].
    A primeira classe começa em 0 e não no mínimo real dos dados.
    """
    entries = []
    start = 0.0
    for end, color in zip(breaks, palette):
        label = f"{format_max(start, 1)} - {format_max(end, 1)}"
        entries.append(LegendEntry(start=start, end=end, color=color, label=label))
        start = end

    return LegendView(visible=True, title=f"Legenda: {attribute}", entries=entries)


def hidden_legend() -> LegendView:
    return LegendView(visible=False)
