# natividade_map/services/thematic/colors.py
import math
from typing import Any, Sequence

NO_DATA_COLOR = "#cccccc"


def color_for_value(
    value: Any,
    breaks: Sequence[float],
    palette: Sequence[str],
    no_data_color: str = NO_DATA_COLOR,
) -> str:
    """
    Cor da primeira classe cujo limiar é >= valor.
    Acima de todos os limiares cai na última cor; sem dado (None/NaN) usa a cor neutra.
    """
    if value is None or isinstance(value, bool) or not isinstance(value, (int, float)):
        return no_data_color
    if math.isnan(value):
        return no_data_color

    for i, limit in enumerate(breaks):
        if value <= limit:
            return palette[i]
    return palette[-1]
