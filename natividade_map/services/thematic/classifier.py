# natividade_map/services/thematic/classifier.py
from typing import Iterable, List


def calculate_breaks(values: Iterable[float], classes: int) -> List[float]:
    """
    Calcula `classes` limiares crescentes para o mapa temático.

    A interface chama isso de "quebras naturais (Jenks)", mas o cálculo é um
    quantil por índice: ordena os valores, usa passo = n // classes e pega
    sorted[i * passo] para i = 1..classes-1; o último limiar é sempre o máximo.
    Não minimiza a variância dentro das classes. É determinístico e O(n log n).

    Com poucos valores (n < classes) o passo vira 0 e os limiares se repetem.
    """
    ordered = sorted(values)
    if not ordered:
        raise ValueError("calculate_breaks exige pelo menos um valor")
    if classes < 1:
        raise ValueError("classes deve ser >= 1")

    last = len(ordered) - 1
    step = len(ordered) // classes

    breaks = [ordered[min(i * step, last)] for i in range(1, classes)]
    breaks.append(ordered[last])
    return breaks
