# natividade_map/services/formatting.py
# Helpers de formatação numérica no padrão pt-BR (1.234,5)
from decimal import ROUND_HALF_UP, Decimal


def _pt_number(x: float, nd: int) -> str:
    # Arredonda a forma decimal mais curta do número, empate para longe do zero (2,05 -> 2,1)
    d = Decimal(repr(float(x))).quantize(Decimal(10) ** -nd, rounding=ROUND_HALF_UP)
    s = f"{d:,.{nd}f}"
    return s.replace(",", "TEMP").replace(".", ",").replace("TEMP", ".")


def format_fixed(x: float, nd: int) -> str:
    """Sempre `nd` casas decimais (ex: área em km²)."""
    return _pt_number(x, nd)


def format_max(x: float, max_nd: int) -> str:
    """No máximo `max_nd` casas decimais, sem zeros à direita (como toLocaleString)."""
    s = _pt_number(x, max_nd)
    if "," in s:
        s = s.rstrip("0").rstrip(",")
    if s in ("-0", ""):
        s = "0"
    return s


def format_integer(x: float) -> str:
    return _pt_number(x, 0)
