# natividade_map/services/presentation.py
import math
from typing import Any, Iterable, Optional

from natividade_map.schemas.style import AttributeTable, PopupContent, PopupRow
from natividade_map.services.formatting import format_fixed, format_integer, format_max
from natividade_map.services.layers.store import StoredFeature, to_number

# Atributos exibidos no popup (ordem de exibição)
POPUP_LABELS = {
    "CD_SETOR": "Código do Setor",
    "NM_MUN": "Município",
    "NM_DIST": "Distrito",
    "NM_BAIRRO": "Bairro",
    "AREA_KM2": "Área (km²)",
    "v0001": "População Total",
    "v0002": "Domicílios Particulares",
    "v0003": "Domicílios Ocupados",
    "v0004": "Domicílios Vagos",
    "v0005": "Moradores por Domicílio",
    "v0006": "Área Média (km²)",
    "v0007": "Número de Residências",
    "NÚMERO DE RESIDÊNCIAS POR SETOR": "Número de Residências",
    "RENDIMENTO NOMINAL MÉDIO POR SETOR": "Renda Média (R$)",
}

# Rótulos amigáveis da tabela de atributos (todas as colunas do setor)
TABLE_LABELS = {
    "CD_SETOR": "Código do Setor",
    "CD_REGIAO": "Código da Região",
    "NM_REGIAO": "Nome da Região",
    "CD_UF": "Código da UF",
    "NM_UF": "Nome da UF",
    "CD_MUN": "Código do Município",
    "NM_MUN": "Nome do Município",
    "CD_DIST": "Código do Distrito",
    "NM_DIST": "Nome do Distrito",
    "CD_SUBDIST": "Código do Subdistrito",
    "NM_SUBDIST": "Nome do Subdistrito",
    "CD_BAIRRO": "Código do Bairro",
    "NM_BAIRRO": "Nome do Bairro",
    "CD_RGINT": "Código da Região Intermediária",
    "NM_RGINT": "Nome da Região Intermediária",
    "CD_RGI": "Código da Região Imediata",
    "NM_RGI": "Nome da Região Imediata",
    "CD_CONCURB": "Código da Concentração Urbana",
    "NM_CONCURB": "Nome da Concentração Urbana",
    "AREA_KM2": "Área (km²)",
    "v0001": "População Total",
    "v0002": "Domicílios Particulares Permanentes",
    "v0003": "Domicílios Particulares Ocupados",
    "v0004": "Domicílios Particulares Vagos",
    "v0005": "Moradores por Domicílio",
    "v0006": "Área Média por Domicílio (km²)",
    "v0007": "Número de Residências",
    "NÚMERO DE RESIDÊNCIAS POR SETOR": "Número de Residências",
    "RENDIMENTO NOMINAL MÉDIO POR SETOR": "Renda Média (R$)",
    "Utiliza rede geral de distribuição": "Água: Rede Geral",
    "Utiliza poço profundo ou artesiano": "Água: Poço Artesiano",
    "Utiliza poço raso, freático ou cacimba": "Água: Poço Raso",
    "Utiliza fonte, nascente ou mina": "Água: Nascente",
    "Rede geral ou pluvial": "Esgoto: Rede Geral",
    "fossa séptica ou fossa filtro ligada à rede": "Esgoto: Fossa Séptica (ligada)",
    "fossa séptica ou fossa filtro não ligada à rede": "Esgoto: Fossa Séptica (não ligada)",
    "fossa rudimentar ou buraco": "Esgoto: Fossa Rudimentar",
    "vala": "Esgoto: Vala",
    "rio, lago, córrego ou mar": "Esgoto: Rio/Lago",
    "Lixo coletado no domicílio por serviço de limpeza": "Lixo: Coletado",
    "Lixo queimado na propriedade": "Lixo: Queimado",
    "Lixo enterrado na propriedade": "Lixo: Enterrado",
}

AREA_KEYS = ("AREA_KM2", "v0006")
RATIO_KEYS = ("v0005",)


def _is_blank(value: Any) -> bool:
    if value is None or value == "":
        return True
    return isinstance(value, float) and math.isnan(value)


def format_value(key: str, value: Any) -> str:
    """Formata um valor de atributo para exibição (padrão pt-BR)."""
    number = to_number(value)

    if key in AREA_KEYS and number is not None:
        return format_fixed(number, 4)
    if key in RATIO_KEYS and number is not None:
        return format_fixed(number, 1)

    # Texto fica como veio: códigos (CD_SETOR) não recebem separador de milhar
    if isinstance(value, (int, float)) and not isinstance(value, bool) and number is not None:
        return format_integer(number) if number.is_integer() else format_max(number, 3)
    return str(value)


def popup_title(feature: StoredFeature) -> str:
    district = feature.text("NM_DIST")
    if district:
        return district

    neighborhood = feature.text("NM_BAIRRO")
    if neighborhood and neighborhood != ".":
        return neighborhood

    sector = feature.text("CD_SETOR")
    if sector:
        return f"Setor {sector}"
    return "Informações"


def build_popup(
    feature: StoredFeature,
    selected: Optional[Iterable[str]] = None,
    lat: Optional[float] = None,
    lng: Optional[float] = None,
) -> PopupContent:
    """
    Conteúdo do popup. `selected` restringe os atributos (usado nos setores);
    None mostra todos os atributos conhecidos.
    """
    allowed = set(selected) if selected is not None else None

    rows = []
    for key, label in POPUP_LABELS.items():
        if allowed is not None and key not in allowed:
            continue
        value = feature.properties.get(key)
        if _is_blank(value):
            continue
        rows.append(PopupRow(label=label, value=format_value(key, value)))

    return PopupContent(title=popup_title(feature), rows=rows, lat=lat, lng=lng)


def build_attribute_table(feature: StoredFeature) -> AttributeTable:
    rows = []
    for key, value in feature.properties.items():
        if key == "geometry":
            continue
        label = TABLE_LABELS.get(key, key)
        formatted = "-" if _is_blank(value) else format_value(key, value)
        rows.append(PopupRow(label=label, value=formatted))
    return AttributeTable(rows=rows)
