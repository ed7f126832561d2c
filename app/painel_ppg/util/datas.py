"""Utilitários de datas no formato brasileiro.

Responsabilidades:
- Converter textos dd/mm/aaaa em datas de calendário
- Extrair o ano de textos de data
- Calcular durações em meses (média de dias e meses de calendário)
"""

import re
from datetime import date, datetime
from typing import Any, Optional

from painel_ppg.config.settings import Configuracoes

_PADRAO_DATA_BR = re.compile(r"^(\d{2})/(\d{2})/(\d{4})$")
_PADRAO_DATA_IMPORTACAO = re.compile(r"^(\d{1,2})[/-](\d{1,2})[/-](\d{4})$")
_PADRAO_INTEIRO = re.compile(r"^\s*([+-]?\d+)")


def converter_data_br(texto: Optional[str]) -> Optional[date]:
    """Converte um texto dd/mm/aaaa em data.

    Parâmetros:
    - texto (str | None): data no formato dd/mm/aaaa

    Retorno:
    - date | None: data convertida ou None quando ausente, malformada
      ou inexistente no calendário (ex.: 31/02/2020)
    """
    if not isinstance(texto, str):
        return None

    correspondencia = _PADRAO_DATA_BR.match(texto.strip())
    if not correspondencia:
        return None

    dia, mes, ano = (int(parte) for parte in correspondencia.groups())
    try:
        return date(ano, mes, dia)
    except ValueError:
        return None


def obter_ano(texto: Optional[str]) -> Optional[int]:
    """Extrai o ano de um texto de data separado por barras.

    Mais permissivo que converter_data_br: dia e mês não são validados,
    basta que o texto tenha três partes e a última comece por um número.

    Parâmetros:
    - texto (str | None): data no formato dd/mm/aaaa

    Retorno:
    - int | None: ano extraído
    """
    if not isinstance(texto, str) or not texto:
        return None

    partes = texto.split("/")
    if len(partes) != 3:
        return None

    correspondencia = _PADRAO_INTEIRO.match(partes[2])
    if not correspondencia:
        return None
    return int(correspondencia.group(1))


def meses_entre(inicio: date, fim: date) -> float:
    """Diferença absoluta em dias dividida pelo mês médio (30.4375 dias)."""
    return abs((fim - inicio).days) / Configuracoes.DIAS_POR_MES


def meses_inteiros_entre(inicio: date, fim: date) -> int:
    """Conta meses de calendário completos entre duas datas.

    Parâmetros:
    - inicio (date): data inicial
    - fim (date): data final

    Retorno:
    - int: meses completos, nunca negativo
    """
    total = (fim.year - inicio.year) * 12 + (fim.month - inicio.month)
    if fim.day < inicio.day:
        total -= 1
    return max(0, total)


def formatar_data_br(valor: Any) -> Optional[str]:
    """Normaliza um valor de planilha para o texto dd/mm/aaaa.

    Parâmetros:
    - valor (Any): datetime/date, ou texto d/m/aaaa ou d-m-aaaa

    Retorno:
    - str | None: data formatada ou None quando não reconhecida
    """
    if isinstance(valor, (datetime, date)):
        return valor.strftime("%d/%m/%Y")

    if isinstance(valor, str):
        correspondencia = _PADRAO_DATA_IMPORTACAO.match(valor.strip())
        if correspondencia:
            dia, mes, ano = correspondencia.groups()
            return f"{int(dia):02d}/{int(mes):02d}/{ano}"

    return None
