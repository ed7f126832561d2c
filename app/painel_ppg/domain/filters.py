"""Configuração de filtro compartilhada pelos painéis.

Responsabilidades:
- Validar as facetas escolhidas pelo usuário
- Interpretar limites de ano de forma tolerante
- Interpretar o limiar do filtro de duração
"""

import math
import re
from typing import Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field

from painel_ppg.domain.entities import Curso

_PADRAO_INTEIRO = re.compile(r"^\s*([+-]?\d+)")
_PADRAO_DECIMAL = re.compile(r"^\s*([+-]?(\d+(\.\d*)?|\.\d+))")

Todos = Literal["todos"]


def converter_ano(valor) -> Optional[int]:
    """Converte um limite de ano em inteiro, ou None quando não numérico."""
    if isinstance(valor, bool):
        return None
    if isinstance(valor, int):
        return valor
    if isinstance(valor, float):
        return None if math.isnan(valor) else int(valor)
    if isinstance(valor, str):
        correspondencia = _PADRAO_INTEIRO.match(valor)
        if correspondencia:
            return int(correspondencia.group(1))
    return None


class ConfiguracaoFiltro(BaseModel):
    """Facetas escolhidas pelo usuário em um painel.

    Limites de ano não numéricos valem como "sem limite". O filtro de
    duração só fica ativo com tipo diferente de "nenhum" e limiar numérico.
    """

    model_config = ConfigDict(frozen=True)

    ano_inicio: Optional[Union[int, str]] = None
    ano_fim: Optional[Union[int, str]] = None
    curso: Union[Todos, Curso] = "todos"
    status: str = "todos"
    orientador: str = "todos"
    bolsista: Literal["todos", "sim", "nao"] = "todos"
    tipo_duracao: Literal["nenhum", "maior", "menor"] = "nenhum"
    duracao_meses: Optional[Union[float, str]] = Field(None, description="Limiar em meses do filtro de duração")

    def limites_ano(self) -> Tuple[float, float]:
        """Retorna (início, fim) com infinitos no lugar de limites ausentes."""
        inicio = converter_ano(self.ano_inicio)
        fim = converter_ano(self.ano_fim)
        return (
            inicio if inicio is not None else -math.inf,
            fim if fim is not None else math.inf,
        )

    def intervalo_fechado(self) -> Optional[Tuple[int, int]]:
        """Retorna (início, fim) inteiros, ou None se algum limite faltar ou início > fim."""
        inicio = converter_ano(self.ano_inicio)
        fim = converter_ano(self.ano_fim)
        if inicio is None or fim is None or inicio > fim:
            return None
        return inicio, fim

    def limiar_duracao(self) -> Optional[float]:
        """Retorna o limiar do filtro de duração, ou None quando o filtro está inativo."""
        if self.tipo_duracao == "nenhum" or self.duracao_meses is None:
            return None
        if isinstance(self.duracao_meses, float):
            return None if math.isnan(self.duracao_meses) else self.duracao_meses
        correspondencia = _PADRAO_DECIMAL.match(str(self.duracao_meses))
        if not correspondencia:
            return None
        return float(correspondencia.group(1))
