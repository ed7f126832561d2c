"""Indicadores de avaliação do programa.

Responsabilidades:
- Calcular FOR, DED, D3A, ADE1, ADE2 e ATI para o intervalo de anos do filtro
- Construir o mapa (docente, ano) -> categoria usado nas junções
- Manter os indicadores ainda não calculados como zeros explícitos
"""

from collections import OrderedDict
from typing import Callable, Dict, Iterable, Optional, Sequence, Tuple

from painel_ppg.config.settings import Configuracoes
from painel_ppg.domain.entities import (
    CategoriaDocente,
    ColecoesPrograma,
    Docente,
    Egresso,
    StatusEgresso,
    Turma,
)
from painel_ppg.domain.filters import ConfiguracaoFiltro
from painel_ppg.util.datas import obter_ano

ChaveDocente = Tuple[str, int]

PERMANENTE = CategoriaDocente.PERMANENTE.value
COLABORADOR = CategoriaDocente.COLABORADOR.value


class CalculadoraIndicadores:
    """Calcula os indicadores de credenciamento.

    Responsabilidades:
    - Razões em [0, 1] com 0 quando o denominador é zero
    - ATI como valor absoluto (turmas por docente permanente, escala 60)
    - Junções por (nome, ano) sobre todos os docentes, sem filtro de ano
    """

    @staticmethod
    def mapa_categorias(docentes: Iterable[Docente]) -> Dict[ChaveDocente, str]:
        """Constrói o mapa (nome, ano) -> categoria em maiúsculas.

        Registros sem nome, ano ou categoria são ignorados. Em chaves
        repetidas prevalece o último registro.

        Parâmetros:
        - docentes (Iterable[Docente]): todos os registros anuais de docentes

        Retorno:
        - dict[(str, int), str]: categoria por docente e ano
        """
        mapa = {}
        for docente in docentes:
            if docente.nome and docente.ano and docente.categoria:
                mapa[(docente.nome.strip(), docente.ano)] = docente.categoria.strip().upper()
        return mapa

    @staticmethod
    def _docentes_no_intervalo(docentes: Iterable[Docente], filtro: ConfiguracaoFiltro) -> list:
        inicio, fim = filtro.limites_ano()
        return [d for d in docentes if inicio <= d.ano <= fim]

    @staticmethod
    def _eh_permanente(docente: Docente) -> bool:
        return (docente.categoria or "").upper() == PERMANENTE

    @staticmethod
    def _razao_permanentes(
        docentes: Iterable[Docente], filtro: ConfiguracaoFiltro, criterio: Callable[[Docente], bool]
    ) -> float:
        relevantes = CalculadoraIndicadores._docentes_no_intervalo(docentes, filtro)
        permanentes = [d for d in relevantes if CalculadoraIndicadores._eh_permanente(d)]
        total = len({d.nome for d in permanentes})
        if total == 0:
            return 0
        return len({d.nome for d in permanentes if criterio(d)}) / total

    @staticmethod
    def calcular_for(docentes: Iterable[Docente], filtro: ConfiguracaoFiltro) -> float:
        """Fração de permanentes com bolsa PQ/DT."""
        return CalculadoraIndicadores._razao_permanentes(docentes, filtro, lambda d: d.bolsa_pqdt)

    @staticmethod
    def calcular_ded(docentes: Iterable[Docente], filtro: ConfiguracaoFiltro) -> float:
        """Fração de permanentes com dedicação exclusiva ao programa."""
        return CalculadoraIndicadores._razao_permanentes(docentes, filtro, lambda d: d.dedicacao_exclusiva_ppg)

    @staticmethod
    def calcular_d3a(docentes: Iterable[Docente], filtro: ConfiguracaoFiltro) -> float:
        """Fração de permanentes que lecionaram, publicaram e concluíram orientação no quadriênio."""
        return CalculadoraIndicadores._razao_permanentes(
            docentes,
            filtro,
            lambda d: (
                d.lecionou_disciplina_quadrienio
                and d.participou_publicacao_quadrienio
                and d.teve_orientacao_concluida_quadrienio
            ),
        )

    @staticmethod
    def _contar_turmas_por_categoria(turmas: Iterable[Turma], mapa: Dict[ChaveDocente, str], categoria: str) -> int:
        contagem = 0
        for turma in turmas:
            if not turma.docente or not turma.ano:
                continue
            if mapa.get((turma.docente.strip(), turma.ano)) == categoria:
                contagem += 1
        return contagem

    @staticmethod
    def calcular_ade1(turmas: Sequence[Turma], docentes: Iterable[Docente], filtro: ConfiguracaoFiltro) -> float:
        """Fração das turmas do intervalo ministradas por docentes colaboradores.

        Exige intervalo fechado e válido; caso contrário retorna 0.
        """
        intervalo = filtro.intervalo_fechado()
        if intervalo is None:
            return 0
        inicio, fim = intervalo

        relevantes = [t for t in turmas if inicio <= t.ano <= fim]
        if not relevantes:
            return 0

        mapa = CalculadoraIndicadores.mapa_categorias(docentes)
        return CalculadoraIndicadores._contar_turmas_por_categoria(relevantes, mapa, COLABORADOR) / len(relevantes)

    @staticmethod
    def calcular_ade2(egressos: Iterable[Egresso], docentes: Iterable[Docente], filtro: ConfiguracaoFiltro) -> float:
        """Fração das defesas do intervalo orientadas por docentes colaboradores."""
        inicio, fim = filtro.limites_ano()

        relevantes = []
        for egresso in egressos:
            if egresso.status is not StatusEgresso.DEFENDIDO:
                continue
            ano = obter_ano(egresso.ano_defesa)
            if ano and inicio <= ano <= fim:
                relevantes.append((egresso, ano))

        if not relevantes:
            return 0

        mapa = CalculadoraIndicadores.mapa_categorias(docentes)
        colaboradores = sum(
            1
            for egresso, ano in relevantes
            if egresso.orientador and mapa.get((egresso.orientador.strip(), ano)) == COLABORADOR
        )
        return colaboradores / len(relevantes)

    @staticmethod
    def calcular_ati(turmas: Sequence[Turma], docentes: Sequence[Docente], filtro: ConfiguracaoFiltro) -> float:
        """Média anual de turmas de permanentes por docente permanente, na escala do fator ATI.

        Parâmetros:
        - turmas (Sequence[Turma]): todas as turmas
        - docentes (Sequence[Docente]): todos os registros anuais de docentes
        - filtro (ConfiguracaoFiltro): filtro com intervalo fechado de anos

        Retorno:
        - float: (turmas de permanentes / anos / permanentes) * 60, ou 0
        """
        intervalo = filtro.intervalo_fechado()
        if intervalo is None:
            return 0
        inicio, fim = intervalo
        anos = fim - inicio + 1

        permanentes = {
            d.nome for d in docentes if inicio <= d.ano <= fim and CalculadoraIndicadores._eh_permanente(d)
        }
        if not permanentes:
            return 0

        relevantes = [t for t in turmas if inicio <= t.ano <= fim]
        if not relevantes:
            return 0

        mapa = CalculadoraIndicadores.mapa_categorias(docentes)
        turmas_permanentes = CalculadoraIndicadores._contar_turmas_por_categoria(relevantes, mapa, PERMANENTE)
        return (turmas_permanentes / anos / len(permanentes)) * Configuracoes.FATOR_ATI

    # Indicadores ainda não calculados pelo programa.

    @staticmethod
    def calcular_atg1(*_args) -> float:
        return 0

    @staticmethod
    def calcular_atg2(*_args) -> float:
        return 0

    @staticmethod
    def calcular_ori(*_args) -> float:
        return 0

    @staticmethod
    def calcular_pdo(*_args) -> float:
        return 0

    @staticmethod
    def calcular_dpi_docente(*_args) -> float:
        return 0

    @staticmethod
    def calcular_dpi_discente_doutorado(*_args) -> float:
        return 0

    @staticmethod
    def calcular_dpi_discente_mestrado(*_args) -> float:
        return 0

    @staticmethod
    def calcular_dpd(*_args) -> float:
        return 0

    @staticmethod
    def calcular_dtd(*_args) -> float:
        return 0

    @staticmethod
    def calcular_ader(*_args) -> float:
        return 0

    @staticmethod
    def calcular_todos(colecoes: ColecoesPrograma, filtro: Optional[ConfiguracaoFiltro] = None) -> "OrderedDict[str, float]":
        """Calcula todos os indicadores na ordem de exibição do painel.

        Parâmetros:
        - colecoes (ColecoesPrograma): coleções completas, sem outros filtros
        - filtro (ConfiguracaoFiltro | None): apenas o intervalo de anos é usado

        Retorno:
        - OrderedDict[str, float]: valor por sigla do indicador
        """
        filtro = filtro or ConfiguracaoFiltro()
        docentes = colecoes.docentes
        turmas = colecoes.turmas
        calc = CalculadoraIndicadores

        return OrderedDict(
            [
                ("FOR", calc.calcular_for(docentes, filtro)),
                ("DED", calc.calcular_ded(docentes, filtro)),
                ("D3A", calc.calcular_d3a(docentes, filtro)),
                ("ADE1", calc.calcular_ade1(turmas, docentes, filtro)),
                ("ADE2", calc.calcular_ade2(colecoes.egressos, docentes, filtro)),
                ("ATI", calc.calcular_ati(turmas, docentes, filtro)),
                ("ATG1", calc.calcular_atg1()),
                ("ATG2", calc.calcular_atg2()),
                ("ORI", calc.calcular_ori()),
                ("PDO", calc.calcular_pdo()),
                ("DPI docente", calc.calcular_dpi_docente()),
                ("DPI discente doutorado", calc.calcular_dpi_discente_doutorado()),
                ("DPI discente mestrado", calc.calcular_dpi_discente_mestrado()),
                ("DPD", calc.calcular_dpd()),
                ("DTD", calc.calcular_dtd()),
                ("ADER", calc.calcular_ader()),
            ]
        )
