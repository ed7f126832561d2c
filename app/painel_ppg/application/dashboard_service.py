"""Serviço de composição do painel.

Responsabilidades:
- Aplicar o filtro às coleções do programa
- Reunir cartões, indicadores e séries dos painéis em um único resumo
- Recalcular tudo a cada chamada, sem cache
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from painel_ppg.application.aggregation_service import MotorAgregacao
from painel_ppg.application.duration_classifier import ClassificadorDuracao
from painel_ppg.application.filter_service import FiltroColecoes
from painel_ppg.application.indicator_service import CalculadoraIndicadores
from painel_ppg.domain.entities import ColecoesPrograma, Curso, StatusEgresso
from painel_ppg.domain.filters import ConfiguracaoFiltro


class ResumoPainel(BaseModel):
    """Valores consolidados consumidos pela camada de apresentação."""

    filtro: ConfiguracaoFiltro
    egressos: Dict[str, Any] = Field(default_factory=dict)
    projetos: Dict[str, int] = Field(default_factory=dict)
    indicadores: Dict[str, float] = Field(default_factory=dict)
    defesas_por_ano: List[Dict[str, int]] = Field(default_factory=list)
    turmas: Dict[str, Any] = Field(default_factory=dict)
    docentes: Dict[str, int] = Field(default_factory=dict)
    publicacoes: Dict[str, Any] = Field(default_factory=dict)
    alunos_regulares: Dict[str, Any] = Field(default_factory=dict)


class ServicoPainel:
    """Ponto de entrada da apresentação para os números do painel.

    Responsabilidades:
    - Combinar FiltroColecoes, MotorAgregacao e CalculadoraIndicadores
    - Manter os cartões de egressos independentes da faceta de curso
    """

    def __init__(self, classificador: Optional[ClassificadorDuracao] = None):
        """Inicializa o serviço.

        Parâmetros:
        - classificador (ClassificadorDuracao | None): classificador com data de referência
        """
        self.classificador = classificador or ClassificadorDuracao()

    def gerar_resumo(self, colecoes: ColecoesPrograma, filtro: Optional[ConfiguracaoFiltro] = None) -> ResumoPainel:
        """Gera o resumo completo do painel para o filtro informado.

        Parâmetros:
        - colecoes (ColecoesPrograma): coleções completas
        - filtro (ConfiguracaoFiltro | None): filtro ativo; None usa o filtro vazio

        Retorno:
        - ResumoPainel: cartões, indicadores e séries
        """
        filtro = filtro or ConfiguracaoFiltro()

        egressos = FiltroColecoes.filtrar_egressos(colecoes.egressos, filtro)
        egressos_cartoes = FiltroColecoes.filtrar_egressos_para_cartoes(colecoes.egressos, filtro)
        projetos = FiltroColecoes.filtrar_projetos(colecoes.projetos, filtro)
        turmas = FiltroColecoes.filtrar_turmas(colecoes.turmas, filtro)
        docentes = FiltroColecoes.filtrar_docentes(colecoes.docentes, filtro)
        periodicos = FiltroColecoes.filtrar_periodicos(colecoes.periodicos, filtro)
        conferencias = FiltroColecoes.filtrar_conferencias(colecoes.conferencias, filtro)
        alunos = FiltroColecoes.filtrar_alunos_regulares(colecoes.alunos_regulares, filtro, self.classificador)

        return ResumoPainel(
            filtro=filtro,
            egressos=self._resumo_egressos(egressos_cartoes),
            projetos={
                "total": len(projetos),
                "mestrandos": MotorAgregacao.somar("alunos_mestrado_envolvidos", projetos),
                "doutorandos": MotorAgregacao.somar("alunos_doutorado_envolvidos", projetos),
                "colaboracao_nao_academica": MotorAgregacao.total_projetos_colaboracao(projetos),
            },
            indicadores=dict(CalculadoraIndicadores.calcular_todos(colecoes, filtro)),
            defesas_por_ano=MotorAgregacao.agrupar_por_ano_e_curso(egressos),
            turmas={
                **MotorAgregacao.resumo_turmas(turmas),
                "resultados": MotorAgregacao.distribuicao_resultados(turmas),
                "por_ano": MotorAgregacao.matriculas_por_ano(turmas),
            },
            docentes=MotorAgregacao.resumo_docentes(docentes),
            publicacoes={
                **MotorAgregacao.resumo_periodicos(periodicos),
                "periodicos_por_ano": MotorAgregacao.contar_por_ano(periodicos),
                "conferencias": len(conferencias),
                "conferencias_por_ano": MotorAgregacao.contar_por_ano(conferencias),
            },
            alunos_regulares=self._resumo_alunos(alunos),
        )

    @staticmethod
    def _resumo_egressos(egressos: list) -> Dict[str, Any]:
        defendido = StatusEgresso.DEFENDIDO
        return {
            "mestres_formados": MotorAgregacao.contar_por_curso(egressos, Curso.MESTRADO, defendido),
            "doutores_formados": MotorAgregacao.contar_por_curso(egressos, Curso.DOUTORADO, defendido),
            "tempo_medio_mestrado": MotorAgregacao.media_meses_inteiros(egressos, Curso.MESTRADO, defendido),
            "tempo_medio_doutorado": MotorAgregacao.media_meses_inteiros(egressos, Curso.DOUTORADO, defendido),
            "orientadores": MotorAgregacao.contar_unicos("orientador", egressos),
        }

    def _resumo_alunos(self, alunos: list) -> Dict[str, Any]:
        avaliacoes = [self.classificador.avaliar(a) for a in alunos]
        return {
            **MotorAgregacao.contar_por_curso_simples(alunos),
            "total": len(alunos),
            "orientador_pendente": sum(1 for a in avaliacoes if a.orientador_pendente),
            "proficiencia_pendente": sum(1 for a in avaliacoes if a.proficiencia_pendente),
            "qualificacao_pendente": sum(1 for a in avaliacoes if a.qualificacao_pendente),
        }
