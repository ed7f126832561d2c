"""Filtros das coleções do programa.

Responsabilidades:
- Aplicar a configuração de filtro a cada tipo de registro
- Tratar anos irresolúveis sem excluir registros
- Fornecer opções de facetas (orientadores, anos padrão)
"""

from datetime import date
from typing import Iterable, List, Optional, Sequence, Tuple

from painel_ppg.application.duration_classifier import ClassificadorDuracao
from painel_ppg.config.settings import Configuracoes
from painel_ppg.domain.entities import (
    AlunoEspecial,
    AlunoRegular,
    Conferencia,
    Docente,
    Egresso,
    Periodico,
    Projeto,
    Turma,
)
from painel_ppg.domain.filters import ConfiguracaoFiltro
from painel_ppg.util.datas import obter_ano

TODOS = Configuracoes.FILTRO_TODOS


class FiltroColecoes:
    """Seleciona subconjuntos das coleções conforme o filtro ativo.

    Responsabilidades:
    - Filtrar egressos e alunos regulares por ano, curso, status e orientador
    - Filtrar projetos por sobreposição de intervalo
    - Filtrar docentes, turmas e publicações por ano
    """

    @staticmethod
    def _no_intervalo(ano: Optional[int], limites: Tuple[float, float]) -> bool:
        """Ano desconhecido nunca exclui."""
        if ano is None:
            return True
        inicio, fim = limites
        return inicio <= ano <= fim

    @staticmethod
    def _orientador_confere(orientador: Optional[str], filtro: ConfiguracaoFiltro) -> bool:
        if filtro.orientador == TODOS:
            return True
        return (orientador or Configuracoes.ORIENTADOR_AUSENTE) == filtro.orientador

    @staticmethod
    def filtrar_egressos(
        egressos: Iterable[Egresso], filtro: ConfiguracaoFiltro, ignorar_curso: bool = False
    ) -> List[Egresso]:
        """Filtra egressos pelo ano de defesa e pelas facetas do filtro.

        Parâmetros:
        - egressos (Iterable[Egresso]): coleção completa
        - filtro (ConfiguracaoFiltro): filtro ativo
        - ignorar_curso (bool): desconsidera a faceta de curso (cartões do painel)

        Retorno:
        - list[Egresso]: egressos selecionados
        """
        limites = filtro.limites_ano()
        selecionados = []
        for egresso in egressos:
            if not FiltroColecoes._no_intervalo(obter_ano(egresso.ano_defesa), limites):
                continue
            if not ignorar_curso and filtro.curso != TODOS and egresso.curso != filtro.curso:
                continue
            if filtro.status != TODOS and egresso.status.value != filtro.status:
                continue
            if not FiltroColecoes._orientador_confere(egresso.orientador, filtro):
                continue
            selecionados.append(egresso)
        return selecionados

    @staticmethod
    def filtrar_egressos_para_cartoes(egressos: Iterable[Egresso], filtro: ConfiguracaoFiltro) -> List[Egresso]:
        return FiltroColecoes.filtrar_egressos(egressos, filtro, ignorar_curso=True)

    @staticmethod
    def eh_bolsista(bolsista: Optional[str]) -> bool:
        """Texto não vazio e diferente de "não"/"nao" indica bolsista."""
        valor = (bolsista or "").strip().lower()
        return valor not in ("", "não", "nao")

    @staticmethod
    def filtrar_alunos_regulares(
        alunos: Iterable[AlunoRegular],
        filtro: ConfiguracaoFiltro,
        classificador: Optional[ClassificadorDuracao] = None,
    ) -> List[AlunoRegular]:
        """Filtra alunos regulares pelo ano de ingresso e pelas facetas do filtro.

        Com filtro de duração ativo, alunos sem duração calculável são
        excluídos e a comparação com o limiar é estrita.

        Parâmetros:
        - alunos (Iterable[AlunoRegular]): coleção completa
        - filtro (ConfiguracaoFiltro): filtro ativo
        - classificador (ClassificadorDuracao | None): fonte da data de referência

        Retorno:
        - list[AlunoRegular]: alunos selecionados
        """
        classificador = classificador or ClassificadorDuracao()
        limites = filtro.limites_ano()
        limiar = filtro.limiar_duracao()

        selecionados = []
        for aluno in alunos:
            if not FiltroColecoes._no_intervalo(obter_ano(aluno.ingresso), limites):
                continue
            if filtro.curso != TODOS and aluno.curso != filtro.curso:
                continue
            if filtro.status != TODOS and aluno.situacao != filtro.status:
                continue
            if not FiltroColecoes._orientador_confere(aluno.orientador, filtro):
                continue
            if filtro.bolsista != TODOS:
                bolsista = FiltroColecoes.eh_bolsista(aluno.bolsista)
                if (filtro.bolsista == "sim") != bolsista:
                    continue
            if limiar is not None:
                duracao = classificador.calcular_duracao_meses(aluno)
                if duracao is None:
                    continue
                if filtro.tipo_duracao == "maior" and not duracao > limiar:
                    continue
                if filtro.tipo_duracao == "menor" and not duracao < limiar:
                    continue
            selecionados.append(aluno)
        return selecionados

    @staticmethod
    def filtrar_alunos_especiais(alunos: Iterable[AlunoEspecial], filtro: ConfiguracaoFiltro) -> List[AlunoEspecial]:
        limites = filtro.limites_ano()
        return [a for a in alunos if FiltroColecoes._no_intervalo(a.ano, limites)]

    @staticmethod
    def filtrar_projetos(projetos: Sequence[Projeto], filtro: ConfiguracaoFiltro) -> List[Projeto]:
        """Seleciona projetos cujo intervalo [início, fim] cruza o intervalo do filtro.

        Projetos sem ano de fim estão em andamento e seguem abertos.
        """
        inicio, fim = filtro.limites_ano()
        if inicio == float("-inf") and fim == float("inf"):
            return list(projetos)

        selecionados = []
        for projeto in projetos:
            fim_projeto = projeto.ano_fim if projeto.ano_fim is not None else float("inf")
            if projeto.ano_inicio <= fim and fim_projeto >= inicio:
                selecionados.append(projeto)
        return selecionados

    @staticmethod
    def filtrar_docentes(
        docentes: Iterable[Docente],
        filtro: ConfiguracaoFiltro,
        categoria: str = TODOS,
        bolsa_pqdt: str = TODOS,
    ) -> List[Docente]:
        """Filtra registros anuais de docentes pelo ano.

        As facetas de categoria e bolsa PQ-DT pertencem apenas ao painel de
        docentes e não fazem parte da configuração compartilhada.
        """
        limites = filtro.limites_ano()
        selecionados = []
        for docente in docentes:
            if not FiltroColecoes._no_intervalo(docente.ano, limites):
                continue
            if categoria != TODOS and docente.categoria != categoria:
                continue
            if bolsa_pqdt != TODOS and (bolsa_pqdt == "sim") != docente.bolsa_pqdt:
                continue
            selecionados.append(docente)
        return selecionados

    @staticmethod
    def filtrar_turmas(
        turmas: Iterable[Turma],
        filtro: ConfiguracaoFiltro,
        curso: str = TODOS,
        situacao: str = TODOS,
        docente: str = TODOS,
    ) -> List[Turma]:
        """Filtra turmas pelo ano; demais facetas são as do painel de turmas."""
        limites = filtro.limites_ano()
        selecionados = []
        for turma in turmas:
            if not FiltroColecoes._no_intervalo(turma.ano, limites):
                continue
            if curso != TODOS and turma.curso != curso:
                continue
            if situacao != TODOS and turma.situacao != situacao:
                continue
            if docente != TODOS and turma.docente != docente:
                continue
            selecionados.append(turma)
        return selecionados

    @staticmethod
    def filtrar_periodicos(periodicos: Iterable[Periodico], filtro: ConfiguracaoFiltro) -> List[Periodico]:
        limites = filtro.limites_ano()
        return [p for p in periodicos if FiltroColecoes._no_intervalo(p.ano, limites)]

    @staticmethod
    def filtrar_conferencias(conferencias: Iterable[Conferencia], filtro: ConfiguracaoFiltro) -> List[Conferencia]:
        limites = filtro.limites_ano()
        return [c for c in conferencias if FiltroColecoes._no_intervalo(c.ano, limites)]

    @staticmethod
    def orientadores_unicos(registros: Iterable) -> List[str]:
        """Lista orientadores distintos com "N/A" primeiro e os demais em ordem alfabética."""
        ausente = Configuracoes.ORIENTADOR_AUSENTE
        nomes = {r.orientador or ausente for r in registros}
        ordenados = sorted(n for n in nomes if n != ausente)
        return ([ausente] if ausente in nomes else []) + ordenados

    @staticmethod
    def anos_padrao(anos: Iterable[Optional[int]], hoje: Optional[date] = None) -> Tuple[int, int]:
        """Sugere limites iniciais do filtro a partir dos anos disponíveis.

        Parâmetros:
        - anos (Iterable[int | None]): anos presentes nos dados
        - hoje (date | None): data de referência para o caso sem dados

        Retorno:
        - tuple[int, int]: (menor ano, maior ano)
        """
        validos = [a for a in anos if isinstance(a, int)]
        if validos:
            return min(validos), max(validos)
        ano_atual = (hoje or date.today()).year
        return ano_atual - Configuracoes.ANOS_PADRAO_FILTRO, ano_atual
