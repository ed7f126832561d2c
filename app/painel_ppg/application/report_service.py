"""Serviço de relatórios HTML.

Responsabilidades:
- Gerar o relatório de alunos regulares agrupado por orientador
- Gerar a página do painel com cartões de indicadores e gráfico de defesas
- Persistir os arquivos no diretório de saída
"""

from __future__ import annotations

import html
import os
from datetime import date, datetime
from typing import Dict, List, Optional, Sequence

import plotly.graph_objects as go
import plotly.io as pio

from painel_ppg.application.dashboard_service import ResumoPainel
from painel_ppg.application.duration_classifier import ClassificadorDuracao, SaudeDuracao
from painel_ppg.config.settings import Configuracoes
from painel_ppg.domain.entities import AlunoRegular, Curso
from painel_ppg.domain.filters import ConfiguracaoFiltro
from painel_ppg.util.datas import converter_data_br
from painel_ppg.util.logger import FabricaLogger

logger = FabricaLogger.obter("relatorios")

COLUNAS_RELATORIO = [
    "Aluno",
    "Curso",
    "Ingresso",
    "Situação",
    "Orientador",
    "Duração",
    "Bolsista",
    "Proficiência",
    "Qualificação",
]

_ESTILOS = (
    "<style>"
    "body{font-family:'Segoe UI',Roboto,system-ui,sans-serif;margin:24px;color:#1f2937}"
    "h1{margin-bottom:4px}.meta{color:#6b7280;font-size:13px}.filtros{font-size:12px;margin:6px 0 14px}"
    "table{border-collapse:collapse;width:100%;margin-bottom:28px;font-size:13px}"
    "th{background:#226b94;color:#fff;text-align:left;padding:6px}td{border:1px solid #d1d5db;padding:5px}"
    "td.saude-vermelho{background:#fee2e2;color:#991b1b}td.saude-verde{background:#dcfce7;color:#166534}"
    "td.totais{text-align:right;font-style:italic;background:#f5f5f5}"
    ".alerta{display:inline-block;margin-left:4px;padding:0 4px;border-radius:3px;background:#fef3c7;font-size:11px}"
    ".cards{display:grid;grid-template-columns:repeat(auto-fill,minmax(170px,1fr));gap:12px;margin:14px 0}"
    ".card{border:1px solid #e5e7eb;border-radius:8px;padding:10px}.card-label{font-size:12px;color:#6b7280}"
    ".card-value{font-size:22px;font-weight:600}"
    "</style>"
)


class ServicoRelatorio:
    """Renderiza relatórios HTML do painel.

    Responsabilidades:
    - Aplicar as mesmas regras de alerta do ClassificadorDuracao às células
    - Escapar todo texto vindo dos dados
    - Gravar arquivos em Configuracoes.OUTPUT_DIR
    """

    def __init__(self, classificador: ClassificadorDuracao | None = None, output_dir: str | None = None):
        """Inicializa o serviço.

        Parâmetros:
        - classificador (ClassificadorDuracao | None): regras de prazo e data de referência
        - output_dir (str | None): diretório de saída dos arquivos
        """
        self.classificador = classificador or ClassificadorDuracao()
        self.output_dir = str(output_dir or Configuracoes.OUTPUT_DIR)

    def gerar_relatorio_alunos(
        self,
        alunos: Sequence[AlunoRegular],
        filtro: ConfiguracaoFiltro | None = None,
        gerado_em: datetime | None = None,
    ) -> str:
        """Gera o HTML do relatório de alunos regulares.

        Com a faceta de orientador em "todos", os alunos são agrupados por
        orientador, com "Sem Orientador" por último. Caso contrário, um único
        grupo recebe o nome do orientador filtrado.

        Parâmetros:
        - alunos (Sequence[AlunoRegular]): alunos já filtrados
        - filtro (ConfiguracaoFiltro | None): filtro aplicado, descrito no cabeçalho
        - gerado_em (datetime | None): momento de geração exibido

        Retorno:
        - str: documento HTML

        Exceções:
        - ValueError: quando não há alunos para o relatório
        """
        if not alunos:
            logger.error("Não há dados para gerar o relatório de alunos regulares.")
            raise ValueError("Não há dados para gerar o relatório.")

        filtro = filtro or ConfiguracaoFiltro()
        gerado_em = gerado_em or datetime.now()

        if filtro.orientador == Configuracoes.FILTRO_TODOS:
            grupos = self.agrupar_por_orientador(alunos)
        else:
            grupos = {filtro.orientador: list(alunos)}

        secoes = [self._secao_orientador(nome, membros, filtro, gerado_em) for nome, membros in grupos.items()]
        return self._documento("Relatório de Alunos Regulares", "".join(secoes))

    @staticmethod
    def agrupar_por_orientador(alunos: Sequence[AlunoRegular]) -> Dict[str, List[AlunoRegular]]:
        """Agrupa alunos por orientador em ordem alfabética, com "Sem Orientador" ao final."""
        sem_orientador = Configuracoes.SEM_ORIENTADOR
        grupos: Dict[str, List[AlunoRegular]] = {}
        for aluno in alunos:
            grupos.setdefault(aluno.orientador or sem_orientador, []).append(aluno)

        ordem = sorted(grupos, key=lambda nome: (nome == sem_orientador, nome.casefold()))
        return {nome: grupos[nome] for nome in ordem}

    @staticmethod
    def ordenar_alunos(alunos: Sequence[AlunoRegular]) -> List[AlunoRegular]:
        """Ordena por curso, data de ingresso (datadas primeiro, mais antigas antes) e nome."""

        def chave(aluno: AlunoRegular):
            ingresso = converter_data_br(aluno.ingresso)
            return (
                aluno.curso.value,
                ingresso is None,
                ingresso or date.min,
                aluno.aluno.casefold(),
            )

        return sorted(alunos, key=chave)

    @staticmethod
    def descrever_filtros(orientador: str, filtro: ConfiguracaoFiltro) -> str:
        """Monta a linha "Filtros Aplicados" do cabeçalho de cada grupo."""
        descricoes = [f"Orientador: {orientador}"]

        if filtro.ano_inicio or filtro.ano_fim:
            inicio = filtro.ano_inicio or "Início"
            fim = filtro.ano_fim or "Fim"
            descricoes.append(f"Período (Ingresso): {inicio} a {fim}")

        todos = Configuracoes.FILTRO_TODOS
        if filtro.curso != todos:
            descricoes.append(f"Curso: {Curso(filtro.curso).value}")
        if filtro.status != todos:
            descricoes.append(f"Situação: {filtro.status}")
        if filtro.bolsista != todos:
            descricoes.append(f"Bolsista: {'Sim' if filtro.bolsista == 'sim' else 'Não'}")
        if filtro.tipo_duracao != "nenhum" and filtro.duracao_meses not in (None, ""):
            tipo = "Maior que" if filtro.tipo_duracao == "maior" else "Menor que"
            descricoes.append(f"Duração: {tipo} {filtro.duracao_meses} meses")

        return "Filtros Aplicados: " + " | ".join(descricoes)

    def _secao_orientador(
        self, orientador: str, alunos: Sequence[AlunoRegular], filtro: ConfiguracaoFiltro, gerado_em: datetime
    ) -> str:
        linhas = []
        totais = {Curso.MESTRADO: 0, Curso.DOUTORADO: 0}
        for aluno in self.ordenar_alunos(alunos):
            totais[aluno.curso] += 1
            linhas.append(self._linha_aluno(aluno))

        rodape = (
            f"Total Mestrado: {totais[Curso.MESTRADO]} | Total Doutorado: {totais[Curso.DOUTORADO]}"
        )
        cabecalho = "".join(f"<th>{html.escape(coluna)}</th>" for coluna in COLUNAS_RELATORIO)
        return (
            "<section class='grupo'>"
            + "<h1>Relatório de Alunos Regulares</h1>"
            + f"<p class='meta'>Gerado em: {gerado_em.strftime('%d/%m/%Y %H:%M:%S')}</p>"
            + f"<p class='filtros'>{html.escape(self.descrever_filtros(orientador, filtro))}</p>"
            + f"<table><thead><tr>{cabecalho}</tr></thead><tbody>"
            + "".join(linhas)
            + f"<tr><td class='totais' colspan='{len(COLUNAS_RELATORIO)}'>{html.escape(rodape)}</td></tr>"
            + "</tbody></table></section>"
        )

    def _linha_aluno(self, aluno: AlunoRegular) -> str:
        avaliacao = self.classificador.avaliar(aluno)
        classe = ""
        if avaliacao.saude is SaudeDuracao.VERMELHO:
            classe = " class='saude-vermelho'"
        elif avaliacao.saude is SaudeDuracao.VERDE:
            classe = " class='saude-verde'"

        def celula(valor: Optional[str], alerta: Optional[str] = None) -> str:
            conteudo = html.escape(valor or "-")
            if alerta:
                conteudo += f"<span class='alerta'>{html.escape(alerta)}</span>"
            return f"<td>{conteudo}</td>"

        return (
            "<tr>"
            + celula(aluno.aluno)
            + celula(aluno.curso.value)
            + celula(aluno.ingresso)
            + celula(aluno.situacao)
            + celula(aluno.orientador or Configuracoes.ORIENTADOR_AUSENTE, "Pendente" if avaliacao.orientador_pendente else None)
            + f"<td{classe}>{html.escape(avaliacao.duracao_texto)}</td>"
            + celula(aluno.bolsista)
            + celula(aluno.proficiencia, "Pendente" if avaliacao.proficiencia_pendente else None)
            + celula(aluno.qualificacao, "Pendente" if avaliacao.qualificacao_pendente else None)
            + "</tr>"
        )

    def gerar_painel(self, resumo: ResumoPainel) -> str:
        """Gera o HTML do painel com cartões e o gráfico de defesas por ano.

        Parâmetros:
        - resumo (ResumoPainel): resumo produzido pelo ServicoPainel

        Retorno:
        - str: documento HTML com plotly embutido
        """
        egressos = resumo.egressos
        cartoes = [
            ("Mestres formados", str(egressos.get("mestres_formados", 0))),
            ("Doutores formados", str(egressos.get("doutores_formados", 0))),
            ("Tempo médio mestrado", self._formatar_tempo_medio(egressos.get("tempo_medio_mestrado", 0))),
            ("Tempo médio doutorado", self._formatar_tempo_medio(egressos.get("tempo_medio_doutorado", 0))),
            ("Projetos", str(resumo.projetos.get("total", 0))),
            ("Colaboração não acadêmica", str(resumo.projetos.get("colaboracao_nao_academica", 0))),
        ]
        indicadores = [
            (sigla, f"{valor:.2f}" if sigla == "ATI" else f"{valor:.3f}") for sigla, valor in resumo.indicadores.items()
        ]

        corpo = (
            "<h1>Painel do Programa</h1>"
            + self._grade_cartoes(cartoes)
            + "<h2>Indicadores</h2>"
            + self._grade_cartoes(indicadores)
            + "<h2>Egressos por ano</h2>"
            + self.grafico_defesas(resumo.defesas_por_ano)
        )
        return self._documento("Painel do Programa", corpo)

    @staticmethod
    def grafico_defesas(linhas: List[Dict[str, int]]) -> str:
        """Gráfico de barras de defesas por ano e curso como fragmento HTML."""
        anos = [str(linha["ano"]) for linha in linhas]
        figura = go.Figure()
        for curso in Curso:
            figura.add_trace(go.Bar(name=curso.value, x=anos, y=[linha.get(curso.value, 0) for linha in linhas]))
        figura.update_layout(barmode="group", xaxis_title="Ano", yaxis_title="Defesas", margin={"t": 30})
        return pio.to_html(figura, full_html=False, include_plotlyjs=True)

    @staticmethod
    def _formatar_tempo_medio(valor: float) -> str:
        return f"{valor:.1f} meses" if valor and valor > 0 else "-"

    @staticmethod
    def _grade_cartoes(cartoes: List[tuple]) -> str:
        itens = "".join(
            "<article class='card'><div class='card-label'>"
            + html.escape(rotulo)
            + "</div><div class='card-value'>"
            + html.escape(valor)
            + "</div></article>"
            for rotulo, valor in cartoes
        )
        return f"<div class='cards'>{itens}</div>"

    @staticmethod
    def _documento(titulo: str, corpo: str) -> str:
        return (
            "<!doctype html><html lang='pt-BR'><head><meta charset='utf-8'/>"
            + f"<title>{html.escape(titulo)}</title>"
            + _ESTILOS
            + "</head><body>"
            + corpo
            + "</body></html>"
        )

    def salvar_relatorio_alunos(self, alunos: Sequence[AlunoRegular], filtro: ConfiguracaoFiltro | None = None) -> str:
        """Gera e grava o relatório de alunos; retorna o caminho do arquivo."""
        caminho = os.path.join(self.output_dir, Configuracoes.ARQUIVO_RELATORIO_ALUNOS)
        self._write_text(caminho, self.gerar_relatorio_alunos(alunos, filtro))
        logger.info(f"Relatório de alunos gerado em: {caminho}")
        return caminho

    def salvar_painel(self, resumo: ResumoPainel) -> str:
        """Gera e grava o painel; retorna o caminho do arquivo."""
        caminho = os.path.join(self.output_dir, Configuracoes.ARQUIVO_PAINEL)
        self._write_text(caminho, self.gerar_painel(resumo))
        logger.info(f"Painel gerado em: {caminho}")
        return caminho

    @staticmethod
    def _write_text(path: str, content: str) -> None:
        os.makedirs(os.path.dirname(path), exist_ok=True)
        with open(path, "w", encoding="utf-8") as file:
            file.write(content)
