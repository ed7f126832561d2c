"""Ponto de entrada da geração do painel.

Responsabilidades:
- Interpretar argumentos de linha de comando
- Importar planilhas para o repositório, quando solicitado
- Gerar o painel e o relatório de alunos regulares
- Tratar falhas e finalizar com código de saída
"""

import argparse
import sys
from typing import List, Optional

from painel_ppg.application.dashboard_service import ServicoPainel
from painel_ppg.application.filter_service import FiltroColecoes
from painel_ppg.application.report_service import ServicoRelatorio
from painel_ppg.config.settings import Configuracoes
from painel_ppg.domain.filters import ConfiguracaoFiltro
from painel_ppg.infrastructure.data.repository import RepositorioColecoes
from painel_ppg.infrastructure.data.spreadsheet_importer import ImportadorPlanilhas
from painel_ppg.util.logger import logger

IMPORTADORES = {
    "egressos": "importar_egressos",
    "docentes": "importar_docentes",
    "projetos": "importar_projetos",
    "turmas": "importar_turmas",
    "alunos-regulares": "importar_alunos_regulares",
    "alunos-especiais": "importar_alunos_especiais",
    "periodicos": "importar_periodicos",
    "conferencias": "importar_conferencias",
}


def criar_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Gera o painel de indicadores do programa de pós-graduação.")
    parser.add_argument("--data-dir", default=None, help="Diretório dos arquivos JSON das coleções")
    parser.add_argument("--inicio", default=None, help="Ano inicial do filtro")
    parser.add_argument("--fim", default=None, help="Ano final do filtro")
    parser.add_argument("--saida", default=None, help="Diretório de saída dos relatórios HTML")
    parser.add_argument(
        "--importar",
        nargs=2,
        metavar=("COLECAO", "PLANILHA"),
        action="append",
        default=[],
        help="Importa uma planilha para a coleção antes de gerar o painel (pode repetir)",
    )
    return parser


def importar_planilhas(repositorio: RepositorioColecoes, pedidos: List[List[str]]) -> None:
    """Importa cada planilha e substitui a coleção correspondente.

    Exceções:
    - ValueError: quando a coleção não aceita importação
    """
    importador = ImportadorPlanilhas()
    for colecao, caminho in pedidos:
        if colecao not in IMPORTADORES:
            raise ValueError(f"Coleção sem importador: {colecao}. Disponíveis: {list(IMPORTADORES)}")
        registros = getattr(importador, IMPORTADORES[colecao])(caminho)
        repositorio.salvar(colecao, registros)


def executar(argv: Optional[List[str]] = None) -> int:
    """Executa a geração do painel.

    Parâmetros:
    - argv (list[str] | None): argumentos; None usa sys.argv

    Retorno:
    - int: código de saída (0 sucesso, 1 falha)
    """
    argumentos = criar_parser().parse_args(argv)
    logger.info("Iniciando geração do painel...")

    try:
        repositorio = RepositorioColecoes(argumentos.data_dir)
        if argumentos.importar:
            importar_planilhas(repositorio, argumentos.importar)

        colecoes = repositorio.carregar_todas()
        inicio, fim = argumentos.inicio, argumentos.fim
        if inicio is None and fim is None:
            inicio, fim = FiltroColecoes.anos_padrao([d.ano for d in colecoes.docentes] + [t.ano for t in colecoes.turmas])
        filtro = ConfiguracaoFiltro(ano_inicio=inicio, ano_fim=fim)

        resumo = ServicoPainel().gerar_resumo(colecoes, filtro)
        for sigla, valor in resumo.indicadores.items():
            logger.info(f"Indicador {sigla}: {valor:.3f}")

        relatorio = ServicoRelatorio(output_dir=argumentos.saida or Configuracoes.OUTPUT_DIR)
        relatorio.salvar_painel(resumo)

        alunos = FiltroColecoes.filtrar_alunos_regulares(colecoes.alunos_regulares, filtro)
        if alunos:
            relatorio.salvar_relatorio_alunos(alunos, filtro)
        else:
            logger.warning("Nenhum aluno regular no período. Relatório de alunos não gerado.")

        logger.info("Processo concluído com sucesso!")
        return 0
    except Exception as erro:
        logger.exception(f"Ocorreu um erro fatal durante a geração do painel: {str(erro)}")
        return 1


if __name__ == "__main__":
    sys.exit(executar())
