"""Testes do serviço de relatórios HTML."""

import os
from datetime import datetime

import pytest

from painel_ppg.application.dashboard_service import ServicoPainel
from painel_ppg.application.report_service import ServicoRelatorio
from painel_ppg.domain.entities import Curso
from painel_ppg.domain.filters import ConfiguracaoFiltro

GERADO_EM = datetime(2022, 1, 1, 9, 30, 0)


def test_relatorio_sem_alunos_falha(classificador):
    with pytest.raises(ValueError):
        ServicoRelatorio(classificador).gerar_relatorio_alunos([])


def test_agrupar_por_orientador_sem_orientador_por_ultimo(aluno_regular_factory):
    alunos = [
        aluno_regular_factory(aluno="A", orientador=None),
        aluno_regular_factory(aluno="B", orientador="Prof. Souza"),
        aluno_regular_factory(aluno="C", orientador="prof. Abreu"),
        aluno_regular_factory(aluno="D", orientador="Prof. Souza"),
    ]

    grupos = ServicoRelatorio.agrupar_por_orientador(alunos)

    assert list(grupos) == ["prof. Abreu", "Prof. Souza", "Sem Orientador"]
    assert [a.aluno for a in grupos["Prof. Souza"]] == ["B", "D"]


def test_ordenar_alunos_por_curso_ingresso_e_nome(aluno_regular_factory):
    alunos = [
        aluno_regular_factory(aluno="ZECA", ingresso="01/01/2021"),
        aluno_regular_factory(aluno="SEM DATA", ingresso=None),
        aluno_regular_factory(aluno="BIA", ingresso="01/01/2019"),
        aluno_regular_factory(aluno="ANA", ingresso="01/01/2021"),
        aluno_regular_factory(aluno="DOUTOR", ingresso="01/01/2022", curso=Curso.DOUTORADO),
    ]

    assert [a.aluno for a in ServicoRelatorio.ordenar_alunos(alunos)] == ["DOUTOR", "BIA", "ANA", "ZECA", "SEM DATA"]


def test_descrever_filtros():
    filtro = ConfiguracaoFiltro(
        ano_inicio=2020, curso=Curso.MESTRADO, bolsista="nao", tipo_duracao="maior", duracao_meses="12"
    )

    assert ServicoRelatorio.descrever_filtros("Prof. Silva", filtro) == (
        "Filtros Aplicados: Orientador: Prof. Silva | Período (Ingresso): 2020 a Fim | "
        "Curso: Mestrado | Bolsista: Não | Duração: Maior que 12 meses"
    )
    assert ServicoRelatorio.descrever_filtros("X", ConfiguracaoFiltro()) == "Filtros Aplicados: Orientador: X"


def test_relatorio_de_alunos_com_totais_alertas_e_cores(classificador, aluno_regular_factory):
    alunos = [
        aluno_regular_factory(aluno="ATRASADO <B>", ingresso="01/07/2020", proficiencia=None),
        aluno_regular_factory(aluno="EM DIA", ingresso="01/03/2021"),
        aluno_regular_factory(aluno="DOUTOR", curso=Curso.DOUTORADO, orientador=None),
    ]

    documento = ServicoRelatorio(classificador).gerar_relatorio_alunos(alunos, gerado_em=GERADO_EM)

    assert "ATRASADO &lt;B&gt;" in documento
    assert "<B>" not in documento
    assert "Total Mestrado: 2 | Total Doutorado: 0" in documento
    assert "Total Mestrado: 0 | Total Doutorado: 1" in documento
    assert "Orientador: Sem Orientador" in documento
    assert "class='saude-vermelho'>18.0 meses" in documento
    assert "class='saude-verde'>10.1 meses" in documento
    assert "Gerado em: 01/01/2022 09:30:00" in documento
    assert documento.index("Orientador: Prof. Silva") < documento.index("Orientador: Sem Orientador")


def test_relatorio_com_orientador_filtrado_gera_grupo_unico(classificador, aluno_regular_factory):
    alunos = [aluno_regular_factory(aluno="A"), aluno_regular_factory(aluno="B", curso=Curso.DOUTORADO)]
    filtro = ConfiguracaoFiltro(orientador="Prof. Silva")

    documento = ServicoRelatorio(classificador).gerar_relatorio_alunos(alunos, filtro, GERADO_EM)

    assert documento.count("<section class='grupo'>") == 1
    assert "Total Mestrado: 1 | Total Doutorado: 1" in documento


def test_gerar_painel_com_cartoes_e_grafico(classificador, colecoes_exemplo):
    resumo = ServicoPainel(classificador).gerar_resumo(colecoes_exemplo, ConfiguracaoFiltro(ano_inicio=2020, ano_fim=2021))

    documento = ServicoRelatorio(classificador).gerar_painel(resumo)

    assert "Mestres formados" in documento
    assert "24.0 meses" in documento
    assert "DPI discente mestrado" in documento
    assert "plotly" in documento.lower()


def test_salvar_arquivos_no_diretorio_de_saida(tmp_path, classificador, colecoes_exemplo):
    servico = ServicoRelatorio(classificador, output_dir=str(tmp_path / "saida"))
    resumo = ServicoPainel(classificador).gerar_resumo(colecoes_exemplo)

    caminho_painel = servico.salvar_painel(resumo)
    caminho_relatorio = servico.salvar_relatorio_alunos(colecoes_exemplo.alunos_regulares)

    assert os.path.basename(caminho_painel) == "painel.html"
    assert os.path.basename(caminho_relatorio) == "relatorio_alunos.html"
    assert os.path.exists(caminho_painel)
    assert os.path.exists(caminho_relatorio)
