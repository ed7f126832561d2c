"""Testes dos indicadores de avaliação."""

import pytest

from painel_ppg.application.indicator_service import CalculadoraIndicadores
from painel_ppg.domain.entities import ColecoesPrograma, Docente, Egresso, StatusEgresso, Turma
from painel_ppg.domain.filters import ConfiguracaoFiltro

FILTRO_2020 = ConfiguracaoFiltro(ano_inicio=2020, ano_fim=2020)


def test_for_ded_d3a_sem_permanentes_retornam_zero():
    docentes = [Docente(nome="Prof. Lima", categoria="COLABORADOR", ano=2020, bolsa_pqdt=True)]

    assert CalculadoraIndicadores.calcular_for(docentes, FILTRO_2020) == 0
    assert CalculadoraIndicadores.calcular_ded(docentes, FILTRO_2020) == 0
    assert CalculadoraIndicadores.calcular_d3a(docentes, FILTRO_2020) == 0


def test_for_com_um_de_dois_permanentes_bolsistas(docentes_exemplo):
    assert CalculadoraIndicadores.calcular_for(docentes_exemplo, FILTRO_2020) == 0.5
    assert CalculadoraIndicadores.calcular_ded(docentes_exemplo, FILTRO_2020) == 0.5


def test_for_conta_nomes_distintos_no_intervalo():
    docentes = [
        Docente(nome="A", categoria="PERMANENTE", ano=2019, bolsa_pqdt=True),
        Docente(nome="A", categoria="PERMANENTE", ano=2020),
        Docente(nome="B", categoria="PERMANENTE", ano=2020),
        Docente(nome="C", categoria="PERMANENTE", ano=2022, bolsa_pqdt=True),
    ]
    filtro = ConfiguracaoFiltro(ano_inicio=2019, ano_fim=2020)

    assert CalculadoraIndicadores.calcular_for(docentes, filtro) == 0.5


def test_d3a_exige_as_tres_marcacoes():
    docentes = [
        Docente(
            nome="A",
            categoria="PERMANENTE",
            ano=2020,
            lecionou_disciplina_quadrienio=True,
            participou_publicacao_quadrienio=True,
            teve_orientacao_concluida_quadrienio=True,
        ),
        Docente(
            nome="B",
            categoria="PERMANENTE",
            ano=2020,
            lecionou_disciplina_quadrienio=True,
            participou_publicacao_quadrienio=True,
        ),
    ]

    assert CalculadoraIndicadores.calcular_d3a(docentes, FILTRO_2020) == 0.5


def test_mapa_categorias_ultimo_registro_prevalece_e_ignora_incompletos():
    docentes = [
        Docente(nome=" Prof. X ", categoria="permanente ", ano=2020),
        Docente(nome="Prof. X", categoria="Colaborador", ano=2020),
        Docente(nome="Prof. Y", categoria="", ano=2020),
        Docente(nome="", categoria="PERMANENTE", ano=2020),
    ]

    assert CalculadoraIndicadores.mapa_categorias(docentes) == {("Prof. X", 2020): "COLABORADOR"}


def test_ade1_fracao_de_turmas_de_colaboradores(docentes_exemplo, turmas_exemplo):
    assert CalculadoraIndicadores.calcular_ade1(turmas_exemplo, docentes_exemplo, FILTRO_2020) == 0.5


def test_ade1_exige_intervalo_fechado_valido(docentes_exemplo, turmas_exemplo):
    assert CalculadoraIndicadores.calcular_ade1(turmas_exemplo, docentes_exemplo, ConfiguracaoFiltro(ano_inicio=2020)) == 0
    assert CalculadoraIndicadores.calcular_ade1(turmas_exemplo, docentes_exemplo, ConfiguracaoFiltro(ano_inicio=2021, ano_fim=2020)) == 0


def test_turma_sem_docente_correspondente_nao_entra_nos_numeradores():
    docentes = [Docente(nome="Prof. Silva", categoria="PERMANENTE", ano=2021)]
    turmas = [Turma(ano=2021, docente="Desconhecido")]
    filtro = ConfiguracaoFiltro(ano_inicio=2021, ano_fim=2021)

    assert CalculadoraIndicadores.calcular_ade1(turmas, docentes, filtro) == 0
    assert CalculadoraIndicadores.calcular_ati(turmas, docentes, filtro) == 0


def test_ati_zero_sem_permanentes_mesmo_com_turmas():
    docentes = [Docente(nome="Prof. Lima", categoria="COLABORADOR", ano=2020)]
    turmas = [Turma(ano=2020, docente="Prof. Lima")]

    assert CalculadoraIndicadores.calcular_ati(turmas, docentes, FILTRO_2020) == 0


def test_ati_media_anual_por_permanente(docentes_exemplo, turmas_exemplo):
    assert CalculadoraIndicadores.calcular_ati(turmas_exemplo, docentes_exemplo, FILTRO_2020) == pytest.approx(30.0)


def test_ati_divide_pelo_numero_de_anos():
    docentes = [
        Docente(nome="A", categoria="PERMANENTE", ano=2020),
        Docente(nome="A", categoria="PERMANENTE", ano=2021),
    ]
    turmas = [Turma(ano=2020, docente="A"), Turma(ano=2021, docente="A"), Turma(ano=2021, docente="A")]
    filtro = ConfiguracaoFiltro(ano_inicio=2020, ano_fim=2021)

    assert CalculadoraIndicadores.calcular_ati(turmas, docentes, filtro) == pytest.approx(90.0)


def test_ade2_fracao_de_defesas_orientadas_por_colaboradores(docentes_exemplo, egressos_exemplo):
    egressos = egressos_exemplo + [
        Egresso(nome="Davi", orientador=" Prof. Lima", status=StatusEgresso.DEFENDIDO, ano_defesa="05/05/2020"),
        Egresso(nome="Eva", orientador="Prof. Lima", status=StatusEgresso.CURSANDO, ano_defesa="05/05/2020"),
    ]

    assert CalculadoraIndicadores.calcular_ade2(egressos, docentes_exemplo, FILTRO_2020) == 0.5


def test_ade2_sem_defesas_no_intervalo(docentes_exemplo, egressos_exemplo):
    filtro = ConfiguracaoFiltro(ano_inicio=2010, ano_fim=2011)

    assert CalculadoraIndicadores.calcular_ade2(egressos_exemplo, docentes_exemplo, filtro) == 0


def test_calcular_todos_inclui_indicadores_nao_calculados(colecoes_exemplo):
    indicadores = CalculadoraIndicadores.calcular_todos(colecoes_exemplo, FILTRO_2020)

    assert list(indicadores) == [
        "FOR",
        "DED",
        "D3A",
        "ADE1",
        "ADE2",
        "ATI",
        "ATG1",
        "ATG2",
        "ORI",
        "PDO",
        "DPI docente",
        "DPI discente doutorado",
        "DPI discente mestrado",
        "DPD",
        "DTD",
        "ADER",
    ]
    assert indicadores["FOR"] == 0.5
    assert all(indicadores[sigla] == 0 for sigla in list(indicadores)[6:])


def test_calcular_todos_com_colecoes_vazias():
    indicadores = CalculadoraIndicadores.calcular_todos(ColecoesPrograma())

    assert set(indicadores.values()) == {0}
