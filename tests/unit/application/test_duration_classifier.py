"""Testes do classificador de duração e pendências."""

from datetime import date, datetime
from unittest.mock import Mock

import pytest

from painel_ppg.application.duration_classifier import ClassificadorDuracao, SaudeDuracao
from painel_ppg.config.settings import Configuracoes
from painel_ppg.domain.entities import Curso


def test_duracao_sem_evasao_usa_data_de_referencia(classificador, aluno_regular_factory):
    aluno = aluno_regular_factory(ingresso="01/01/2020", situacao="Sem Evasão")

    assert classificador.calcular_duracao_meses(aluno) == pytest.approx(24.0, abs=0.05)


def test_duracao_desligado_e_indefinida_mesmo_com_defesa(classificador, aluno_regular_factory):
    aluno = aluno_regular_factory(situacao="Desligado", defesa="01/01/2022")

    assert classificador.calcular_duracao_meses(aluno) is None


def test_duracao_defendido_usa_data_de_defesa(classificador, aluno_regular_factory):
    aluno = aluno_regular_factory(situacao="defendido", ingresso="01/01/2018", defesa="01/01/2020")

    assert classificador.calcular_duracao_meses(aluno) == pytest.approx(24.0, abs=0.05)


def test_duracao_indefinida_com_datas_invalidas(classificador, aluno_regular_factory):
    assert classificador.calcular_duracao_meses(aluno_regular_factory(ingresso="31/02/2020")) is None
    assert classificador.calcular_duracao_meses(aluno_regular_factory(situacao="Defendido", defesa=None)) is None
    assert classificador.calcular_duracao_meses(aluno_regular_factory(situacao="Trancado")) is None


def test_data_referencia_datetime_e_aceita(aluno_regular_factory):
    classificador = ClassificadorDuracao(data_referencia=datetime(2022, 1, 1, 15, 0))

    assert classificador.calcular_duracao_meses(aluno_regular_factory()) == pytest.approx(24.0, abs=0.05)


def test_alerta_orientador_pendente(classificador, aluno_regular_factory):
    sem_orientador = aluno_regular_factory(ingresso="01/06/2021", orientador=None)
    com_orientador = aluno_regular_factory(ingresso="01/06/2021", orientador="Prof. Silva")
    doutorado = aluno_regular_factory(ingresso="01/01/2015", orientador=None, curso=Curso.DOUTORADO)
    recente = aluno_regular_factory(ingresso="01/10/2021", orientador="  ")

    assert classificador.alerta_orientador_pendente(sem_orientador) is True
    assert classificador.alerta_orientador_pendente(com_orientador) is False
    assert classificador.alerta_orientador_pendente(doutorado) is False
    assert classificador.alerta_orientador_pendente(recente) is False


def test_alerta_orientador_respeita_limite_configurado(monkeypatch, classificador, aluno_regular_factory):
    monkeypatch.setattr(Configuracoes, "LIMITE_MESES_ORIENTADOR", 12.0)
    aluno = aluno_regular_factory(ingresso="01/06/2021", orientador=None)

    assert classificador.alerta_orientador_pendente(aluno) is False


def test_alerta_proficiencia_pendente(classificador, aluno_regular_factory):
    assert classificador.alerta_proficiencia_pendente(aluno_regular_factory(proficiencia=None)) is True
    assert classificador.alerta_proficiencia_pendente(aluno_regular_factory(proficiencia="7,5")) is False
    assert classificador.alerta_proficiencia_pendente(aluno_regular_factory(proficiencia=None, situacao="Desligado")) is False
    assert classificador.alerta_proficiencia_pendente(aluno_regular_factory(proficiencia=None, curso=Curso.DOUTORADO)) is False


def test_alerta_qualificacao_pendente(classificador, aluno_regular_factory):
    mestrado_18 = aluno_regular_factory(ingresso="01/07/2020")
    doutorado_20 = aluno_regular_factory(ingresso="01/05/2020", curso=Curso.DOUTORADO)
    doutorado_30 = aluno_regular_factory(ingresso="01/07/2019", curso=Curso.DOUTORADO)
    qualificado = aluno_regular_factory(ingresso="01/07/2020", qualificacao="10/06/2021")

    assert classificador.alerta_qualificacao_pendente(mestrado_18) is True
    assert classificador.alerta_qualificacao_pendente(doutorado_20) is False
    assert classificador.alerta_qualificacao_pendente(doutorado_30) is True
    assert classificador.alerta_qualificacao_pendente(qualificado) is False


@pytest.mark.parametrize(
    "campos, esperado",
    [
        ({"ingresso": "01/03/2021"}, SaudeDuracao.VERDE),
        ({"ingresso": "01/07/2020", "qualificacao": "01/06/2021"}, SaudeDuracao.VERDE),
        ({"ingresso": "01/07/2020"}, SaudeDuracao.VERMELHO),
        ({"ingresso": "01/01/2020", "qualificacao": "01/06/2021"}, SaudeDuracao.VERMELHO),
        ({"ingresso": "01/05/2020", "curso": Curso.DOUTORADO}, None),
        ({"ingresso": "01/07/2019", "curso": Curso.DOUTORADO, "qualificacao": "01/01/2021"}, SaudeDuracao.VERDE),
        ({"ingresso": "01/07/2019", "curso": Curso.DOUTORADO}, SaudeDuracao.VERMELHO),
        ({"ingresso": "01/11/2017", "curso": Curso.DOUTORADO, "qualificacao": "01/01/2020"}, SaudeDuracao.VERMELHO),
        ({"ingresso": "01/01/2020", "situacao": "Desligado"}, None),
        ({"ingresso": ""}, None),
    ],
)
def test_classificar_saude(classificador, aluno_regular_factory, campos, esperado):
    assert classificador.classificar_saude(aluno_regular_factory(**campos)) is esperado


def test_avaliar_consolida_resultados(aluno_regular_factory):
    classificador = ClassificadorDuracao(data_referencia=date(2022, 1, 1))
    avaliacao = classificador.avaliar(aluno_regular_factory(ingresso="01/07/2020", orientador=None, proficiencia=None))

    assert avaliacao.duracao_texto == "18.0 meses"
    assert avaliacao.orientador_pendente is True
    assert avaliacao.proficiencia_pendente is True
    assert avaliacao.qualificacao_pendente is True
    assert avaliacao.saude is SaudeDuracao.VERMELHO


def test_formatar_duracao_sem_valor():
    assert ClassificadorDuracao.formatar_duracao(None) == "-"


def test_avaliar_calcula_duracao_indefinida_uma_unica_vez(monkeypatch, classificador, aluno_regular_factory):
    calcular = Mock(wraps=classificador.calcular_duracao_meses)
    monkeypatch.setattr(classificador, "calcular_duracao_meses", calcular)

    avaliacao = classificador.avaliar(aluno_regular_factory(ingresso="data inválida"))

    calcular.assert_called_once()
    assert avaliacao.duracao_meses is None
    assert avaliacao.saude is None
    assert avaliacao.qualificacao_pendente is False


def test_duracao_none_informada_nao_e_recalculada(monkeypatch, classificador, aluno_regular_factory):
    calcular = Mock(return_value=30.0)
    monkeypatch.setattr(classificador, "calcular_duracao_meses", calcular)
    aluno = aluno_regular_factory(orientador=None)

    assert classificador.classificar_saude(aluno, None) is None
    assert classificador.alerta_orientador_pendente(aluno, None) is False
    calcular.assert_not_called()
