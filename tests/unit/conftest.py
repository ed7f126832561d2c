"""Fixtures compartilhadas para os testes."""

import sys
from datetime import date
from pathlib import Path

import pytest


RAIZ = Path(__file__).resolve().parents[2]
DIRETORIO_APP = RAIZ / "app"
if str(DIRETORIO_APP) not in sys.path:
    sys.path.insert(0, str(DIRETORIO_APP))

from painel_ppg.application.duration_classifier import ClassificadorDuracao  # noqa: E402
from painel_ppg.domain.entities import (  # noqa: E402
    AlunoRegular,
    ColecoesPrograma,
    Curso,
    Docente,
    Egresso,
    Periodico,
    Projeto,
    StatusEgresso,
    Turma,
)


@pytest.fixture()
def hoje():
    """Data de referência fixa usada como "agora"."""
    return date(2022, 1, 1)


@pytest.fixture()
def classificador(hoje):
    return ClassificadorDuracao(data_referencia=hoje)


@pytest.fixture()
def egressos_exemplo():
    """Um mestre e um doutor defendidos em 2020 e 2021, mais um em curso."""
    return [
        Egresso(
            nome="Ana",
            ano_ingresso="01/03/2018",
            ano_defesa="01/03/2020",
            orientador="Prof. Silva",
            curso=Curso.MESTRADO,
            status=StatusEgresso.DEFENDIDO,
        ),
        Egresso(
            nome="Bruno",
            ano_ingresso="01/01/2016",
            ano_defesa="01/01/2021",
            orientador="Prof. Souza",
            curso=Curso.DOUTORADO,
            status=StatusEgresso.DEFENDIDO,
        ),
        Egresso(
            nome="Carla",
            ano_ingresso="01/03/2019",
            ano_defesa="10/10/2021",
            orientador=None,
            curso=Curso.MESTRADO,
            status=StatusEgresso.CURSANDO,
        ),
    ]


@pytest.fixture()
def docentes_exemplo():
    """Dois permanentes e um colaborador em 2020."""
    return [
        Docente(nome="Prof. Silva", categoria="PERMANENTE", ano=2020, bolsa_pqdt=True),
        Docente(nome="Prof. Souza", categoria="permanente", ano=2020, dedicacao_exclusiva_ppg=True),
        Docente(nome="Prof. Lima", categoria="COLABORADOR", ano=2020),
    ]


@pytest.fixture()
def turmas_exemplo():
    return [
        Turma(ano=2020, docente="Prof. Silva", cod_disciplina="D1", qtd_matriculado=10, qtd_aprovados=8, qtd_reprovado_nota=1, qtd_reprovado_freq=1),
        Turma(ano=2020, docente="Prof. Lima ", cod_disciplina="D2", qtd_matriculado=5, qtd_aprovados=5),
        Turma(ano=2021, docente="Desconhecido", cod_disciplina="D1", qtd_matriculado=7, qtd_aprovados=6, qtd_reprovado_freq=1),
    ]


@pytest.fixture()
def aluno_regular_factory():
    """Cria alunos regulares com valores padrão sobrescrevíveis."""

    def _criar(**campos):
        base = {
            "aluno": "ALUNO TESTE",
            "ingresso": "01/01/2020",
            "situacao": "Sem Evasão",
            "orientador": "Prof. Silva",
            "proficiencia": "8.0",
            "curso": Curso.MESTRADO,
        }
        base.update(campos)
        return AlunoRegular(**base)

    return _criar


@pytest.fixture()
def colecoes_exemplo(egressos_exemplo, docentes_exemplo, turmas_exemplo, aluno_regular_factory):
    return ColecoesPrograma(
        egressos=egressos_exemplo,
        docentes=docentes_exemplo,
        turmas=turmas_exemplo,
        projetos=[
            Projeto(titulo="P1", ano_inicio=2018, alunos_mestrado_envolvidos=2, colaboracao_nao_academica="Sim"),
            Projeto(titulo="P2", ano_inicio=2015, ano_fim=2016, alunos_doutorado_envolvidos=1),
        ],
        alunos_regulares=[
            aluno_regular_factory(aluno="MARIA"),
            aluno_regular_factory(aluno="JOAO", curso=Curso.DOUTORADO, orientador=None),
        ],
        periodicos=[
            Periodico(titulo="Artigo A", ano=2020, discente_egresso=True),
            Periodico(titulo="Artigo B", ano=2021, docente_ppg=True),
        ],
    )
