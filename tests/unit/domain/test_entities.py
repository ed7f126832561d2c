"""Testes dos modelos de domínio."""

import pytest
from pydantic import ValidationError

from painel_ppg.domain.entities import (
    AlunoRegular,
    CategoriaDocente,
    ColecoesPrograma,
    Curso,
    Docente,
    Periodico,
    Projeto,
    SituacaoAluno,
)


def test_modelos_aceitam_alias_camel_case_dos_backups():
    docente = Docente.model_validate({"nome": "Prof. X", "ano": 2021, "bolsaPQDT": True, "dedicacaoExclusivaPPG": True})
    periodico = Periodico.model_validate({"titulo": "T", "ano": 2020, "docentePPGEE": True})

    assert docente.bolsa_pqdt is True
    assert docente.dedicacao_exclusiva_ppg is True
    assert periodico.docente_ppg is True
    assert docente.id


def test_registros_sao_imutaveis():
    projeto = Projeto(titulo="P", ano_inicio=2020)

    with pytest.raises(ValidationError):
        projeto.titulo = "Outro"


def test_projeto_valida_atuacao():
    with pytest.raises(ValidationError):
        Projeto(titulo="P", ano_inicio=2020, atuacao="Diretor")


def test_proficiencia_numerica_vira_texto():
    aluno = AlunoRegular(aluno="X", proficiencia=7.5)

    assert aluno.proficiencia == "7.5"


def test_normalizar_ignora_caixa_e_espacos():
    assert SituacaoAluno.normalizar(" sem evasão ") is SituacaoAluno.SEM_EVASAO
    assert CategoriaDocente.normalizar("Permanente") is CategoriaDocente.PERMANENTE
    assert Curso.normalizar("doutorado") is Curso.DOUTORADO
    assert SituacaoAluno.normalizar("Trancado") is None
    assert SituacaoAluno.normalizar(None) is None


def test_colecoes_programa_vazia_por_padrao():
    colecoes = ColecoesPrograma()

    assert colecoes.egressos == []
    assert colecoes.alunos_regulares == []
