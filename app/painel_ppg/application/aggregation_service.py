"""Agregações dos painéis.

Responsabilidades:
- Contagens e médias de egressos por curso e status
- Somas e contagens distintas sobre qualquer coleção
- Séries anuais usadas como entrada dos gráficos
"""

from typing import Any, Dict, Iterable, List, Sequence, Union

import pandas as pd

from painel_ppg.domain.entities import (
    AlunoRegular,
    Curso,
    Docente,
    Egresso,
    Periodico,
    Projeto,
    StatusEgresso,
    Turma,
)
from painel_ppg.util.datas import converter_data_br, meses_inteiros_entre, obter_ano


class MotorAgregacao:
    """Redutores puros sobre coleções já filtradas.

    Nenhum método altera a coleção recebida; todos devolvem números,
    dicionários ou listas simples.
    """

    @staticmethod
    def contar_por_curso(egressos: Iterable[Egresso], curso: Curso, status: StatusEgresso) -> int:
        return sum(1 for g in egressos if g.curso == curso and g.status == status)

    @staticmethod
    def media_meses_inteiros(egressos: Iterable[Egresso], curso: Curso, status: StatusEgresso) -> float:
        """Média de meses de calendário entre ingresso e defesa.

        Apenas registros com ingresso e defesa reconhecidos entram na média;
        datas ausentes ou inválidas excluem o registro. Sem registros, retorna 0.

        Parâmetros:
        - egressos (Iterable[Egresso]): egressos já filtrados
        - curso (Curso): curso considerado
        - status (StatusEgresso): status considerado

        Retorno:
        - float: média em meses, ou 0 quando não há dados
        """
        meses = []
        for egresso in egressos:
            if egresso.curso != curso or egresso.status != status:
                continue
            inicio = converter_data_br(egresso.ano_ingresso)
            fim = converter_data_br(egresso.ano_defesa)
            if inicio is None or fim is None:
                continue
            meses.append(meses_inteiros_entre(inicio, fim))

        if not meses:
            return 0
        return sum(meses) / len(meses)

    @staticmethod
    def somar(campo: str, colecao: Iterable[Any]) -> Union[int, float]:
        return sum(getattr(item, campo) or 0 for item in colecao)

    @staticmethod
    def contar_unicos(campo: str, colecao: Iterable[Any]) -> int:
        """Conta valores distintos e não vazios de um campo, sem normalização."""
        valores = {getattr(item, campo) for item in colecao}
        return len({v for v in valores if v is not None and v != ""})

    @staticmethod
    def agrupar_por_ano_e_curso(egressos: Iterable[Egresso]) -> List[Dict[str, int]]:
        """Conta defesas por ano e curso.

        Apenas egressos "Defendido" com ano de defesa resolvível entram.

        Parâmetros:
        - egressos (Iterable[Egresso]): egressos já filtrados

        Retorno:
        - list[dict]: linhas {"ano", "Mestrado", "Doutorado"} em ordem crescente de ano
        """
        linhas = []
        for egresso in egressos:
            if egresso.status is not StatusEgresso.DEFENDIDO or not egresso.ano_defesa:
                continue
            ano = obter_ano(egresso.ano_defesa)
            if ano is not None:
                linhas.append({"ano": ano, "curso": egresso.curso.value})

        if not linhas:
            return []

        dados = pd.DataFrame(linhas)
        cursos = [c.value for c in Curso]
        tabela = pd.crosstab(dados["ano"], dados["curso"]).reindex(columns=cursos, fill_value=0).sort_index()
        return [
            {"ano": int(ano), **{curso: int(linha[curso]) for curso in cursos}}
            for ano, linha in tabela.iterrows()
        ]

    @staticmethod
    def contar_por_curso_simples(registros: Iterable[AlunoRegular]) -> Dict[str, int]:
        contagem = {c.value: 0 for c in Curso}
        for registro in registros:
            contagem[registro.curso.value] += 1
        return contagem

    @staticmethod
    def total_projetos_colaboracao(projetos: Iterable[Projeto]) -> int:
        return sum(1 for p in projetos if (p.colaboracao_nao_academica or "").lower() == "sim")

    @staticmethod
    def resumo_turmas(turmas: Sequence[Turma]) -> Dict[str, int]:
        """Totais do painel de turmas.

        Retorno:
        - dict: turmas, matriculados, aprovados, reprovados (nota + frequência)
          e disciplinas distintas por código
        """
        return {
            "turmas": len(turmas),
            "matriculados": sum(t.qtd_matriculado for t in turmas),
            "aprovados": sum(t.qtd_aprovados for t in turmas),
            "reprovados": sum(t.qtd_reprovado_nota + t.qtd_reprovado_freq for t in turmas),
            "disciplinas": len({t.cod_disciplina for t in turmas}),
        }

    @staticmethod
    def distribuicao_resultados(turmas: Sequence[Turma]) -> List[Dict[str, Any]]:
        """Fatias de aprovação e reprovação, omitindo as vazias."""
        fatias = [
            {"nome": "Aprovados", "valor": sum(t.qtd_aprovados for t in turmas)},
            {"nome": "Reprovado (Nota)", "valor": sum(t.qtd_reprovado_nota for t in turmas)},
            {"nome": "Reprovado (Freq.)", "valor": sum(t.qtd_reprovado_freq for t in turmas)},
        ]
        return [f for f in fatias if f["valor"] > 0]

    @staticmethod
    def matriculas_por_ano(turmas: Sequence[Turma]) -> List[Dict[str, int]]:
        """Soma matrículas e resultados por ano, em ordem crescente."""
        if not turmas:
            return []

        dados = pd.DataFrame(
            [
                {
                    "ano": t.ano,
                    "matriculados": t.qtd_matriculado,
                    "aprovados": t.qtd_aprovados,
                    "reprovado_nota": t.qtd_reprovado_nota,
                    "reprovado_freq": t.qtd_reprovado_freq,
                }
                for t in turmas
            ]
        )
        somas = dados.groupby("ano", sort=True).sum()
        return [
            {"ano": int(ano), **{coluna: int(valor) for coluna, valor in linha.items()}}
            for ano, linha in somas.iterrows()
        ]

    @staticmethod
    def contar_por_ano(registros: Iterable[Any]) -> List[Dict[str, int]]:
        """Conta registros por ano (atributo `ano`), em ordem crescente."""
        anos = [r.ano for r in registros]
        if not anos:
            return []
        contagem = pd.Series(anos).value_counts().sort_index()
        return [{"ano": int(ano), "quantidade": int(qtd)} for ano, qtd in contagem.items()]

    @staticmethod
    def resumo_periodicos(periodicos: Sequence[Periodico]) -> Dict[str, int]:
        return {
            "total": len(periodicos),
            "com_discente_egresso": sum(1 for p in periodicos if p.discente_egresso),
            "com_docente_ppg": sum(1 for p in periodicos if p.docente_ppg),
        }

    @staticmethod
    def resumo_docentes(docentes: Sequence[Docente]) -> Dict[str, int]:
        """Contagens distintas por nome do painel de docentes.

        A categoria é comparada exatamente com "PERMANENTE", sem normalização.
        """
        return {
            "docentes": len({d.nome for d in docentes}),
            "permanentes": len({d.nome for d in docentes if d.categoria == "PERMANENTE"}),
            "com_bolsa": len({d.nome for d in docentes if d.bolsa_pqdt}),
        }
