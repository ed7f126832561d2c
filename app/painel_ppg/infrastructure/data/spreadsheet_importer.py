"""Importação de planilhas para os modelos de domínio.

Responsabilidades:
- Ler arquivos Excel e CSV
- Validar cabeçalhos obrigatórios por coleção
- Converter linhas em registros, ignorando as incompletas
"""

import os
import re
from typing import Any, Callable, Dict, List, Optional

import pandas as pd
from pydantic import BaseModel, ValidationError

from painel_ppg.config.settings import Configuracoes
from painel_ppg.domain.entities import (
    AlunoEspecial,
    AlunoRegular,
    Conferencia,
    Curso,
    Docente,
    Egresso,
    Periodico,
    Projeto,
    SituacaoAluno,
    StatusEgresso,
    Turma,
)
from painel_ppg.domain.filters import converter_ano
from painel_ppg.infrastructure.data.data_contract import (
    CONTRATO_ALUNOS_ESPECIAIS,
    CONTRATO_ALUNOS_REGULARES,
    CONTRATO_CONFERENCIAS,
    CONTRATO_DOCENTES,
    CONTRATO_EGRESSOS,
    CONTRATO_PERIODICOS,
    CONTRATO_PROJETOS,
    CONTRATO_TURMAS,
    ContratoPlanilha,
)
from painel_ppg.util.datas import formatar_data_br
from painel_ppg.util.logger import FabricaLogger

logger = FabricaLogger.obter("dados")

Linha = Dict[str, Any]


def _vazio(valor: Any) -> bool:
    if valor is None:
        return True
    if isinstance(valor, str):
        return valor.strip() == ""
    try:
        return bool(pd.isna(valor))
    except (TypeError, ValueError):
        return False


def _texto(linha: Linha, *chaves: str, padrao: Optional[str] = None) -> Optional[str]:
    """Primeiro valor não vazio entre as chaves, como texto."""
    for chave in chaves:
        valor = linha.get(chave)
        if _vazio(valor):
            continue
        if isinstance(valor, float) and valor.is_integer():
            return str(int(valor))
        return str(valor).strip()
    return padrao


def _inteiro(linha: Linha, *chaves: str) -> Optional[int]:
    for chave in chaves:
        valor = linha.get(chave)
        if not _vazio(valor):
            return converter_ano(valor)
    return None


def _flag(linha: Linha, *chaves: str) -> bool:
    """Marcações "s" das planilhas; a primeira coluna presente decide."""
    for chave in chaves:
        valor = linha.get(chave)
        if not _vazio(valor):
            return str(valor).strip().lower() == "s"
    return False


def _sim(linha: Linha, chave: str) -> bool:
    return str(linha.get(chave, "")).strip().lower() == "sim"


def _data(linha: Linha, chave: str) -> Optional[str]:
    valor = linha.get(chave)
    if _vazio(valor):
        return None
    return formatar_data_br(valor)


def _decimal(linha: Linha, *chaves: str) -> Optional[str]:
    """Nota com vírgula ou ponto decimal, normalizada como texto."""
    texto = _texto(linha, *chaves)
    if texto is None:
        return None
    correspondencia = re.match(r"^\s*([+-]?\d+(?:\.\d*)?)", texto.replace(",", "."))
    if not correspondencia:
        return None
    numero = float(correspondencia.group(1))
    return str(int(numero)) if numero.is_integer() else str(numero)


class ImportadorPlanilhas:
    """Converte planilhas no formato das secretarias em registros de domínio.

    Responsabilidades:
    - Ler a primeira aba de arquivos Excel ou arquivos CSV
    - Aplicar o contrato de cabeçalhos de cada coleção
    - Ignorar linhas sem as colunas-chave, registrando o total
    """

    @staticmethod
    def ler_planilha(caminho_arquivo: str) -> pd.DataFrame:
        """Lê a primeira aba de um Excel ou um CSV.

        Parâmetros:
        - caminho_arquivo (str): caminho do arquivo

        Retorno:
        - pd.DataFrame: planilha lida

        Exceções:
        - FileNotFoundError: quando o arquivo não existe
        - ValueError: quando a extensão não é suportada
        """
        if not os.path.exists(caminho_arquivo):
            logger.error(f"Planilha não encontrada: {caminho_arquivo}")
            raise FileNotFoundError(f"Planilha não encontrada: {caminho_arquivo}")

        extensao = os.path.splitext(caminho_arquivo)[1].lower()
        if extensao in (".xlsx", ".xls"):
            logger.info(f"Carregando arquivo Excel: {caminho_arquivo}")
            return pd.read_excel(caminho_arquivo, sheet_name=0)
        if extensao == ".csv":
            logger.info(f"Carregando arquivo CSV: {caminho_arquivo}")
            df = pd.read_csv(caminho_arquivo, sep=";")
            if len(df.columns) <= 1:
                df = pd.read_csv(caminho_arquivo, sep=",")
            return df

        raise ValueError(f"Formato de planilha não suportado: {extensao}")

    def _importar(
        self,
        caminho_arquivo: str,
        contrato: ContratoPlanilha,
        conversor: Callable[[Linha], Optional[BaseModel]],
    ) -> List[BaseModel]:
        try:
            df = contrato.validar(self.ler_planilha(caminho_arquivo))
        except ValueError as erro:
            logger.error(f"Falha na validação da planilha {caminho_arquivo}: {erro}")
            raise

        registros = []
        ignoradas = 0
        for linha in df.to_dict("records"):
            try:
                registro = conversor(linha)
            except ValidationError as erro:
                logger.warning(f"Linha de {contrato.nome} ignorada: {erro.error_count()} erro(s) de validação.")
                registro = None
            if registro is None:
                ignoradas += 1
                continue
            registros.append(registro)

        logger.info(f"Importados {len(registros)} registros de {contrato.nome} ({ignoradas} linhas ignoradas).")
        return registros

    def importar_egressos(self, caminho_arquivo: str) -> List[Egresso]:
        return self._importar(caminho_arquivo, CONTRATO_EGRESSOS, self.converter_egresso)

    def importar_docentes(self, caminho_arquivo: str) -> List[Docente]:
        return self._importar(caminho_arquivo, CONTRATO_DOCENTES, self.converter_docente)

    def importar_projetos(self, caminho_arquivo: str) -> List[Projeto]:
        return self._importar(caminho_arquivo, CONTRATO_PROJETOS, self.converter_projeto)

    def importar_turmas(self, caminho_arquivo: str) -> List[Turma]:
        return self._importar(caminho_arquivo, CONTRATO_TURMAS, self.converter_turma)

    def importar_alunos_regulares(self, caminho_arquivo: str) -> List[AlunoRegular]:
        return self._importar(caminho_arquivo, CONTRATO_ALUNOS_REGULARES, self.converter_aluno_regular)

    def importar_alunos_especiais(self, caminho_arquivo: str) -> List[AlunoEspecial]:
        return self._importar(caminho_arquivo, CONTRATO_ALUNOS_ESPECIAIS, self.converter_aluno_especial)

    def importar_periodicos(self, caminho_arquivo: str) -> List[Periodico]:
        return self._importar(caminho_arquivo, CONTRATO_PERIODICOS, self.converter_periodico)

    def importar_conferencias(self, caminho_arquivo: str) -> List[Conferencia]:
        return self._importar(caminho_arquivo, CONTRATO_CONFERENCIAS, self.converter_conferencia)

    @staticmethod
    def converter_egresso(linha: Linha) -> Optional[Egresso]:
        """Converte uma linha de egresso; sem data de ingresso, a linha é ignorada."""
        ingresso = _data(linha, "ANO DE INGRESSO")
        if not ingresso:
            return None
        return Egresso(
            nome=_texto(linha, "NOME DO ALUNO", padrao="N/A"),
            ano_ingresso=ingresso,
            ano_defesa=_data(linha, "ANO DE DEFESA"),
            orientador=_texto(linha, "ORIENTADOR", padrao=Configuracoes.ORIENTADOR_AUSENTE),
            titulo_defesa=_texto(linha, "TÍTULO DE DEFESA", padrao=""),
            curso=Curso.DOUTORADO if _texto(linha, "CURSO") == "Doutorado" else Curso.MESTRADO,
            status=StatusEgresso.DEFENDIDO if _texto(linha, "Status") == "Defendido" else StatusEgresso.CURSANDO,
            cursando_doutorado=_sim(linha, "Está cursando doutorado como aluno regular?"),
            trabalhando=_texto(linha, "Encontra-se trabalhando? Se sim, onde?"),
            trabalhando_outro_estado=_sim(linha, "Está trabalhando em outro estado da federação?"),
        )

    @staticmethod
    def converter_docente(linha: Linha) -> Optional[Docente]:
        nome = _texto(linha, "Docente")
        ano = _inteiro(linha, "Ano")
        if not nome or ano is None:
            return None
        return Docente(
            nome=nome,
            email=_texto(linha, "Email", "email", "E-mail"),
            fone=_texto(linha, "Fone", "fone", "Telefone"),
            categoria=_texto(linha, "Categoria", padrao="N/A"),
            ano=ano,
            bolsa_pqdt=_flag(linha, "Bolsa PQ-DT"),
            dedicacao_exclusiva_ppg=_flag(linha, "Dedicação Exclusiva ao PPG"),
            lecionou_disciplina_quadrienio=_flag(
                linha, "Lecionou uma disciplina no quadrienio", "Lecionou 1 disciplina no quadriênio"
            ),
            participou_publicacao_quadrienio=_flag(
                linha,
                "Participou de uma publicação em periódico no quadrienio",
                "Participou 1 publicação em periódico no quadrienio",
            ),
            teve_orientacao_concluida_quadrienio=_flag(
                linha, "Teve uma orientação concluida no quadrienio", "Teve 1 orientação concluida no quadrienio"
            ),
        )

    @staticmethod
    def converter_projeto(linha: Linha) -> Optional[Projeto]:
        titulo = _texto(linha, "Título do Projeto")
        ano_inicio = _inteiro(linha, "Ano de Início")
        if not titulo or ano_inicio is None:
            return None

        valor = pd.to_numeric(linha.get("Valor financiado"), errors="coerce")
        atuacao = (_texto(linha, "Atuação (ou Coordenador ou Membro)") or "").lower()
        return Projeto(
            titulo=titulo,
            natureza=_texto(linha, "Natureza", padrao=""),
            coordenador=_texto(linha, "Coordenador", padrao="N/A"),
            financiador=_texto(linha, "Financiador", padrao=""),
            colaboracao_nao_academica=_texto(linha, Configuracoes.COLUNA_COLABORACAO_NAO_ACADEMICA, padrao=""),
            resumo=_texto(linha, "Resumo", padrao=""),
            valor_financiado=0.0 if pd.isna(valor) else float(valor),
            atuacao="Membro" if atuacao == "membro" else "Coordenador",
            alunos_mestrado_envolvidos=_inteiro(
                linha, "Quantidade de alunos de Mestrado do PPGEE envolvidos", "Mestrandos"
            ) or 0,
            alunos_doutorado_envolvidos=_inteiro(
                linha, "Quantidade de alunos de Doutorado do PPGEE envolvidos", "Doutorandos"
            ) or 0,
            ano_inicio=ano_inicio,
            ano_fim=_inteiro(linha, "Ano de Fim"),
        )

    @staticmethod
    def converter_turma(linha: Linha) -> Optional[Turma]:
        """Converte uma turma; o sufixo -M/-D do código do curso define o curso."""
        cod_curso = _texto(linha, "CÓD_CURSO", padrao="")
        if "-M" in cod_curso:
            curso = Curso.MESTRADO
        elif "-D" in cod_curso:
            curso = Curso.DOUTORADO
        else:
            return None

        ano = _inteiro(linha, "ANO")
        disciplina = _texto(linha, "DISCIPLINA")
        if not disciplina or ano is None:
            return None

        return Turma(
            ano=ano,
            periodo=_texto(linha, "PERÍODO", padrao=""),
            cod_disciplina=_texto(linha, "CÓD_DISCIPLINA", padrao=""),
            disciplina=disciplina,
            sigla_disciplina=_texto(linha, "SIGLA E DISCIPLINA", padrao=""),
            situacao=_texto(linha, "SITUAÇÃO", padrao=""),
            docente=_texto(linha, "DOCENTE", padrao="N/A"),
            vagas_oferecidas=_inteiro(linha, "VAGAS_OFERECIDAS") or 0,
            qtd_matriculado=_inteiro(linha, "QTD_MATRICULADO") or 0,
            qtd_aprovados=_inteiro(linha, "QTD_APROVADOS") or 0,
            qtd_reprovado_nota=_inteiro(linha, "QTD_REPROVADO_NOTA") or 0,
            qtd_reprovado_freq=_inteiro(linha, "QTD_REPROVADO_FREQ") or 0,
            curso=curso,
            categoria=_texto(linha, "CATEGORIA", padrao=""),
        )

    @staticmethod
    def converter_aluno_regular(linha: Linha) -> Optional[AlunoRegular]:
        """Converte um aluno regular.

        Situações diferentes de "desligado" e "defendido" viram "Sem Evasão".
        A planilha de origem às vezes traz a coluna "SITUCAÇÃO".
        """
        ingresso = _data(linha, "INGRESSO")
        nome = _texto(linha, "ALUNO")
        if not ingresso or not nome:
            return None

        situacao = SituacaoAluno.normalizar(_texto(linha, "SITUAÇÃO", "SITUCAÇÃO"))
        if situacao is None:
            situacao = SituacaoAluno.SEM_EVASAO

        curso = (_texto(linha, "CURSO") or "").lower()
        return AlunoRegular(
            matricula=_texto(linha, "MATRÍCULA", "MATRICULA", padrao=""),
            aluno=nome.upper(),
            ingresso=ingresso,
            situacao=situacao.value,
            orientador=_texto(linha, "ORIENTADOR(A)", padrao=Configuracoes.ORIENTADOR_AUSENTE),
            co_orientador=_texto(linha, "CO ORIENTADOR(A)"),
            proficiencia=_decimal(linha, "PROFICIÊNCIA NOTA", "PROFICIÊNCIA"),
            qualificacao=_data(linha, "QUALIFICAÇÃO"),
            defesa=_data(linha, "DEFESA"),
            bolsista=_texto(linha, "BOLSISTA", "Bolsista", "bolsista"),
            curso=Curso.DOUTORADO if curso == "doutorado" else Curso.MESTRADO,
            email=_texto(linha, "email", "EMAIL"),
            fone=_texto(linha, "fone", "FONE"),
            informacoes_extras=_texto(linha, "Informações Extras"),
        )

    @staticmethod
    def converter_aluno_especial(linha: Linha) -> Optional[AlunoEspecial]:
        nome = _texto(linha, "ALUNO")
        ano = _inteiro(linha, "ANO")
        if not nome or ano is None:
            return None
        return AlunoEspecial(
            matricula=_texto(linha, "MATRICULA", padrao=""),
            aluno=nome,
            ano=ano,
            periodo=_texto(linha, "PERIODO", padrao=""),
            cod_disciplina=_texto(linha, "COD_DISCIPLINA", padrao=""),
            disciplina=_texto(linha, "DISCIPLINA", padrao=""),
            situacao=_texto(linha, "SITUACAO", padrao="Cursando"),
            email=_texto(linha, "EMAIL"),
            fone=_texto(linha, "FONE"),
        )

    @staticmethod
    def converter_periodico(linha: Linha) -> Optional[Periodico]:
        titulo = _texto(linha, "Título")
        ano = _inteiro(linha, "Ano")
        if not titulo or ano is None:
            return None
        return Periodico(
            titulo=titulo,
            periodico=_texto(linha, "Periódico", padrao=""),
            autor=_texto(linha, "Autor", padrao=""),
            ano=ano,
            discente_egresso=_flag(linha, "Discente ou egresso (s/n)"),
            docente_ppg=_flag(linha, "Docente do PPGEE (s/n)"),
            categoria=_texto(linha, "Categoria", padrao=""),
        )

    @staticmethod
    def converter_conferencia(linha: Linha) -> Optional[Conferencia]:
        titulo = _texto(linha, "Título")
        ano = _inteiro(linha, "Ano")
        if not titulo or ano is None:
            return None
        return Conferencia(
            titulo=titulo,
            autor=_texto(linha, "Autor", padrao=""),
            ano=ano,
            categoria=_texto(linha, "Categoria", padrao=""),
        )
