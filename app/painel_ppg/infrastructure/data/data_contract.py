"""Validação de contrato das planilhas de importação.

Responsabilidades:
- Validar presença de colunas obrigatórias
- Converter colunas numéricas de contagem
- Falhar explicitamente se contrato for violado
"""

from typing import Dict, List

import pandas as pd

from painel_ppg.config.settings import Configuracoes
from painel_ppg.util.logger import FabricaLogger

logger = FabricaLogger.obter("dados")


class ContratoPlanilha:
    """Define e valida o contrato de uma planilha importada.

    Responsabilidades:
    - Especificar cabeçalhos obrigatórios
    - Normalizar colunas numéricas, preenchendo ausentes com 0
    - Falhar com mensagem clara se violado
    """

    def __init__(self, nome: str, colunas_obrigatorias: List[str], tipos_esperados: Dict[str, type] = None):
        """Inicializa o contrato.

        Parâmetros:
        - nome (str): coleção a que a planilha se destina
        - colunas_obrigatorias (list): cabeçalhos que devem estar presentes
        - tipos_esperados (dict): mapeamento coluna -> tipo numérico esperado
        """
        self.nome = nome
        self.colunas_obrigatorias = colunas_obrigatorias
        self.tipos_esperados = tipos_esperados or {}

    def validar(self, df: pd.DataFrame) -> pd.DataFrame:
        """Valida a planilha contra o contrato.

        Parâmetros:
        - df (pd.DataFrame): planilha lida

        Retorno:
        - pd.DataFrame: cópia com colunas numéricas normalizadas

        Exceções:
        - ValueError: quando a planilha está vazia ou faltam colunas
        """
        if df is None or df.empty:
            raise ValueError(f"Planilha de {self.nome} vazia ou nula. Impossível validar contrato.")

        df = df.rename(columns=lambda coluna: str(coluna).strip())
        colunas_faltantes = [c for c in self.colunas_obrigatorias if c not in df.columns]
        if colunas_faltantes:
            raise ValueError(
                f"Contrato de {self.nome} violado: colunas obrigatórias ausentes: {colunas_faltantes}. "
                f"Colunas disponíveis: {list(df.columns)}"
            )

        for coluna, tipo_esperado in self.tipos_esperados.items():
            if coluna not in df.columns:
                continue
            convertida = pd.to_numeric(df[coluna], errors="coerce")
            if convertida.isnull().sum() > df[coluna].isnull().sum():
                logger.warning(
                    f"Coluna '{coluna}' contém valores que não podem ser convertidos para {tipo_esperado.__name__}. "
                    f"Valores inválidos foram preenchidos com 0."
                )
            df[coluna] = convertida.fillna(0).astype(tipo_esperado)

        logger.info(f"Contrato de {self.nome} validado com sucesso. {len(df)} linhas.")
        return df


CONTRATO_EGRESSOS = ContratoPlanilha("egressos", Configuracoes.COLUNAS_EGRESSOS)
CONTRATO_DOCENTES = ContratoPlanilha("docentes", Configuracoes.COLUNAS_DOCENTES)
CONTRATO_PROJETOS = ContratoPlanilha("projetos", Configuracoes.COLUNAS_PROJETOS)
CONTRATO_TURMAS = ContratoPlanilha(
    "turmas",
    Configuracoes.COLUNAS_TURMAS,
    tipos_esperados={
        "VAGAS_OFERECIDAS": int,
        "QTD_MATRICULADO": int,
        "QTD_APROVADOS": int,
        "QTD_REPROVADO_NOTA": int,
        "QTD_REPROVADO_FREQ": int,
    },
)
CONTRATO_ALUNOS_REGULARES = ContratoPlanilha("alunos-regulares", Configuracoes.COLUNAS_ALUNOS_REGULARES)
CONTRATO_ALUNOS_ESPECIAIS = ContratoPlanilha("alunos-especiais", Configuracoes.COLUNAS_ALUNOS_ESPECIAIS)
CONTRATO_PERIODICOS = ContratoPlanilha("periodicos", Configuracoes.COLUNAS_PERIODICOS)
CONTRATO_CONFERENCIAS = ContratoPlanilha("conferencias", Configuracoes.COLUNAS_CONFERENCIAS)
