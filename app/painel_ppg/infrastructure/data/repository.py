"""Repositório das coleções do programa.

Responsabilidades:
- Ler e gravar cada coleção como um arquivo JSON
- Converter registros em modelos de domínio
- Tolerar arquivos ausentes, ilegíveis e registros inválidos
"""

import json
import os
from typing import Dict, List, Optional, Type

from pydantic import BaseModel, ValidationError

from painel_ppg.config.settings import Configuracoes
from painel_ppg.domain.entities import (
    AlunoEspecial,
    AlunoRegular,
    ColecoesPrograma,
    Conferencia,
    Docente,
    Egresso,
    Periodico,
    Projeto,
    Turma,
)
from painel_ppg.util.logger import FabricaLogger

logger = FabricaLogger.obter("dados")

MODELOS: Dict[str, Type[BaseModel]] = {
    "egressos": Egresso,
    "docentes": Docente,
    "projetos": Projeto,
    "turmas": Turma,
    "alunos-regulares": AlunoRegular,
    "alunos-especiais": AlunoEspecial,
    "periodicos": Periodico,
    "conferencias": Conferencia,
}


class RepositorioColecoes:
    """Persistência de coleções por nome lógico.

    Responsabilidades:
    - Resolver o arquivo de cada coleção em Configuracoes.COLECOES
    - Carregar todas as coleções de uma vez para o painel
    """

    def __init__(self, data_dir: Optional[str] = None):
        """Inicializa o repositório.

        Parâmetros:
        - data_dir (str | None): diretório dos arquivos JSON
        """
        self.data_dir = str(data_dir or Configuracoes.DATA_DIR)

    def _caminho(self, nome: str) -> str:
        if nome not in Configuracoes.COLECOES:
            raise ValueError(f"Coleção desconhecida: {nome}. Disponíveis: {list(Configuracoes.COLECOES)}")
        return os.path.join(self.data_dir, Configuracoes.COLECOES[nome])

    def carregar(self, nome: str) -> List[BaseModel]:
        """Carrega uma coleção.

        Arquivo ausente ou ilegível resulta em coleção vazia. Registros que
        não passam na validação do modelo são ignorados.

        Parâmetros:
        - nome (str): nome lógico da coleção (ex.: "egressos")

        Retorno:
        - list: registros convertidos no modelo da coleção

        Exceções:
        - ValueError: quando o nome da coleção é desconhecido
        """
        caminho = self._caminho(nome)
        if not os.path.exists(caminho):
            logger.info(f"Coleção '{nome}' sem arquivo em {caminho}. Usando coleção vazia.")
            return []

        try:
            with open(caminho, "r", encoding="utf-8") as arquivo:
                dados = json.load(arquivo)
        except (OSError, ValueError) as erro:
            logger.error(f"Falha ao ler coleção '{nome}' em {caminho}: {erro}")
            return []

        if not isinstance(dados, list):
            logger.error(f"Coleção '{nome}' não contém uma lista JSON. Usando coleção vazia.")
            return []

        modelo = MODELOS[nome]
        registros = []
        for indice, item in enumerate(dados):
            try:
                registros.append(modelo.model_validate(item))
            except ValidationError as erro:
                logger.warning(f"Registro {indice} de '{nome}' ignorado: {erro.error_count()} erro(s) de validação.")

        logger.info(f"Coleção '{nome}' carregada com {len(registros)} registros.")
        return registros

    def salvar(self, nome: str, registros: List[BaseModel]) -> str:
        """Grava uma coleção completa, substituindo o arquivo anterior.

        Parâmetros:
        - nome (str): nome lógico da coleção
        - registros (list): registros do modelo da coleção

        Retorno:
        - str: caminho do arquivo gravado
        """
        caminho = self._caminho(nome)
        os.makedirs(os.path.dirname(caminho), exist_ok=True)
        conteudo = [registro.model_dump(mode="json", by_alias=True) for registro in registros]
        with open(caminho, "w", encoding="utf-8") as arquivo:
            json.dump(conteudo, arquivo, ensure_ascii=False, indent=2)
        logger.info(f"Coleção '{nome}' gravada com {len(registros)} registros em {caminho}.")
        return caminho

    def carregar_todas(self) -> ColecoesPrograma:
        """Carrega todas as coleções conhecidas.

        Retorno:
        - ColecoesPrograma: coleções prontas para o painel
        """
        return ColecoesPrograma(
            **{nome.replace("-", "_"): self.carregar(nome) for nome in Configuracoes.COLECOES}
        )
