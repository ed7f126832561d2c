"""Configurações centrais do projeto.

Responsabilidades:
- Definir caminhos de dados e de saída
- Definir limites de política do programa (prazos em meses)
- Definir chaves de coleções e cabeçalhos de planilhas
"""

import os
from pathlib import Path


class Configuracoes:
    """Centraliza configurações da aplicação.

    Responsabilidades:
    - Fornecer caminhos de diretórios
    - Declarar prazos de acompanhamento discente
    - Declarar constantes dos indicadores de avaliação
    """

    BASE_DIR = Path(__file__).resolve().parents[2]
    DEFAULT_DATA_DIR = os.path.join(BASE_DIR, "data")
    DATA_DIR = os.path.abspath(os.getenv("DATA_DIR", DEFAULT_DATA_DIR))
    DEFAULT_OUTPUT_DIR = os.path.join(BASE_DIR, "reports")
    OUTPUT_DIR = os.path.abspath(os.getenv("OUTPUT_DIR", DEFAULT_OUTPUT_DIR))
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

    # Prazos de política do programa, em meses.
    LIMITE_MESES_ORIENTADOR = float(os.getenv("LIMITE_MESES_ORIENTADOR", "6.0"))
    LIMITE_MESES_QUALIFICACAO_MESTRADO = float(os.getenv("LIMITE_MESES_QUALIFICACAO_MESTRADO", "17.0"))
    LIMITE_MESES_MESTRADO = float(os.getenv("LIMITE_MESES_MESTRADO", "22.0"))
    LIMITE_MESES_QUALIFICACAO_DOUTORADO = float(os.getenv("LIMITE_MESES_QUALIFICACAO_DOUTORADO", "22.0"))
    LIMITE_MESES_DOUTORADO = float(os.getenv("LIMITE_MESES_DOUTORADO", "46.0"))

    # 365.25 / 12
    DIAS_POR_MES = 30.4375
    FATOR_ATI = 60
    ANOS_PADRAO_FILTRO = int(os.getenv("ANOS_PADRAO_FILTRO", "5"))

    ORIENTADOR_AUSENTE = "N/A"
    SEM_ORIENTADOR = "Sem Orientador"
    FILTRO_TODOS = "todos"

    COLECOES = {
        "egressos": "egressos.json",
        "docentes": "docentes.json",
        "projetos": "projetos.json",
        "turmas": "turmas.json",
        "alunos-regulares": "alunos-regulares.json",
        "alunos-especiais": "alunos-especiais.json",
        "periodicos": "periodicos.json",
        "conferencias": "conferencias.json",
    }

    ARQUIVO_PAINEL = "painel.html"
    ARQUIVO_RELATORIO_ALUNOS = "relatorio_alunos.html"

    # Cabeçalhos das planilhas de importação.
    COLUNAS_EGRESSOS = ["NOME DO ALUNO", "ANO DE INGRESSO"]
    COLUNAS_DOCENTES = ["Docente", "Ano"]
    COLUNAS_PROJETOS = ["Título do Projeto", "Ano de Início"]
    COLUNAS_TURMAS = ["ANO", "DISCIPLINA", "CÓD_CURSO"]
    COLUNAS_ALUNOS_REGULARES = ["ALUNO", "INGRESSO"]
    COLUNAS_ALUNOS_ESPECIAIS = ["ALUNO", "ANO"]
    COLUNAS_PERIODICOS = ["Título", "Ano"]
    COLUNAS_CONFERENCIAS = ["Título", "Ano"]

    COLUNA_COLABORACAO_NAO_ACADEMICA = (
        "Projetos estabelecidos com instituições que NÃO sejam acadêmicas e NÃO sejam de agências "
        "de fomento, que resultem em produtos tecnológicos ou impacto na formação de recurso humanos"
    )
