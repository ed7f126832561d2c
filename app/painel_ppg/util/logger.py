"""Logging do painel.

Responsabilidades:
- Configurar uma única vez o logger raiz da aplicação (PAINEL_PPG)
- Entregar loggers por componente que herdam o handler do raiz
- Tolerar LOG_LEVEL inválido, caindo para INFO
"""

import logging
import sys

from painel_ppg.config.settings import Configuracoes

NOME_RAIZ = "PAINEL_PPG"


class FabricaLogger:
    """Cria o logger raiz do painel e os loggers de cada componente.

    O raiz escreve em stdout e não propaga para o logging global; os
    loggers de componente (ex.: PAINEL_PPG.dados) apenas propagam para ele.
    """

    FORMATO = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    FORMATO_DATA = "%Y-%m-%d %H:%M:%S"

    @staticmethod
    def _nivel(nome_nivel: str) -> int:
        nivel = logging.getLevelName(str(nome_nivel).upper())
        return nivel if isinstance(nivel, int) else logging.INFO

    @classmethod
    def configurar(cls, nome: str = NOME_RAIZ, nivel: str = None) -> logging.Logger:
        """Configura o logger se ainda não tiver handlers.

        Parâmetros:
        - nome (str): nome do logger
        - nivel (str | None): nível de log; None usa Configuracoes.LOG_LEVEL

        Retorno:
        - logging.Logger: logger configurado
        """
        instancia = logging.getLogger(nome)
        if instancia.handlers:
            return instancia

        saida = logging.StreamHandler(sys.stdout)
        saida.setFormatter(logging.Formatter(fmt=cls.FORMATO, datefmt=cls.FORMATO_DATA))
        instancia.addHandler(saida)
        instancia.setLevel(cls._nivel(nivel or Configuracoes.LOG_LEVEL))
        instancia.propagate = False
        return instancia

    @classmethod
    def obter(cls, componente: str) -> logging.Logger:
        """Logger de um componente, filho do raiz já configurado."""
        return cls.configurar().getChild(componente)


logger = FabricaLogger.configurar()
