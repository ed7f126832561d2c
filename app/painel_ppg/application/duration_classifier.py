"""Classificação de duração e pendências de alunos regulares.

Responsabilidades:
- Calcular meses decorridos desde o ingresso
- Sinalizar pendências de orientador, proficiência e qualificação
- Classificar a saúde do prazo (vermelho/verde) para tabelas e relatórios
"""

from datetime import date, datetime
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict

from painel_ppg.config.settings import Configuracoes
from painel_ppg.domain.entities import AlunoRegular, Curso, SituacaoAluno
from painel_ppg.util.datas import converter_data_br, meses_entre

_NAO_CALCULADA: Any = object()


class SaudeDuracao(str, Enum):
    VERMELHO = "vermelho"
    VERDE = "verde"


class AvaliacaoAluno(BaseModel):
    """Resultado consolidado da classificação de um aluno."""

    model_config = ConfigDict(frozen=True)

    duracao_meses: Optional[float]
    duracao_texto: str
    orientador_pendente: bool
    proficiencia_pendente: bool
    qualificacao_pendente: bool
    saude: Optional[SaudeDuracao]


class ClassificadorDuracao:
    """Aplica as regras de prazo do programa a alunos regulares.

    Responsabilidades:
    - Resolver a data final conforme a situação do aluno
    - Avaliar alertas com os limites definidos em Configuracoes
    - Nunca estimar datas ausentes: sem data, sem duração
    """

    def __init__(self, data_referencia: Optional[date] = None):
        """Inicializa o classificador.

        Parâmetros:
        - data_referencia (date | None): data usada como "hoje"; None usa a data corrente
        """
        self.data_referencia = data_referencia

    def _hoje(self) -> date:
        referencia = self.data_referencia or date.today()
        if isinstance(referencia, datetime):
            return referencia.date()
        return referencia

    def calcular_duracao_meses(self, aluno: AlunoRegular) -> Optional[float]:
        """Calcula meses decorridos entre o ingresso e a data final do aluno.

        A data final é hoje para "Sem Evasão" e a data de defesa para
        "Defendido". Qualquer outra situação, ingresso inválido ou defesa
        inválida resulta em duração indefinida.

        Parâmetros:
        - aluno (AlunoRegular): aluno avaliado

        Retorno:
        - float | None: duração em meses médios
        """
        ingresso = converter_data_br(aluno.ingresso)
        if ingresso is None:
            return None

        situacao = SituacaoAluno.normalizar(aluno.situacao)
        if situacao is SituacaoAluno.SEM_EVASAO:
            fim = self._hoje()
        elif situacao is SituacaoAluno.DEFENDIDO:
            fim = converter_data_br(aluno.defesa)
        else:
            return None

        if fim is None:
            return None
        return meses_entre(ingresso, fim)

    @staticmethod
    def _desligado(aluno: AlunoRegular) -> bool:
        return SituacaoAluno.normalizar(aluno.situacao) is SituacaoAluno.DESLIGADO

    @staticmethod
    def _preenchido(valor: Optional[str]) -> bool:
        return bool(valor and valor.strip())

    def _duracao(self, aluno: AlunoRegular, duracao: Optional[float]) -> Optional[float]:
        if duracao is _NAO_CALCULADA:
            return self.calcular_duracao_meses(aluno)
        return duracao

    def alerta_orientador_pendente(self, aluno: AlunoRegular, duracao: Optional[float] = _NAO_CALCULADA) -> bool:
        """Mestrando ativo há mais de 6 meses sem orientador."""
        if aluno.curso is not Curso.MESTRADO or self._desligado(aluno):
            return False
        meses = self._duracao(aluno, duracao)
        return (
            meses is not None
            and meses > Configuracoes.LIMITE_MESES_ORIENTADOR
            and not self._preenchido(aluno.orientador)
        )

    def alerta_proficiencia_pendente(self, aluno: AlunoRegular) -> bool:
        """Mestrando ativo sem nota de proficiência, independente da duração."""
        if aluno.curso is not Curso.MESTRADO or self._desligado(aluno):
            return False
        return not self._preenchido(aluno.proficiencia)

    def alerta_qualificacao_pendente(self, aluno: AlunoRegular, duracao: Optional[float] = _NAO_CALCULADA) -> bool:
        """Aluno ativo sem qualificação após o prazo do seu curso."""
        if self._desligado(aluno) or self._preenchido(aluno.qualificacao):
            return False
        meses = self._duracao(aluno, duracao)
        if meses is None:
            return False
        if aluno.curso is Curso.MESTRADO:
            return meses > Configuracoes.LIMITE_MESES_QUALIFICACAO_MESTRADO
        if aluno.curso is Curso.DOUTORADO:
            return meses > Configuracoes.LIMITE_MESES_QUALIFICACAO_DOUTORADO
        return False

    def classificar_saude(self, aluno: AlunoRegular, duracao: Optional[float] = _NAO_CALCULADA) -> Optional[SaudeDuracao]:
        """Classifica o prazo do aluno em vermelho (atrasado), verde (em dia) ou sem cor.

        Parâmetros:
        - aluno (AlunoRegular): aluno avaliado
        - duracao (float | None): duração já calculada, inclusive None; omitida, é calculada aqui

        Retorno:
        - SaudeDuracao | None: classificação ou None quando não se aplica
        """
        meses = self._duracao(aluno, duracao)
        if meses is None or self._desligado(aluno):
            return None

        mestrado = aluno.curso is Curso.MESTRADO
        doutorado = aluno.curso is Curso.DOUTORADO
        sem_qualificacao = not self._preenchido(aluno.qualificacao)

        atrasado = (
            (mestrado and meses > Configuracoes.LIMITE_MESES_QUALIFICACAO_MESTRADO and sem_qualificacao)
            or (mestrado and meses > Configuracoes.LIMITE_MESES_MESTRADO)
            or (doutorado and meses > Configuracoes.LIMITE_MESES_QUALIFICACAO_DOUTORADO and sem_qualificacao)
            or (doutorado and meses > Configuracoes.LIMITE_MESES_DOUTORADO)
        )
        if atrasado:
            return SaudeDuracao.VERMELHO

        if mestrado:
            return SaudeDuracao.VERDE
        if doutorado and meses > Configuracoes.LIMITE_MESES_QUALIFICACAO_DOUTORADO and not sem_qualificacao:
            return SaudeDuracao.VERDE
        return None

    @staticmethod
    def formatar_duracao(duracao: Optional[float]) -> str:
        return f"{duracao:.1f} meses" if duracao is not None else "-"

    def avaliar(self, aluno: AlunoRegular) -> AvaliacaoAluno:
        """Calcula duração e todos os sinalizadores de um aluno de uma vez."""
        duracao = self.calcular_duracao_meses(aluno)
        return AvaliacaoAluno(
            duracao_meses=duracao,
            duracao_texto=self.formatar_duracao(duracao),
            orientador_pendente=self.alerta_orientador_pendente(aluno, duracao),
            proficiencia_pendente=self.alerta_proficiencia_pendente(aluno),
            qualificacao_pendente=self.alerta_qualificacao_pendente(aluno, duracao),
            saude=self.classificar_saude(aluno, duracao),
        )
