"""Modelos de domínio do programa de pós-graduação.

Responsabilidades:
- Representar egressos, docentes, turmas, alunos, projetos e publicações
- Expor vocabulários fechados (curso, status, situação, categoria)
- Aceitar tanto nomes Python quanto as chaves camelCase dos backups JSON
"""

import uuid
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _novo_id() -> str:
    return str(uuid.uuid4())


class _EnumTextual(str, Enum):
    """Enum textual com normalização tolerante a caixa e espaços."""

    @classmethod
    def normalizar(cls, texto: Optional[str]):
        """Converte um texto livre no membro correspondente.

        Parâmetros:
        - texto (str | None): valor livre vindo dos dados

        Retorno:
        - Enum | None: membro encontrado ou None
        """
        if texto is None:
            return None
        alvo = str(texto).strip().casefold()
        for membro in cls:
            if membro.value.casefold() == alvo:
                return membro
        return None


class Curso(_EnumTextual):
    MESTRADO = "Mestrado"
    DOUTORADO = "Doutorado"


class StatusEgresso(_EnumTextual):
    DEFENDIDO = "Defendido"
    CURSANDO = "Cursando"


class SituacaoAluno(_EnumTextual):
    SEM_EVASAO = "Sem Evasão"
    DESLIGADO = "Desligado"
    DEFENDIDO = "Defendido"


class CategoriaDocente(_EnumTextual):
    PERMANENTE = "PERMANENTE"
    COLABORADOR = "COLABORADOR"
    PESQUISADOR = "PESQUISADOR"


class SituacaoAlunoEspecial(_EnumTextual):
    APROVADO = "Aprovado"
    REPROVADO_NOTA = "Reprovado por Nota"
    REPROVADO_FREQUENCIA = "Reprovado por Frequência"
    CURSANDO = "Cursando"


class _Registro(BaseModel):
    """Base imutável dos registros de domínio."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: str = Field(default_factory=_novo_id, min_length=1)


class Egresso(_Registro):
    """Aluno titulado ou em curso acompanhado pelo painel de egressos."""

    nome: str = "N/A"
    ano_ingresso: Optional[str] = Field(None, alias="anoIngresso", description="Data dd/mm/aaaa")
    ano_defesa: Optional[str] = Field(None, alias="anoDefesa", description="Data dd/mm/aaaa")
    orientador: Optional[str] = None
    titulo_defesa: str = Field("", alias="tituloDefesa")
    curso: Curso = Curso.MESTRADO
    status: StatusEgresso = StatusEgresso.CURSANDO
    cursando_doutorado: bool = Field(False, alias="cursandoDoutorado")
    trabalhando: Optional[str] = None
    trabalhando_outro_estado: bool = Field(False, alias="trabalhandoOutroEstado")


class Docente(_Registro):
    """Registro anual de um docente (uma linha por pessoa e ano).

    A categoria é texto livre; os indicadores comparam apenas
    PERMANENTE e COLABORADOR após normalização.
    """

    nome: str
    email: Optional[str] = None
    fone: Optional[str] = None
    categoria: str = "N/A"
    ano: int
    bolsa_pqdt: bool = Field(False, alias="bolsaPQDT")
    dedicacao_exclusiva_ppg: bool = Field(False, alias="dedicacaoExclusivaPPG")
    lecionou_disciplina_quadrienio: bool = Field(False, alias="lecionouDisciplinaQuadrienio")
    participou_publicacao_quadrienio: bool = Field(False, alias="participouPublicacaoQuadrienio")
    teve_orientacao_concluida_quadrienio: bool = Field(False, alias="teveOrientacaoConcluidaQuadrienio")


class Turma(_Registro):
    """Oferta de disciplina em um ano/período, ligada ao docente pelo nome."""

    ano: int
    periodo: str = ""
    cod_disciplina: str = Field("", alias="codDisciplina")
    disciplina: str = ""
    sigla_disciplina: str = Field("", alias="siglaDisciplina")
    situacao: str = ""
    docente: str = ""
    vagas_oferecidas: int = Field(0, alias="vagasOferecidas", ge=0)
    qtd_matriculado: int = Field(0, alias="qtdMatriculado", ge=0)
    qtd_aprovados: int = Field(0, alias="qtdAprovados", ge=0)
    qtd_reprovado_nota: int = Field(0, alias="qtdReprovadoNota", ge=0)
    qtd_reprovado_freq: int = Field(0, alias="qtdReprovadoFreq", ge=0)
    curso: Curso = Curso.MESTRADO
    categoria: str = ""


class AlunoRegular(_Registro):
    """Aluno regular em acompanhamento de prazos.

    Situação e bolsista são textos livres, como nas planilhas de origem.
    """

    matricula: str = ""
    aluno: str
    ingresso: Optional[str] = Field(None, description="Data dd/mm/aaaa")
    situacao: str = SituacaoAluno.SEM_EVASAO.value
    orientador: Optional[str] = None
    co_orientador: Optional[str] = Field(None, alias="coOrientador")
    proficiencia: Optional[str] = None
    qualificacao: Optional[str] = Field(None, description="Data dd/mm/aaaa")
    defesa: Optional[str] = Field(None, description="Data dd/mm/aaaa")
    bolsista: Optional[str] = None
    curso: Curso = Curso.MESTRADO
    email: Optional[str] = None
    fone: Optional[str] = None
    informacoes_extras: Optional[str] = Field(None, alias="informacoesExtras")

    @field_validator("proficiencia", mode="before")
    @classmethod
    def _proficiencia_como_texto(cls, valor):
        if valor is None or isinstance(valor, str):
            return valor
        return str(valor)


class AlunoEspecial(_Registro):
    matricula: str = ""
    aluno: str
    ano: int
    periodo: str = ""
    cod_disciplina: str = Field("", alias="codDisciplina")
    disciplina: str = ""
    situacao: SituacaoAlunoEspecial = SituacaoAlunoEspecial.CURSANDO
    email: Optional[str] = None
    fone: Optional[str] = None


class Projeto(_Registro):
    """Projeto de pesquisa; sem ano de fim significa projeto em andamento."""

    titulo: str
    natureza: str = ""
    coordenador: str = "N/A"
    financiador: str = ""
    colaboracao_nao_academica: str = Field("", alias="colaboracaoNaoAcademica")
    resumo: str = ""
    valor_financiado: float = Field(0.0, alias="valorFinanciado")
    atuacao: str = Field("Coordenador", pattern="^(Coordenador|Membro)$")
    alunos_mestrado_envolvidos: int = Field(0, alias="alunosMestradoEnvolvidos", ge=0)
    alunos_doutorado_envolvidos: int = Field(0, alias="alunosDoutoradoEnvolvidos", ge=0)
    ano_inicio: int = Field(..., alias="anoInicio")
    ano_fim: Optional[int] = Field(None, alias="anoFim")


class Periodico(_Registro):
    titulo: str
    periodico: str = ""
    autor: str = ""
    ano: int
    discente_egresso: bool = Field(False, alias="discenteEgresso")
    docente_ppg: bool = Field(False, alias="docentePPGEE")
    categoria: str = ""


class Conferencia(_Registro):
    titulo: str
    autor: str = ""
    ano: int
    categoria: str = ""


class ColecoesPrograma(BaseModel):
    """Conjunto completo das coleções lidas pela camada de persistência."""

    model_config = ConfigDict(frozen=True)

    egressos: List[Egresso] = Field(default_factory=list)
    docentes: List[Docente] = Field(default_factory=list)
    projetos: List[Projeto] = Field(default_factory=list)
    turmas: List[Turma] = Field(default_factory=list)
    alunos_regulares: List[AlunoRegular] = Field(default_factory=list)
    alunos_especiais: List[AlunoEspecial] = Field(default_factory=list)
    periodicos: List[Periodico] = Field(default_factory=list)
    conferencias: List[Conferencia] = Field(default_factory=list)
