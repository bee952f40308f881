"""
Conformity Entities - Report data derived from evaluated calibration points.

ConformityAssessment and CalibrationAnalysis are recomputed on demand and
never mutated in place. Field names follow the Portuguese vocabulary of
the critical-analysis record (RAC).
"""
from dataclasses import dataclass, field
from typing import List, Optional

from .calibration_point import CalibrationPoint, CalibrationRange


@dataclass(frozen=True)
class DecisionRule:
    """Decision rule applied to declare conformity."""
    descricao: str
    utiliza_incerteza: bool


@dataclass(frozen=True)
class RiskLevel:
    """Risk level considered by the decision rule."""
    descricao: str
    nivel_confianca: str


@dataclass(frozen=True)
class Justifications:
    """Narrative justifications attached to the assessment."""
    comentario_conformidade: str
    comentario_limite: str
    comentario_regra_decisao: str
    comentario_nivel_risco: str

    def to_dict(self) -> dict:
        return {
            'comentarioConformidade': self.comentario_conformidade,
            'comentarioLimite': self.comentario_limite,
            'comentarioRegraDecisao': self.comentario_regra_decisao,
            'comentarioNivelRisco': self.comentario_nivel_risco,
        }


@dataclass(frozen=True)
class ConformityAssessment:
    """
    Conformity statement for a set of calibration points.

    Attributes:
        declaracao_presente: Conformity statement is present
        limite_especificacao_definido: Specification limit is defined
        regra_decisao_aplicada: Decision rule description
        nivel_risco_considerado: Confidence level narrative
        justificativas: Free-text justifications
        total_points: Number of evaluated points
        conforming_count: Points with ok == True
        non_conforming_count: Points with ok == False
        non_conforming_points: Labels of non-conforming points, in input order
    """

    declaracao_presente: bool
    limite_especificacao_definido: bool
    regra_decisao_aplicada: DecisionRule
    nivel_risco_considerado: RiskLevel
    justificativas: Justifications
    total_points: int = 0
    conforming_count: int = 0
    non_conforming_count: int = 0
    non_conforming_points: List[str] = field(default_factory=list)

    @property
    def all_conform(self) -> bool:
        return self.non_conforming_count == 0

    def to_dict(self) -> dict:
        return {
            'declaracaoPresente': self.declaracao_presente,
            'limiteEspecificacaoDefinido': self.limite_especificacao_definido,
            'regraDecisaoAplicada': {
                'descricao': self.regra_decisao_aplicada.descricao,
                'utilizaIncerteza': self.regra_decisao_aplicada.utiliza_incerteza,
            },
            'nivelRiscoConsiderado': {
                'descricao': self.nivel_risco_considerado.descricao,
                'nivelConfianca': self.nivel_risco_considerado.nivel_confianca,
            },
            'justificativas': self.justificativas.to_dict(),
            'totalPoints': self.total_points,
            'conformingCount': self.conforming_count,
            'nonConformingCount': self.non_conforming_count,
            'nonConformingPoints': list(self.non_conforming_points),
        }


@dataclass(frozen=True)
class CalibrationAnalysis:
    """Range metadata, evaluated points and the conformity assessment."""

    faixa_calibracao: CalibrationRange
    faixa_operacional: CalibrationRange
    pontos_calibrados: List[CalibrationPoint]
    comentarios_resultados: str
    conformidade: ConformityAssessment
    recommended_operational_limit: Optional[float] = None
