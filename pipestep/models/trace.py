"""
Modelos Pydantic para o registro de uma execução passo a passo.

Cada etapa passa uma única vez de 'pending' para um estado final, da esquerda
para a direita. O registro fica disponível em StageInterceptor.trace depois
da execução, com sucesso ou não.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

StageStatus = Literal["pending", "success", "failure_reported", "failure_suppressed"]


class StageRecord(BaseModel):
    """Estado e resultado de uma etapa do pipeline."""

    model_config = ConfigDict(extra="forbid")

    index: int = Field(..., ge=1, description="Posição da etapa (1 = primeira após a raiz).")
    text: str = Field(..., description="Texto da etapa como escrito no pipeline.")
    status: StageStatus = "pending"
    result_type: str | None = Field(None, description="Nome do tipo do resultado, se houve sucesso.")
    error: str | None = Field(None, description="'Tipo: mensagem' da exceção, se houve falha.")


class PipelineTrace(BaseModel):
    """Registro completo de uma execução."""

    model_config = ConfigDict(extra="forbid")

    source: str
    width: int = Field(..., ge=0, description="Largura dos cabeçalhos.")
    stages: list[StageRecord] = Field(default_factory=list)
    completed: bool = False

    @property
    def failed_stage(self) -> StageRecord | None:
        """Etapa cujo erro foi reportado, se houver."""
        for record in self.stages:
            if record.status == "failure_reported":
                return record
        return None

    def count(self, status: StageStatus) -> int:
        """Número de etapas em um estado."""
        return sum(1 for record in self.stages if record.status == status)
