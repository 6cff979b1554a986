"""
Modelos Pydantic do registro de execução do pipestep.
"""

from .trace import StageStatus, StageRecord, PipelineTrace

__all__ = [
    "StageStatus",
    "StageRecord",
    "PipelineTrace",
]
