"""
pipestep - passo a passo de pipelines encadeados.

Avalia cada etapa de um pipeline `a >> f() >> g()` isoladamente e imprime
um cabeçalho e uma prévia do resultado intermediário, devolvendo o valor
final sem alterá-lo.

Exemplo de uso:
    from pipestep import step_through_pipes

    result = step_through_pipes("df >> pd.DataFrame.dropna() >> pd.DataFrame.head(3)")
"""

from .errors import PipestepError, PipelineSyntaxError, PipelineChainError
from .stepping import step_through_pipes, run_pipeline, StageInterceptor, NO_RESULT

__all__ = [
    "step_through_pipes",
    "run_pipeline",
    "StageInterceptor",
    "NO_RESULT",
    "PipestepError",
    "PipelineSyntaxError",
    "PipelineChainError",
]
