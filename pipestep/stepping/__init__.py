"""
Módulo de passo a passo de pipelines encadeados.

- Pretty printer: quebra a etapa em várias linhas para o cabeçalho
- Reporting: cabeçalho em caixa, prévias e banners
- Splitter: largura dos cabeçalhos e análise da expressão em etapas
- Interceptor: avaliação e reporte de uma etapa por vez
"""

from .pretty import CHAIN_MARKER, pretty_pipe
from .reporting import StepReporter, separator_line, print_header, make_preview
from .splitter import (
    PLACEHOLDER,
    PipelineChain,
    PipelineStage,
    split_stages,
    header_width,
    parse_chain,
    uses_placeholder,
)
from .interceptor import (
    NO_RESULT,
    EvaluationScope,
    StageInterceptor,
    step_through_pipes,
    run_pipeline,
)

__all__ = [
    # Pretty printer
    "CHAIN_MARKER",
    "pretty_pipe",
    # Reporting
    "StepReporter",
    "separator_line",
    "print_header",
    "make_preview",
    # Splitter
    "PLACEHOLDER",
    "PipelineChain",
    "PipelineStage",
    "split_stages",
    "header_width",
    "parse_chain",
    "uses_placeholder",
    # Interceptor
    "NO_RESULT",
    "EvaluationScope",
    "StageInterceptor",
    "step_through_pipes",
    "run_pipeline",
]
