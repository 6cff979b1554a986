"""
Interceptação das etapas de um pipeline.

O StageInterceptor faz o papel do operador de encadeamento: avalia uma etapa
por vez contra o resultado da etapa anterior, imprime o cabeçalho e uma
prévia do resultado e devolve o valor completo para a próxima etapa.

Fluxo de uma execução:
    texto do pipeline
        → header_width()          largura dos cabeçalhos
        → parse_chain()           raiz + etapas compiladas
        → EvaluationScope         interceptor, largura, flag de erro
            → intercept() × N     uma vez por etapa, da esquerda para a direita
                → valor final     ou PipelineChainError na primeira falha

Um erro é reportado uma única vez por execução; falhas observadas depois que
o erro já foi reportado são registradas como suprimidas e não reimprimem nada.
"""

import enum
import inspect
import logging
from dataclasses import dataclass
from typing import Any, Callable

from pipestep.errors import PipelineChainError
from pipestep.models.trace import PipelineTrace, StageRecord
from pipestep.stepping.pretty import pretty_pipe
from pipestep.stepping.reporting import StepReporter
from pipestep.stepping.splitter import PLACEHOLDER, PipelineStage, header_width, parse_chain

logger = logging.getLogger(__name__)


class _Sentinel(enum.Enum):
    NO_RESULT = "no result"

    def __repr__(self) -> str:
        return self.name


# Sinal de "sem resultado" após um erro; distinto de None, que é um resultado válido
NO_RESULT = _Sentinel.NO_RESULT


@dataclass
class EvaluationScope:
    """Estado privado de uma execução: operador, largura e flag de erro."""

    intercept: Callable[..., Any]
    width: int
    reporter: StepReporter
    trace: PipelineTrace
    error_reported: bool = False
    error: BaseException | None = None


def _describe(exc: BaseException) -> str:
    return f"{type(exc).__name__}: {exc}"


class StageInterceptor:
    """Avalia e reporta as etapas de um pipeline, uma de cada vez."""

    def __init__(
        self,
        namespace: dict[str, Any] | None = None,
        preview_rows: int | None = None,
        padding: int | None = None,
        display_options: dict[str, Any] | None = None,
    ):
        """
        Inicializa o interceptor.

        Args:
            namespace: Nomes visíveis às etapas (funções, DataFrames, módulos)
            preview_rows: Linhas/elementos nas prévias (padrão: config)
            padding: Caracteres extras na largura do cabeçalho (padrão: config)
            display_options: Opções 'display.*' do pandas (padrão: config)
        """
        self.namespace = dict(namespace) if namespace is not None else {}
        self.preview_rows = preview_rows
        self.padding = padding
        self.display_options = display_options
        self.trace: PipelineTrace | None = None

    def _evaluate(self, code, left_value: Any = NO_RESULT) -> Any:
        # Cópia rasa: `_` nunca vaza para o namespace do chamador
        scope = dict(self.namespace)
        if left_value is not NO_RESULT:
            scope[PLACEHOLDER] = left_value
        return eval(code, scope)

    def intercept(self, scope: EvaluationScope, left_value: Any, stage: PipelineStage) -> Any:
        """
        Avalia uma etapa contra o valor acumulado e reporta o resultado.

        Args:
            scope: Estado da execução corrente
            left_value: Resultado de todas as etapas anteriores
            stage: Etapa a avaliar

        Returns:
            Resultado completo da etapa, ou NO_RESULT se ela falhou
        """
        record = scope.trace.stages[stage.index - 1]
        header = pretty_pipe(stage.step_text)

        try:
            result = self._evaluate(stage.code, left_value)
        except Exception as exc:
            return self._fail(scope, record, header, exc)

        scope.reporter.header(header)
        scope.reporter.preview(result)

        record.status = "success"
        record.result_type = type(result).__name__
        logger.debug("Etapa %d (%s) -> %s", stage.index, stage.text, record.result_type)

        return result

    def _fail(self, scope: EvaluationScope, record: StageRecord, header: str, exc: Exception):
        record.error = _describe(exc)

        if scope.error_reported:
            record.status = "failure_suppressed"
            logger.debug("Etapa %d: erro já reportado, suprimindo", record.index)
            return NO_RESULT

        scope.reporter.header(header)
        scope.reporter.error(exc)

        scope.error_reported = True
        scope.error = exc
        record.status = "failure_reported"
        logger.warning("Etapa %d (%s) falhou: %s", record.index, record.text, record.error)

        return NO_RESULT

    def run(self, source: str) -> Any:
        """
        Executa o pipeline etapa por etapa, imprimindo cada passo.

        Args:
            source: Texto do pipeline, não avaliado (ex: "df >> dropna >> head(3)")

        Returns:
            Valor final do pipeline, idêntico ao da avaliação sem instrumentação

        Raises:
            PipelineSyntaxError: Se o texto não é uma expressão válida
            PipelineChainError: Se alguma etapa falhou (o erro já foi impresso)
        """
        self.trace = None

        chain = parse_chain(source)
        width = header_width(source, self.padding)

        self.trace = PipelineTrace(
            source=source,
            width=width,
            stages=[StageRecord(index=stage.index, text=stage.text) for stage in chain.stages],
        )
        scope = EvaluationScope(
            intercept=self.intercept,
            width=width,
            reporter=StepReporter(
                width,
                preview_rows=self.preview_rows,
                display_options=self.display_options,
            ),
            trace=self.trace,
        )

        scope.reporter.start()

        try:
            value = self._evaluate(chain.root)
        except Exception as exc:
            if not chain.stages:
                raise
            # A raiz é avaliada como lado esquerdo da primeira etapa
            first = chain.stages[0]
            self._fail(scope, self.trace.stages[0], pretty_pipe(first.step_text), exc)
            raise PipelineChainError(first.index, first.text, scope.error) from None

        for stage in chain.stages:
            value = scope.intercept(scope, value, stage)
            if value is NO_RESULT:
                raise PipelineChainError(stage.index, stage.text, scope.error)

        scope.reporter.finish()
        self.trace.completed = True
        logger.info("Pipeline concluído: %d etapas", len(chain))

        return value

    def evaluate(self, source: str) -> Any:
        """
        Avalia o pipeline com a mesma semântica de run(), sem imprimir nada.

        Exceções das etapas propagam sem tratamento.
        """
        chain = parse_chain(source)
        value = self._evaluate(chain.root)
        for stage in chain.stages:
            value = self._evaluate(stage.code, value)
        return value


def _caller_namespace(frame) -> dict[str, Any]:
    """Globais e locais do chamador, com os locais prevalecendo."""
    try:
        return {**frame.f_globals, **frame.f_locals}
    finally:
        del frame


def step_through_pipes(
    source: str,
    namespace: dict[str, Any] | None = None,
    *,
    preview_rows: int | None = None,
    padding: int | None = None,
) -> Any:
    """
    Mostra os resultados intermediários de um pipeline encadeado com `>>`.

    Args:
        source: Texto do pipeline, não avaliado
        namespace: Nomes visíveis às etapas (padrão: globais e locais do chamador)
        preview_rows: Linhas/elementos nas prévias (padrão: config)
        padding: Caracteres extras na largura do cabeçalho (padrão: config)

    Returns:
        Valor final do pipeline (não é impresso)

    Raises:
        PipelineChainError: Se alguma etapa falhou

    Example:
        >>> step_through_pipes('''
        ...     characters
        ...     >> pd.DataFrame.assign(bmi=lambda d: d.mass / (d.height / 100) ** 2)
        ...     >> pd.DataFrame.query("bmi < 22")
        ...     >> pd.DataFrame.sort_values("name")
        ... ''')
    """
    if namespace is None:
        namespace = _caller_namespace(inspect.currentframe().f_back)

    interceptor = StageInterceptor(namespace, preview_rows=preview_rows, padding=padding)
    return interceptor.run(source)


def run_pipeline(source: str, namespace: dict[str, Any] | None = None) -> Any:
    """
    Avalia o pipeline sem instrumentação (mesma semântica, nenhuma saída).

    Args:
        source: Texto do pipeline, não avaliado
        namespace: Nomes visíveis às etapas (padrão: globais e locais do chamador)

    Returns:
        Valor final do pipeline
    """
    if namespace is None:
        namespace = _caller_namespace(inspect.currentframe().f_back)

    return StageInterceptor(namespace).evaluate(source)
