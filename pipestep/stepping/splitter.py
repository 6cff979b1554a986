"""
Divisão da expressão de pipeline em etapas.

O texto do pipeline é recebido sem avaliar. A largura dos cabeçalhos vem de
uma divisão puramente textual no operador de encadeamento; a execução usa a
árvore sintática (ast) para separar a raiz e as etapas, cada uma compilada
uma única vez.

Semântica de aplicação de cada etapa (o valor anterior fica em `_`):
    f(a, b=1)        → f(_, a, b=1)
    f / lambda / ... → f(_)
    _.query("x > 1") → avaliada como escrita (placeholder explícito)
    merge(outro, _)  → avaliada como escrita (placeholder explícito)
    _ + 1            → avaliada como escrita (placeholder explícito)
"""

import ast
import logging
import textwrap
from dataclasses import dataclass, field
from types import CodeType

from pipestep.errors import PipelineSyntaxError
from pipestep.stepping.pretty import CHAIN_MARKER
from pipestep.utils.config import get_config

logger = logging.getLogger(__name__)

PLACEHOLDER = "_"
FILENAME = "<pipeline>"


@dataclass(frozen=True)
class PipelineStage:
    """Uma etapa do encadeamento, já compilada com o placeholder aplicado."""

    index: int
    text: str
    code: CodeType

    @property
    def step_text(self) -> str:
        """Reconstrução de uma linha do passo: '_ >> <etapa>'."""
        return f"{PLACEHOLDER} {CHAIN_MARKER} {self.text}"


@dataclass
class PipelineChain:
    """Raiz e etapas de um pipeline, na ordem da esquerda para a direita."""

    source: str
    root_text: str
    root: CodeType
    stages: list[PipelineStage] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.stages)


def _parse_expression(source: str) -> ast.Expression:
    """Analisa o texto como expressão; parênteses externos permitem várias linhas."""
    if not source or not source.strip():
        raise PipelineSyntaxError(source, "expressão vazia")

    text = textwrap.dedent(source).strip()

    try:
        return ast.parse(text, filename=FILENAME, mode="eval")
    except SyntaxError as exc:
        error = exc

    try:
        tree = ast.parse(f"(\n{text}\n)", filename=FILENAME, mode="eval")
    except SyntaxError:
        raise PipelineSyntaxError(source, error.msg) from error

    # A expressão deve ficar entre os parênteses externos (linha 2 até a penúltima)
    closing_line = text.count("\n") + 3
    if tree.body.lineno < 2 or tree.body.end_lineno >= closing_line:
        raise PipelineSyntaxError(source, "parênteses desbalanceados")

    return tree


def _normalize(source: str) -> str:
    """Texto de uma linha equivalente ao pipeline (ou o próprio texto se inválido)."""
    try:
        return ast.unparse(_parse_expression(source).body)
    except PipelineSyntaxError:
        return source


def split_stages(source: str, marker: str = CHAIN_MARKER) -> list[str]:
    """
    Divide o texto do pipeline em cada operador de encadeamento.

    A divisão é textual: os pedaços mantêm os espaços ao redor e um operador
    dentro de uma string literal também divide o texto.

    Args:
        source: Texto do pipeline, não avaliado
        marker: Operador de encadeamento

    Returns:
        Lista de pedaços; sem operadores, lista com um único elemento

    Example:
        >>> split_stages("df >> dropna >> head(3)")
        ['df ', ' dropna ', ' head(3)']
    """
    return _normalize(source).split(marker)


def header_width(source: str, padding: int | None = None, marker: str = CHAIN_MARKER) -> int:
    """
    Calcula a largura dos cabeçalhos: maior pedaço do pipeline + padding.

    Args:
        source: Texto do pipeline, não avaliado
        padding: Caracteres extras (padrão: config stepping.padding)
        marker: Operador de encadeamento

    Returns:
        Largura em caracteres
    """
    if padding is None:
        padding = get_config().get_padding()

    return max(len(piece) for piece in split_stages(source, marker)) + padding


def _is_placeholder(node: ast.AST) -> bool:
    return isinstance(node, ast.Name) and node.id == PLACEHOLDER


def _receiver(node: ast.AST) -> ast.AST:
    """Objeto na ponta esquerda de uma cadeia de atributos, índices e chamadas."""
    while isinstance(node, (ast.Attribute, ast.Subscript, ast.Call)):
        node = node.func if isinstance(node, ast.Call) else node.value
    return node


def _operands(node: ast.AST) -> list[ast.AST]:
    """Operandos diretos de operadores e iteráveis de compreensões."""
    if isinstance(node, ast.BinOp):
        return [node.left, node.right]
    if isinstance(node, ast.UnaryOp):
        return [node.operand]
    if isinstance(node, ast.Compare):
        return [node.left, *node.comparators]
    if isinstance(node, ast.BoolOp):
        return list(node.values)
    if isinstance(node, (ast.ListComp, ast.SetComp, ast.DictComp, ast.GeneratorExp)):
        return [generator.iter for generator in node.generators]
    return []


def uses_placeholder(node: ast.expr) -> bool:
    """
    Indica se a etapa já referencia o placeholder explicitamente.

    Conta como explícito o placeholder usado como receptor da expressão
    (`_.query(...)`, `_["col"]`), como argumento direto de uma chamada
    (`merge(outro, _)`, `f(df=_)`), como operando de um operador
    (`_ + 1`, `-_`, `(_ > 3)`, `_.a * 2 + 1`) ou como iterável de uma
    compreensão (`[v * 2 for v in _]`). Usos dentro de lambdas ou de
    argumentos aninhados não contam.
    """
    if _is_placeholder(_receiver(node)):
        return True

    if any(uses_placeholder(operand) for operand in _operands(node)):
        return True

    if isinstance(node, ast.Call):
        for arg in node.args:
            value = arg.value if isinstance(arg, ast.Starred) else arg
            if _is_placeholder(value):
                return True
        return any(_is_placeholder(keyword.value) for keyword in node.keywords)

    return False


def _apply_stage(node: ast.expr) -> ast.expr:
    """Insere o placeholder como primeiro argumento da etapa."""
    if uses_placeholder(node):
        return node

    placeholder = ast.Name(id=PLACEHOLDER, ctx=ast.Load())

    if isinstance(node, ast.Call):
        applied = ast.Call(func=node.func, args=[placeholder, *node.args], keywords=node.keywords)
    else:
        applied = ast.Call(func=node, args=[placeholder], keywords=[])

    return ast.copy_location(applied, node)


def _compile(node: ast.expr) -> CodeType:
    expression = ast.fix_missing_locations(ast.Expression(body=node))
    return compile(expression, FILENAME, "eval")


def _flatten_chain(node: ast.expr) -> list[ast.expr]:
    """Desfaz a associação à esquerda de a >> b >> c em [a, b, c]."""
    operands = []
    while isinstance(node, ast.BinOp) and isinstance(node.op, ast.RShift):
        operands.append(node.right)
        node = node.left
    operands.append(node)
    return operands[::-1]


def parse_chain(source: str) -> PipelineChain:
    """
    Analisa o pipeline e compila a raiz e cada etapa.

    Somente o `>>` de nível mais alto define etapas; `>>` dentro de uma
    etapa é Python comum e não é instrumentado.

    Args:
        source: Texto do pipeline, não avaliado

    Returns:
        PipelineChain com a raiz e as etapas na ordem de execução

    Raises:
        PipelineSyntaxError: Se o texto não é uma expressão Python válida
    """
    tree = _parse_expression(source)
    root, *stage_nodes = _flatten_chain(tree.body)

    stages = [
        PipelineStage(index=index, text=ast.unparse(node), code=_compile(_apply_stage(node)))
        for index, node in enumerate(stage_nodes, start=1)
    ]

    logger.debug("Pipeline analisado: raiz %r, %d etapas", ast.unparse(root), len(stages))

    return PipelineChain(
        source=source,
        root_text=ast.unparse(root),
        root=_compile(root),
        stages=stages,
    )
