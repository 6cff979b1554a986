"""
Impressão legível de etapas encadeadas.

Quebra uma string de uma linha com operadores de encadeamento em várias
linhas indentadas, para uso nos cabeçalhos de cada etapa.
"""

import re

from pipestep.utils.config import get_config

CHAIN_MARKER = ">>"


def pretty_pipe(text: str, marker: str = CHAIN_MARKER, indent: str | None = None) -> str:
    """
    Insere quebra de linha e indentação depois de cada operador de encadeamento.

    Os espaços que seguem o operador são absorvidos pela quebra. Se o texto
    começa com o operador, a primeira quebra é desfeita para que a primeira
    etapa não fique sozinha em uma linha em branco.

    Args:
        text: String de uma linha com as etapas (ex: "a >> b >> c")
        marker: Operador de encadeamento procurado no texto
        indent: Indentação após cada quebra (padrão: config stepping.indent)

    Returns:
        Versão em várias linhas do texto

    Example:
        >>> pretty_pipe("a %>% b %>% c", marker="%>%")
        'a %>%\\n  b %>%\\n  c'
    """
    if indent is None:
        indent = get_config().get_indent()

    line_break = f"{marker}\n{indent}"
    pretty = re.sub(re.escape(marker) + r"[ \t]*", lambda _match: line_break, text)

    if pretty.startswith(line_break):
        pretty = f"{marker} " + pretty[len(line_break):]

    return pretty
