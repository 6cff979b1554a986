"""
Módulo de reporting para formatação das saídas do passo a passo.

Fornece o cabeçalho em caixa de cada etapa, as prévias dos resultados
intermediários e os banners de início e fim da execução.
"""

import itertools
import traceback
from collections.abc import Iterable, Iterator, Mapping, Sized
from typing import Any

import numpy as np
import pandas as pd

from pipestep.utils.config import get_config

START_BANNER = "Stepping through pipes:"
COMPLETION_BANNER = "Pipes completed!"
ERROR_MESSAGE = "Error in this step of the pipe chain. Error details:"


def separator_line(char: str = "-", length: int = 60) -> str:
    """
    Monta uma linha separadora terminada em quebra de linha.

    Args:
        char: Caractere repetido
        length: Número de repetições

    Returns:
        String separadora (ex: "------...\\n")
    """
    return char * length + "\n"


def print_header(text: str, width: int, char: str | None = None):
    """
    Imprime cabeçalho em caixa: separador, texto da etapa, separador.

    O texto não é truncado nem preenchido; pode ser mais largo ou mais
    estreito que os separadores.

    Args:
        text: Texto do cabeçalho (pode ter várias linhas)
        width: Largura dos separadores
        char: Caractere dos separadores (padrão: config stepping.separator_char)
    """
    if char is None:
        char = get_config().get_separator_char()

    print(separator_line(char, width), end="")
    print(text)
    print(separator_line(char, width), end="")


def make_preview(value: Any, n: int) -> Any:
    """
    Recorta uma prévia curta do valor, sem alterar o valor original.

    DataFrames e Series usam head(n); arrays, índices, listas e tuplas
    mantêm os n primeiros elementos; mapeamentos os n primeiros itens.
    Outras coleções com tamanho (set, deque, views de dict) são recortadas
    no próprio tipo, ou em lista quando o tipo não aceita um iterável.
    Strings, iteradores (não são consumidos) e demais objetos são mostrados
    inteiros.

    Args:
        value: Resultado de uma etapa
        n: Número de linhas/elementos da prévia

    Returns:
        Objeto a ser impresso como prévia
    """
    if isinstance(value, (pd.DataFrame, pd.Series)):
        return value.head(n)

    if isinstance(value, (np.ndarray, pd.Index)):
        if value.ndim == 0:
            return value
        return value[:n]

    if isinstance(value, (str, bytes)):
        return value

    if isinstance(value, Mapping):
        return dict(itertools.islice(value.items(), n))

    if isinstance(value, (list, tuple, range)):
        return value[:n]

    if isinstance(value, Iterator):
        return value

    if isinstance(value, Sized) and isinstance(value, Iterable) and len(value) > n:
        try:
            return type(value)(itertools.islice(value, n))
        except (TypeError, ValueError):
            return list(itertools.islice(value, n))

    return value


class StepReporter:
    """Classe para impressão consistente das etapas de um pipeline."""

    def __init__(
        self,
        width: int,
        preview_rows: int | None = None,
        separator_char: str | None = None,
        display_options: dict[str, Any] | None = None,
    ):
        """
        Inicializa o reporter.

        Args:
            width: Largura dos separadores do cabeçalho
            preview_rows: Linhas/elementos nas prévias (padrão: config)
            separator_char: Caractere dos separadores (padrão: config)
            display_options: Opções 'display.*' do pandas (padrão: config)
        """
        cfg = get_config()
        self.width = width
        self.preview_rows = preview_rows if preview_rows is not None else cfg.get_preview_rows()
        self.separator_char = separator_char or cfg.get_separator_char()
        self.display_options = (
            display_options if display_options is not None else cfg.get_display_options()
        )

    def start(self):
        """Imprime o banner de início."""
        print("\n" + START_BANNER)

    def header(self, text: str):
        """Imprime o cabeçalho em caixa da etapa."""
        print_header(text, self.width, self.separator_char)

    def preview(self, value: Any):
        """
        Imprime a prévia do resultado seguida de uma linha em branco.

        Args:
            value: Resultado completo da etapa
        """
        sample = make_preview(value, self.preview_rows)

        if self.display_options:
            option_pairs = list(itertools.chain.from_iterable(self.display_options.items()))
            with pd.option_context(*option_pairs):
                print(sample)
        else:
            print(sample)

        print()

    def error(self, exc: BaseException):
        """
        Imprime o relatório de erro da etapa.

        Args:
            exc: Exceção levantada ao avaliar a etapa
        """
        print(ERROR_MESSAGE)
        print("".join(traceback.format_exception_only(type(exc), exc)).rstrip())
        print()

    def finish(self):
        """Imprime o banner de conclusão."""
        print(COMPLETION_BANNER + "\n")
