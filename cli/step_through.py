#!/usr/bin/env python3
"""
CLI para executar um pipeline passo a passo sobre um arquivo de dados.

O arquivo é carregado em `df`; `pd` e `np` ficam disponíveis para as etapas.

Exemplo de uso:
    # Pipeline simples sobre um CSV
    uv run python cli/step_through.py data/characters.csv \\
        'df >> pd.DataFrame.dropna() >> pd.DataFrame.query("mass > 50")'

    # Funções auxiliares definidas em um arquivo Python
    uv run python cli/step_through.py data/characters.csv \\
        'df >> add_bmi >> lean_only' --define helpers.py --rows 10
"""

import argparse
import logging
import runpy
import sys
from pathlib import Path

import numpy as np
import pandas as pd

# Adicionar raiz do projeto ao path
sys.path.insert(0, str(Path(__file__).parent.parent))

from pipestep.errors import PipelineChainError, PipestepError
from pipestep.stepping.interceptor import StageInterceptor

READERS = {
    ".csv": pd.read_csv,
    ".parquet": pd.read_parquet,
    ".json": pd.read_json,
}


def load_data(path: Path) -> pd.DataFrame:
    """Carrega um arquivo CSV, Parquet ou JSON em um DataFrame."""
    if not path.exists():
        raise FileNotFoundError(f"Arquivo não encontrado: {path}")

    reader = READERS.get(path.suffix.lower())
    if reader is None:
        raise ValueError(
            f"Formato não suportado: {path.suffix} (use {', '.join(READERS)})"
        )

    print(f"📂 Carregando: {path}")
    return reader(path)


def build_namespace(df: pd.DataFrame, define: Path | None = None) -> dict:
    """
    Monta os nomes visíveis às etapas do pipeline.

    Args:
        df: Dados carregados
        define: Arquivo Python opcional cujas globais entram no namespace

    Returns:
        Dicionário com pd, np, df e as definições do arquivo
    """
    namespace = {"pd": pd, "np": np}

    if define is not None:
        if not define.exists():
            raise FileNotFoundError(f"Arquivo de definições não encontrado: {define}")
        definitions = runpy.run_path(str(define))
        namespace.update(
            {name: value for name, value in definitions.items() if not name.startswith("__")}
        )

    namespace["df"] = df
    return namespace


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="pipestep - Executa um pipeline encadeado com >> etapa por etapa",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )

    parser.add_argument(
        "data",
        type=Path,
        help="Arquivo de dados (csv, parquet ou json), disponível como `df`",
    )

    parser.add_argument(
        "expression",
        help="Pipeline a executar (ex: 'df >> pd.DataFrame.dropna()')",
    )

    parser.add_argument(
        "--define",
        type=Path,
        default=None,
        help="Arquivo Python com funções auxiliares usadas nas etapas",
    )

    parser.add_argument(
        "--rows",
        type=int,
        default=None,
        help="Número de linhas na prévia de cada etapa (padrão: config.yaml)",
    )

    parser.add_argument(
        "--padding",
        type=int,
        default=None,
        help="Caracteres extras na largura do cabeçalho (padrão: config.yaml)",
    )

    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Habilitar logs de depuração",
    )

    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    try:
        df = load_data(args.data)
        namespace = build_namespace(df, args.define)
        interceptor = StageInterceptor(namespace, preview_rows=args.rows, padding=args.padding)
        result = interceptor.run(args.expression)
    except PipelineChainError as e:
        # Detalhes do erro já foram impressos na etapa que falhou
        print(f"❌ {e.user_message}")
        return 1
    except PipestepError as e:
        print(f"\n❌ Erro: {e.user_message}")
        if e.message != e.user_message:
            print(f"   {e.message}")
        return 1
    except (FileNotFoundError, ValueError) as e:
        print(f"\n❌ Erro: {e}")
        return 1

    shape = getattr(result, "shape", None)
    summary = f"{type(result).__name__} {shape}" if shape is not None else type(result).__name__
    print(f"✅ Resultado final: {summary}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
