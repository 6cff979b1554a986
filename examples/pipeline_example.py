"""
Exemplo demonstrando o passo a passo de pipelines com pipestep.

Este exemplo mostra como:
1. Acompanhar cada etapa de um pipeline de DataFrame
2. Usar o placeholder `_` para posicionar o valor anterior
3. Ver o relatório de erro quando uma etapa falha
"""

import numpy as np
import pandas as pd

from pipestep import PipelineChainError, step_through_pipes


def make_characters() -> pd.DataFrame:
    """Pequena tabela de personagens com altura (cm) e massa (kg)."""
    return pd.DataFrame({
        "name": ["Luke Skywalker", "C-3PO", "R2-D2", "Darth Vader", "Leia Organa", "Owen Lars", "Beru Whitesun"],
        "height": [172, 167, 96, 202, 150, 178, 165],
        "mass": [77.0, 75.0, 32.0, 136.0, 49.0, 120.0, 75.0],
        "species": ["Human", "Droid", "Droid", "Human", "Human", "Human", "Human"],
    })


def add_bmi(df: pd.DataFrame) -> pd.DataFrame:
    return df.assign(bmi=lambda d: d["mass"] / (d["height"] / 100) ** 2)


def example_dataframe_pipeline():
    """Example 1: mutate, select, filter, gather and arrange."""
    characters = make_characters()

    result = step_through_pipes("""
        characters
        >> add_bmi
        >> _.loc[:, ["name", "height", "mass", "bmi"]]
        >> pd.DataFrame.query("bmi < 30")
        >> pd.melt(id_vars="name", var_name="feature")
        >> pd.DataFrame.sort_values(["name", "feature"])
    """)

    print(f"Final shape: {result.shape}")
    return result


def example_plain_values():
    """Example 2: pipelines over plain Python and NumPy values."""
    values = np.arange(20)

    total = step_through_pipes("values >> (lambda v: v[v % 3 == 0]) >> np.cumsum >> np.sum")

    print(f"Total: {total}")
    return total


def example_failing_step():
    """Example 3: a failing step is reported once and the chain stops."""
    characters = make_characters()

    try:
        step_through_pipes("""
            characters
            >> add_bmi
            >> pd.DataFrame.sort_values("weight")
            >> pd.DataFrame.head(3)
        """)
    except PipelineChainError as e:
        print(f"Stopped at step {e.stage_index}: {e.stage_text}")


if __name__ == "__main__":
    print("=" * 80)
    print("pipestep examples")
    print("=" * 80)

    example_dataframe_pipeline()
    example_plain_values()
    example_failing_step()
