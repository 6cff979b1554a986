"""Tests for the step-through command line."""

import pandas as pd
import pytest

from cli.step_through import build_namespace, load_data, main


@pytest.fixture
def csv_file(tmp_path):
    path = tmp_path / "characters.csv"
    pd.DataFrame({
        "name": ["Luke", "Leia", "Owen"],
        "mass": [77.0, 49.0, 120.0],
    }).to_csv(path, index=False)
    return path


def test_main_success(csv_file, capsys):
    """Test a successful pipeline run from the command line."""
    code = main([str(csv_file), "df >> pd.DataFrame.query('mass > 50') >> pd.DataFrame.head(1)"])

    out = capsys.readouterr().out
    assert code == 0
    assert "Stepping through pipes:" in out
    assert "Pipes completed!" in out
    assert "Resultado final: DataFrame (1, 2)" in out


def test_main_failing_stage(csv_file, capsys):
    """Test exit status and message when a stage fails."""
    code = main([str(csv_file), "df >> pd.DataFrame.sort_values('height')"])

    out = capsys.readouterr().out
    assert code == 1
    assert "Error in this step of the pipe chain. Error details:" in out
    assert "Cannot complete pipe chain because of error." in out


def test_main_with_definitions(csv_file, tmp_path, capsys):
    """Test helper functions loaded with --define."""
    helpers = tmp_path / "helpers.py"
    helpers.write_text(
        "def heavy_only(df):\n"
        "    return df[df['mass'] > 100]\n",
        encoding="utf-8",
    )

    code = main([str(csv_file), "df >> heavy_only >> len", "--define", str(helpers), "--rows", "1"])

    out = capsys.readouterr().out
    assert code == 0
    assert "Resultado final: int" in out


def test_main_invalid_inputs(tmp_path, capsys):
    """Test missing files, unsupported formats and invalid pipelines."""
    assert main([str(tmp_path / "missing.csv"), "df"]) == 1

    unsupported = tmp_path / "data.txt"
    unsupported.write_text("x", encoding="utf-8")
    assert main([str(unsupported), "df"]) == 1

    csv_path = tmp_path / "data.csv"
    pd.DataFrame({"x": [1]}).to_csv(csv_path, index=False)
    assert main([str(csv_path), "df >> >>"]) == 1

    out = capsys.readouterr().out
    assert "Arquivo não encontrado" in out
    assert "Formato não suportado" in out
    assert "Não foi possível interpretar o pipeline." in out
    assert "Expressão de pipeline inválida" in out


def test_build_namespace(csv_file):
    """Test names visible to the stages."""
    df = load_data(csv_file)
    namespace = build_namespace(df)

    assert set(namespace) == {"pd", "np", "df"}
    assert namespace["df"] is df
