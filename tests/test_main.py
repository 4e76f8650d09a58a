import json

import pandas as pd
import pytest

from autoregressive_models.__main__ import main


@pytest.fixture
def csv_path(tmp_path, sample_data):
    path = tmp_path / "series.csv"
    pd.DataFrame({'y': sample_data, 'z': range(len(sample_data))}).to_csv(path, index=False)
    return path


def test_prints_summary_and_forecast(csv_path, capsys):
    assert main([str(csv_path), "--column", "y", "--order", "2", "--predict"]) == 0
    out = capsys.readouterr().out
    assert "Parameter Estimates:" in out
    assert "forecast:" in out


def test_json_output(csv_path, capsys):
    assert main([str(csv_path), "--column", "y", "--order", "2", "--json"]) == 0
    payload = json.loads(capsys.readouterr().out.strip())
    assert payload['coefficients'] == pytest.approx([-515 / 10302, -1525 / 10302], abs=1e-12)


def test_zero_order_forecast_is_the_mean(csv_path, capsys, sample_data):
    assert main([str(csv_path), "--column", "y", "--order", "0", "--predict"]) == 0
    out = capsys.readouterr().out
    mean = sum(sample_data) / len(sample_data)
    assert f"forecast: {mean:.6f}" in out


def test_missing_column(csv_path, capsys):
    assert main([str(csv_path), "--column", "missing", "--order", "1"]) == 1
    assert "not found" in capsys.readouterr().err


def test_fit_error_is_reported(csv_path, capsys):
    assert main([str(csv_path), "--column", "y", "--order", "3"]) == 1
    assert "autoregression:" in capsys.readouterr().err


def test_non_numeric_column_is_reported(tmp_path, capsys):
    path = tmp_path / "letters.csv"
    pd.DataFrame({'y': list("abcdef")}).to_csv(path, index=False)

    assert main([str(path), "--column", "y", "--order", "1"]) == 1
    assert "could not convert" in capsys.readouterr().err


def test_missing_file_is_reported(tmp_path, capsys):
    path = tmp_path / "absent.csv"

    assert main([str(path), "--column", "y", "--order", "1"]) == 1
    assert "not found" in capsys.readouterr().err
