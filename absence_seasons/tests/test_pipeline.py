from pathlib import Path

import pytest

from absence_seasons.runner import cli
from absence_seasons.runner.config import (
    RunnerConfig,
    create_config_from_data_config,
    create_config_from_env,
)
from absence_seasons.runner.pipeline import (
    EMPTY_DATASET_MESSAGE,
    SOURCE_UNAVAILABLE_MESSAGE,
    RunStatus,
    SeasonalAbsencePipeline,
    run_pipeline,
)
from absence_seasons.data.config.paths import DataConfig


ENV_VARS = ("ABSENCE_INPUT_FILE", "ABSENCE_OUTPUT_DIR", "ABSENCE_LOG_LEVEL", "ABSENCE_EXPORT_PNG")


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def make_config(tmp_path):
    def _make(input_file, **kwargs):
        return RunnerConfig(input_file=input_file, output_dir=tmp_path / "output", **kwargs)
    return _make


class TestRunnerConfig:
    def test_paths(self, tmp_path):
        config = RunnerConfig(input_file="a.csv", output_dir=str(tmp_path))
        assert config.input_file == Path("a.csv")
        assert config.get_output_path() == tmp_path / "season_absences.html"
        assert config.get_season_png_path().name == "season_absences.png"
        assert config.to_dict()["output_path"] == str(tmp_path / "season_absences.html")

    def test_invalid_plotlyjs_mode(self):
        with pytest.raises(ValueError):
            RunnerConfig(include_plotlyjs="directory")

    def test_env_overrides(self, monkeypatch, tmp_path):
        monkeypatch.setenv("ABSENCE_INPUT_FILE", "env.csv")
        monkeypatch.setenv("ABSENCE_OUTPUT_DIR", str(tmp_path / "env_out"))
        monkeypatch.setenv("ABSENCE_LOG_LEVEL", "debug")
        monkeypatch.setenv("ABSENCE_EXPORT_PNG", "true")

        config = create_config_from_env()
        assert config.input_file == Path("env.csv")
        assert config.output_dir == tmp_path / "env_out"
        assert config.log_level == "DEBUG"
        assert config.export_png is True

    def test_env_applies_on_top_of_base(self, monkeypatch):
        monkeypatch.setenv("ABSENCE_OUTPUT_DIR", "elsewhere")
        base = RunnerConfig(input_file="base.csv")
        config = create_config_from_env(base)
        assert config.input_file == Path("base.csv")
        assert config.output_dir == Path("elsewhere")

    def test_seeded_from_data_config(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("paths:\n  input_file: from_yaml.csv\n  output_dir: yaml_out\n")
        config = create_config_from_data_config(DataConfig(path))
        assert config.input_file == Path("from_yaml.csv")
        assert config.output_dir == Path("yaml_out")
        assert config.data_config_path == path


class TestSeasonalAbsencePipeline:
    def test_successful_run(self, attendance_csv, make_config):
        result = SeasonalAbsencePipeline(make_config(attendance_csv)).run()

        assert result.ok
        assert result.status is RunStatus.OK
        assert result.total_rows == 6
        assert result.valid_rows == 4
        assert result.summary.by_season.as_dict() == {"spring": 0, "summer": 2, "fall": 5, "winter": 3}
        assert result.summary.by_flu_season.as_dict() == {"flu_season": 8, "non_flu_season": 2}
        assert result.message is None
        assert result.png_paths == []

        page = result.output_path.read_text(encoding="utf-8")
        assert 'id="histogram-plot"' in page
        assert 'id="bar-chart-plot"' in page

    def test_png_export(self, attendance_csv, make_config):
        result = SeasonalAbsencePipeline(make_config(attendance_csv, export_png=True, png_dpi=50)).run()
        assert [p.name for p in result.png_paths] == ["season_absences.png", "flu_season_absences.png"]
        assert all(p.exists() for p in result.png_paths)

    def test_missing_source(self, tmp_path, make_config):
        result = SeasonalAbsencePipeline(make_config(tmp_path / "missing.csv")).run()

        assert result.status is RunStatus.SOURCE_UNAVAILABLE
        assert not result.ok
        assert result.message == SOURCE_UNAVAILABLE_MESSAGE
        assert result.summary is None

        page = result.output_path.read_text(encoding="utf-8")
        assert "Failed to load CSV" in page
        assert "histogram-plot" not in page

    def test_no_valid_dates(self, write_csv, make_config):
        csv_path = write_csv("Date,Absent\n,4\nnot a date,7\n")
        result = SeasonalAbsencePipeline(make_config(csv_path)).run()

        assert result.status is RunStatus.EMPTY_DATASET
        assert result.message == EMPTY_DATASET_MESSAGE
        assert result.total_rows == 2
        assert result.valid_rows == 0
        assert result.summary is None
        assert "No valid data found" in result.output_path.read_text(encoding="utf-8")

    @pytest.mark.parametrize("text", ["", "Date,Absent\n"])
    def test_zero_rows(self, write_csv, make_config, text):
        result = SeasonalAbsencePipeline(make_config(write_csv(text))).run()

        assert result.status is RunStatus.EMPTY_DATASET
        assert result.summary is None
        assert result.to_dict()["by_season"] is None
        assert result.to_dict()["by_flu_season"] is None

    def test_non_utf8_cells_do_not_abort_the_run(self, tmp_path, make_config):
        csv_path = tmp_path / "latin1.csv"
        csv_path.write_bytes("Date,Absent,Name\n2023-10-15,5,José\n".encode("latin-1"))

        result = SeasonalAbsencePipeline(make_config(csv_path)).run()
        assert result.status is RunStatus.OK
        assert result.summary.by_season["fall"] == 5

    def test_run_pipeline_helper(self, attendance_csv, make_config):
        result = run_pipeline(make_config(attendance_csv))
        assert result.to_dict()["status"] == "ok"
        assert result.to_dict()["valid_rows"] == 4


class TestCli:
    def test_success_exit_code(self, attendance_csv, tmp_path):
        out_dir = tmp_path / "cli_out"
        code = cli.main([
            "--input-file", str(attendance_csv),
            "--output-dir", str(out_dir),
            "--output-file", "charts.html",
            "--log-file", str(tmp_path / "run.log"),
        ])
        assert code == 0
        assert (out_dir / "charts.html").exists()
        assert (tmp_path / "run.log").exists()

    def test_failure_exit_code(self, tmp_path):
        out_dir = tmp_path / "cli_out"
        code = cli.main([
            "--input-file", str(tmp_path / "missing.csv"),
            "--output-dir", str(out_dir),
            "--log-file", str(tmp_path / "run.log"),
        ])
        assert code == 1
        assert "Failed to load CSV" in (out_dir / "season_absences.html").read_text(encoding="utf-8")

    def test_invalid_config_file(self, tmp_path):
        code = cli.main(["--config", str(tmp_path / "missing.yaml")])
        assert code == 1

    @pytest.mark.parametrize("fields", ["  date: {first: Date}\n", "  tardy: [Tardy]\n"])
    def test_invalid_field_spellings(self, attendance_csv, tmp_path, fields, capsys):
        config_path = tmp_path / "fields.yaml"
        config_path.write_text("fields:\n" + fields)

        code = cli.main([
            "--config", str(config_path),
            "--input-file", str(attendance_csv),
            "--output-dir", str(tmp_path / "cli_out"),
            "--log-file", str(tmp_path / "run.log"),
        ])
        assert code == 1
        assert "Invalid configuration" in capsys.readouterr().out

    def test_arguments_override_env(self, monkeypatch, tmp_path):
        monkeypatch.setenv("ABSENCE_INPUT_FILE", "env.csv")
        monkeypatch.setenv("ABSENCE_LOG_LEVEL", "WARNING")
        args = cli.build_parser().parse_args(["--input-file", "cli.csv", "--png", "--plotlyjs", "inline"])

        config = cli.build_config(args)
        assert config.input_file == Path("cli.csv")
        assert config.log_level == "WARNING"
        assert config.export_png is True
        assert config.include_plotlyjs == "inline"
