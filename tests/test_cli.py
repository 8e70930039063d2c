from click.testing import CliRunner

from modextract.cli import build_config, main


def test_missing_archive_fails(tmp_path):
    result = CliRunner().invoke(main, [str(tmp_path / "absent.zip"), "--extract"])

    assert result.exit_code == 1
    assert "E100" in result.output


def test_unsupported_config_fails(tmp_path):
    cfg = tmp_path / "modextract.ini"
    cfg.write_text("[x]")

    result = CliRunner().invoke(main, [str(tmp_path / "p.zip"), "--config", str(cfg)])

    assert result.exit_code == 1
    assert "E601" in result.output


def test_build_config_merges_options(tmp_path):
    cfg = tmp_path / "modextract.toml"
    cfg.write_text("max_concurrent = 2\ntimeout = 4.5\n")

    config = build_config(str(cfg), str(tmp_path / "out"), 6, True)

    assert config.max_concurrent == 6
    assert config.timeout == 4.5
    assert config.output_dir == str(tmp_path / "out")
    assert config.open_output is True


def test_version_option():
    result = CliRunner().invoke(main, ["--version"])
    assert result.exit_code == 0
    assert "0.1.0" in result.output


def test_debug_logs_error_details(tmp_path, log_messages, monkeypatch):
    monkeypatch.setattr("modextract.cli.setup_logger", lambda level=None: None)

    result = CliRunner().invoke(main, [str(tmp_path / "absent.zip"), "--extract", "--debug"])

    assert result.exit_code == 1
    assert any(
        m.startswith("DEBUG|[错误]") and "'code': 'E100'" in m for m in log_messages
    )
