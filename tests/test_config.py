from numbers4.config import DEFAULTS, load_config


def test_missing_file_uses_defaults(tmp_path):
    config = load_config(str(tmp_path / "missing.ini"))
    assert config == DEFAULTS
    assert config.window_size == 100
    assert config.ensemble_size == 12
    assert config.straight_payout == 900000
    assert config.box_payout == 37500


def test_values_override_defaults(tmp_path):
    path = tmp_path / "config.ini"
    path.write_text(
        "[engine]\n"
        "window_size = 50\n"
        "[purchase]\n"
        "unit_price = 300\n"
        "[schedule]\n"
        "extra_holidays = 2030-01-02, 2030-01-03\n"
    )
    config = load_config(str(path))
    assert config.window_size == 50
    assert config.unit_price == 300
    assert config.ensemble_size == DEFAULTS.ensemble_size
    assert config.extra_holidays == ("2030-01-02", "2030-01-03")


def test_invalid_value_falls_back_to_defaults(tmp_path):
    path = tmp_path / "config.ini"
    path.write_text("[engine]\nwindow_size = lots\n")
    assert load_config(str(path)) == DEFAULTS


def test_project_config_loads():
    config = load_config()
    assert config.window_size >= 1
    assert config.database_file.endswith(".db")
