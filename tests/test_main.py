from pathlib import Path

import main
from main import DEFAULT_CONFIG, run_checks
from utils import load_settings


SETTINGS_PATH = Path(__file__).resolve().parents[1] / "config" / "settings.yaml"


def test_default_fixtures_pass(capsys):
    assert run_checks(DEFAULT_CONFIG) == []
    assert "Good." in capsys.readouterr().out


def test_shipped_settings_match_defaults():
    config = load_settings(str(SETTINGS_PATH))
    assert config == DEFAULT_CONFIG


def test_wrong_expectation_reported(capsys):
    config = {
        "fixtures": [
            {
                "name": "bad",
                "pixels": [[0, 100, 100], [0, 0, 100]],
                "blur": {1: [[0, 0, 0], [0, 0, 0]]},
                "sobel": [[0, 0, 0], [0, 0, 0]],
            }
        ]
    }

    failures = run_checks(config)

    assert failures == ["Incorrect box blur (1 rep) on bad:", "Incorrect Sobel on bad:"]
    assert "Incorrect Sobel on bad:" in capsys.readouterr().err


def test_main_with_shipped_settings():
    assert main.main(["--config", str(SETTINGS_PATH)]) == 0


def test_main_falls_back_to_defaults(tmp_path, capsys):
    assert main.main(["--config", str(tmp_path / "nope.yaml")]) == 0
    assert "using built-in fixtures" in capsys.readouterr().out


def test_window_border_does_not_reproduce_fixtures():
    assert main.main(["--config", str(SETTINGS_PATH), "--border", "window"]) == 1
