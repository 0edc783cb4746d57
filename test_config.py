import json

import config


def test_missing_file_gives_defaults(tmp_path):
    assert config.load_config(str(tmp_path / "absent.json")) == config.get_defaults()


def test_partial_file_is_merged_over_defaults(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"speech": {"rate": 120}, "keys": {"quit": ["escape"]}}))

    settings = config.load_config(str(path))
    assert settings["speech"]["rate"] == 120
    assert settings["speech"]["engine"] == "auto"
    assert settings["keys"]["quit"] == ["escape"]
    assert settings["keys"]["next"] == ["right", "down"]


def test_broken_file_warns_and_falls_back(tmp_path, capsys):
    path = tmp_path / "config.json"
    path.write_text("{not json")

    assert config.load_config(str(path)) == config.get_defaults()
    assert "[WARNING]" in capsys.readouterr().err


def test_defaults_are_independent_copies():
    first = config.get_defaults()
    first["keys"]["next"].append("n")
    assert "n" not in config.get_defaults()["keys"]["next"]
