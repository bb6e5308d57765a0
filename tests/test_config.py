import json

import pytest

from barkit.config import (
    CONFIG_PATH_ENV,
    Config,
    ConfigError,
    find_config_path,
    is_valid_output,
    merge_config,
    parse_jsonc,
    try_expand_path,
)


def test_parse_jsonc_strips_comments_but_not_strings():
    text = '{"a": 1, // note\n /* block\n comment */ "b": "//kept /* too */"}'
    assert parse_jsonc(text) == {"a": 1, "b": "//kept /* too */"}


def test_parse_jsonc_escaped_quote():
    assert parse_jsonc('["x\\"//y"]') == ['x"//y']


def test_parse_jsonc_invalid():
    with pytest.raises(ValueError):
        parse_jsonc("{not json}")


def test_try_expand_path_existing_and_missing(tmp_path):
    (tmp_path / "config").write_text("{}")
    assert try_expand_path(str(tmp_path), "config") == str(tmp_path / "config")
    assert try_expand_path(str(tmp_path), "missing") is None
    assert try_expand_path(str(tmp_path)) == str(tmp_path)


def test_try_expand_path_variables(tmp_path, monkeypatch):
    (tmp_path / "style.css").write_text("")
    monkeypatch.setenv("BARKIT_TEST_DIR", str(tmp_path))
    monkeypatch.delenv("BARKIT_UNSET_VAR", raising=False)
    assert try_expand_path("$BARKIT_TEST_DIR", "style.css") == str(tmp_path / "style.css")
    assert try_expand_path("${BARKIT_UNSET_VAR}" + str(tmp_path), "style.css") == str(
        tmp_path / "style.css"
    )


def test_find_config_path_prefers_env(tmp_path, monkeypatch):
    env_dir = tmp_path / "env"
    other = tmp_path / "other"
    env_dir.mkdir()
    other.mkdir()
    (env_dir / "config").write_text("{}")
    (other / "config").write_text("{}")
    monkeypatch.setenv(CONFIG_PATH_ENV, str(env_dir))
    assert find_config_path(["config"], [str(other)]) == str(env_dir / "config")


def test_find_config_path_order_of_names(tmp_path, monkeypatch):
    monkeypatch.delenv(CONFIG_PATH_ENV, raising=False)
    (tmp_path / "config.jsonc").write_text("{}")
    assert find_config_path(["config", "config.jsonc"], [str(tmp_path)]) == str(
        tmp_path / "config.jsonc"
    )
    assert find_config_path(["nothing"], [str(tmp_path)]) is None


def test_merge_config_keeps_existing_values():
    a = {"height": 30, "clock": {"format": "A"}}
    b = {"height": 99, "width": 10, "clock": {"format": "B", "interval": 5}}
    merged = merge_config(a, b)
    assert merged == {"height": 30, "width": 10, "clock": {"format": "A", "interval": 5}}


def test_merge_config_into_nothing():
    b = {"x": 1}
    assert merge_config(None, b) is b


def test_merge_config_conflicting_types_leaves_first():
    a = [1, 2]
    assert merge_config(a, {"x": 1}) == [1, 2]


@pytest.mark.parametrize(
    "output, expected",
    [
        (None, True),
        ("", True),
        ("DP-1", True),
        ("HDMI-A-1", False),
        ("!DP-1", False),
        ("!HDMI-A-1", True),
        ("Dell U2415", True),
        (["HDMI-A-1", "DP-1"], True),
        (["HDMI-A-1"], False),
    ],
)
def test_is_valid_output(output, expected):
    config = {} if output is None else {"output": output}
    assert is_valid_output(config, "DP-1", "Dell U2415") is expected


def test_load_with_includes(tmp_path):
    extra = tmp_path / "extra.json"
    extra.write_text(json.dumps({"height": 50, "layer": "top", "clock": {"interval": 1}}))
    main = tmp_path / "config"
    main.write_text(
        "// main config\n"
        + json.dumps({"include": str(extra), "height": 20, "clock": {"format": "{}"}})
    )
    config = Config()
    config.load(str(main))
    assert config.config_file == str(main)
    assert config.config["height"] == 20
    assert config.config["layer"] == "top"
    assert config.config["clock"] == {"format": "{}", "interval": 1}


def test_load_array_config_and_outputs(tmp_path):
    main = tmp_path / "config"
    main.write_text(
        json.dumps([{"output": "DP-1", "name": "one"}, {"output": "!DP-1", "name": "two"}, 3])
    )
    config = Config()
    config.load(str(main))
    assert [c["name"] for c in config.get_output_configs("DP-1", "")] == ["one"]
    assert [c["name"] for c in config.get_output_configs("eDP-1", "")] == ["two"]


def test_load_from_env_dir(tmp_path, monkeypatch):
    (tmp_path / "config").write_text('{"name": "main"}')
    monkeypatch.setenv(CONFIG_PATH_ENV, str(tmp_path))
    config = Config()
    config.load()
    assert config.config == {"name": "main"}
    assert config.get_output_configs("any", "any") == [{"name": "main"}]


def test_recursive_include_is_rejected(tmp_path):
    looping = tmp_path / "config"
    looping.write_text(json.dumps({"include": [str(looping)]}))
    with pytest.raises(ConfigError, match="recursive"):
        Config().load(str(looping))


def test_missing_file(tmp_path):
    with pytest.raises(ConfigError):
        Config().load(str(tmp_path / "absent"))


def test_missing_include(tmp_path):
    main = tmp_path / "config"
    main.write_text(json.dumps({"include": str(tmp_path / "nope.json")}))
    with pytest.raises(ConfigError):
        Config().load(str(main))