import pytest

from atlas_core.errors import SettingsError
from atlasgen.settings import AtlasSettings, load_settings, settings_from_mapping


def test_default_settings():
    settings = AtlasSettings()
    assert (settings.texture_width, settings.texture_height) == (2048, 2048)
    assert settings.char_height == 32
    assert settings.smooth_pixels == 2
    assert settings.spacing == 2
    assert settings.range == 1.0
    assert settings.auto_height is False


def test_load_settings_from_yaml(tmp_path):
    path = tmp_path / "atlas.yaml"
    path.write_text(
        "texture_size: 512x256\n"
        "char-height: 48\n"
        "auto_height: yes\n"
        "range: 2\n"
        "font: fonts/demo.ttf\n",
        encoding="utf-8",
    )

    settings = load_settings(str(path))

    assert (settings.texture_width, settings.texture_height) == (512, 256)
    assert settings.char_height == 48
    assert settings.auto_height is True
    assert settings.range == 2.0
    assert settings.font == "fonts/demo.ttf"


def test_load_settings_uses_environment(tmp_path, monkeypatch):
    path = tmp_path / "env.yaml"
    path.write_text("spacing: 5\n", encoding="utf-8")
    monkeypatch.setenv("ATLASGEN_SETTINGS", str(path))

    assert load_settings().spacing == 5


def test_load_settings_without_file_returns_defaults(monkeypatch):
    monkeypatch.delenv("ATLASGEN_SETTINGS", raising=False)
    assert load_settings() == AtlasSettings()


def test_unknown_key_rejected():
    with pytest.raises(SettingsError):
        settings_from_mapping({"colour": "red"})


@pytest.mark.parametrize(
    "data",
    [
        {"char_height": "tall"},
        {"texture_size": "huge"},
        {"auto_height": "maybe"},
        {"preview": 2},
        {"spacing": 2.5},
        {"char_height": True},
        {"smooth_pixels": [1]},
        {"range": False},
        {"range": "wide"},
    ],
)
def test_bad_value_rejected(data):
    with pytest.raises(SettingsError):
        settings_from_mapping(data)


def test_values_coerced_to_field_types():
    settings = settings_from_mapping(
        {"char_height": " 24 ", "auto_height": "off", "preview": "on", "range": 3, "font": 7}
    )
    assert settings.char_height == 24
    assert settings.auto_height is False
    assert settings.preview is True
    assert settings.range == 3.0
    assert settings.font == "7"


def test_malformed_yaml_rejected(tmp_path):
    path = tmp_path / "broken.yaml"
    path.write_text("spacing: [1, 2\n", encoding="utf-8")
    with pytest.raises(SettingsError):
        load_settings(str(path))


def test_non_mapping_yaml_rejected(tmp_path):
    path = tmp_path / "list.yaml"
    path.write_text("- 1\n- 2\n", encoding="utf-8")
    with pytest.raises(SettingsError):
        load_settings(str(path))


def test_overlay_keeps_base_values():
    base = AtlasSettings(spacing=7, font="a.ttf")
    settings = settings_from_mapping({"char_height": 12, "font": None}, base)
    assert settings.spacing == 7
    assert settings.font == "a.ttf"
    assert settings.char_height == 12


@pytest.mark.parametrize(
    "overrides",
    [
        {"char_height": 0},
        {"spacing": -1},
        {"range": 0.0},
        {"ordering": "random"},
        {"selection": "worst_fit"},
        {"font": ""},
        {"output_name": ""},
    ],
)
def test_validated_rejects_bad_settings(overrides):
    values = {"font": "a.ttf", "output_name": "out"}
    values.update(overrides)
    with pytest.raises(SettingsError):
        AtlasSettings(**values).validated()
