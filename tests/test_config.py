# tests/test_config.py
import pytest

from curator.config import Config, ConfigModel, ProviderConfig, load_config, save_config


def test_missing_config(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "nope.yaml")


def test_empty_config_uses_defaults(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("")
    config = load_config(path)
    assert config.provider.tier == "free"
    assert config.curation.max_articles == 15


@pytest.mark.parametrize(
    "content",
    [
        "provider: [unclosed",
        "provider:\n  tier: gemini\n",
        "curation:\n  max_articles: 0\n",
        "provider:\n  monthly_budget: -5\n",
        "- just\n- a list\n",
    ],
)
def test_invalid_config(tmp_path, content):
    path = tmp_path / "config.yaml"
    path.write_text(content)
    with pytest.raises(ValueError):
        load_config(path)


def test_save_and_reload(tmp_path):
    path = tmp_path / "nested" / "config.yaml"
    model = ConfigModel(
        data_dir=str(tmp_path / "data"),
        provider=ProviderConfig(tier="Claude", monthly_budget=12.5, api_key="secret"),
    )
    save_config(model, path)

    loaded = load_config(path)
    assert loaded.provider.tier == "claude"
    assert loaded.provider.monthly_budget == 12.5
    assert loaded.provider.api_key is None
    assert "secret" not in path.read_text()


def test_config_paths(tmp_path):
    config = Config.from_model(ConfigModel(data_dir=str(tmp_path / "data")))
    assert config.preferences_path == tmp_path / "data" / "preferences.json"
    assert config.archive_path == tmp_path / "data" / "curated.json"
    assert config.results_dir.is_dir()


def test_lazy_load(tmp_path):
    path = tmp_path / "config.yaml"
    save_config(ConfigModel(data_dir=str(tmp_path)), path)
    config = Config(path)
    assert config.config.data_dir == str(tmp_path)
