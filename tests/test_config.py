import pytest

from strapigraph import ConfigError, SourceConfig, load_config


def test_from_dict():
    config = SourceConfig.from_dict({
        "apiURL": "https://cms.example.com/",
        "collectionTypes": ["article", "tag"],
        "markdownImages": {"typesToParse": {"Article": ["body", "summary"]}},
        "maxConcurrentDownloads": 4,
    })

    assert config.api_url == "https://cms.example.com"
    assert config.collection_types == ["article", "tag"]
    assert config.markdown_images.fields_for("Article") == ["body", "summary"]
    assert config.markdown_images.fields_for("Tag") == []
    assert config.markdown_images.fields_for(None) == []
    assert config.max_concurrent_downloads == 4


def test_defaults():
    config = SourceConfig.from_dict({"apiURL": "http://localhost:1337"})
    assert config.collection_types == []
    assert config.markdown_images.types_to_parse == {}
    assert config.max_concurrent_downloads is None


@pytest.mark.parametrize(
    "data",
    [
        {},
        {"apiURL": ""},
        {"apiURL": "http://x", "markdownImages": {"typesToParse": ["Article"]}},
        {"apiURL": "http://x", "maxConcurrentDownloads": 0},
        ["apiURL"],
    ],
)
def test_invalid_config(data):
    with pytest.raises(ConfigError):
        SourceConfig.from_dict(data)


def test_yaml_round_trip(tmp_path):
    path = tmp_path / "strapigraph.yaml"
    config = SourceConfig.from_dict({
        "apiURL": "http://localhost:1337",
        "collectionTypes": ["article"],
        "markdownImages": {"typesToParse": {"Article": ["body"]}},
    })

    config.save(path)
    loaded = load_config(path)

    assert loaded == config


def test_missing_file(tmp_path):
    assert load_config(tmp_path / "missing.yaml") is None
