from pathlib import Path

import pytest

from slop_score.config import (
    ScoringWeights,
    SlopScoreConfig,
    TaggerSettings,
    config_from_dict,
    config_from_yaml,
    load_config,
)


def test_defaults():
    cfg = load_config()

    assert cfg.top_k_ngrams == 40
    assert cfg.weights == ScoringWeights(0.60, 0.25, 0.15)
    assert cfg.tagger.backend == "nltk"
    assert cfg.strict_resources is False


def test_config_from_yaml_reads_nested_blocks(tmp_path: Path):
    path = tmp_path / "config.yaml"
    path.write_text(
        "top_k_ngrams: 10\n"
        "unknown_key: 3\n"
        "weights:\n  word: 1.0\n  contrast: 0.0\n"
        "tagger:\n  enabled: false\n",
        encoding="utf-8",
    )
    cfg = config_from_yaml(path)

    assert cfg.top_k_ngrams == 10
    assert cfg.weights.word == 1.0
    assert cfg.weights.trigram == 0.15
    assert cfg.tagger == TaggerSettings(enabled=False)


def test_config_from_yaml_requires_mapping(tmp_path: Path):
    path = tmp_path / "config.yaml"
    path.write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(ValueError):
        config_from_yaml(path)


def test_config_from_dict_round_trips_to_dict():
    cfg = config_from_dict({"workers": 4, "weights": {"contrast": 0.5}})
    again = config_from_dict(cfg.to_dict())

    assert again == cfg
    assert config_from_dict(None) == SlopScoreConfig()


def test_nested_block_must_be_mapping():
    with pytest.raises(ValueError):
        config_from_dict({"tagger": "nltk"})


def test_empty_yaml_and_null_blocks_fall_back_to_defaults(tmp_path: Path):
    path = tmp_path / "config.yaml"
    path.write_text("", encoding="utf-8")
    assert config_from_yaml(path) == SlopScoreConfig()

    cfg = config_from_dict({"weights": None, "tagger": {"lang": "rus", "bogus": 1}})
    assert cfg.weights == ScoringWeights()
    assert cfg.tagger == TaggerSettings(lang="rus")
