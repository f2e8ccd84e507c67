"""Tests for configuration loading."""

import logging

import pytest
from pydantic import ValidationError

from slopgate.config import (
    DEFAULT_BOTS,
    DEFAULT_CONFIG,
    UNKNOWN_CHECK_WEIGHT,
    Thresholds,
    Weights,
    is_allowlisted,
    load_config,
    load_config_file,
    parse_config,
)
from slopgate.errors import ConfigError
from slopgate.models import CheckId


class TestDefaults:
    def test_thresholds(self):
        thresholds = DEFAULT_CONFIG.thresholds
        assert (thresholds.warn, thresholds.flag, thresholds.block) == (30, 60, 80)

    def test_weights(self):
        weights = DEFAULT_CONFIG.weights
        assert weights.for_check(CheckId.SHOTGUN) == 90
        assert weights.for_check(CheckId.NEW_ACCOUNT) == 20
        assert weights.for_check("formatting_only") == 30

    def test_unknown_check_weight(self):
        assert Weights().for_check("custom_check") == UNKNOWN_CHECK_WEIGHT == 50

    def test_auto_close_off(self):
        assert DEFAULT_CONFIG.auto_close is False

    def test_nothing_disabled(self):
        assert DEFAULT_CONFIG.weights.disabled() == []


class TestParseConfig:
    def test_empty_document(self):
        assert parse_config("") == DEFAULT_CONFIG

    def test_partial_thresholds(self):
        config = parse_config("thresholds:\n  warn: 20\n")
        assert (config.thresholds.warn, config.thresholds.flag, config.thresholds.block) == (20, 60, 80)

    def test_weight_override(self):
        config = parse_config("weights:\n  velocity: 0\n  shotgun: 45.5\n")
        assert config.weights.for_check(CheckId.VELOCITY) == 0
        assert config.weights.for_check(CheckId.SHOTGUN) == 45.5
        assert config.weights.for_check(CheckId.PLACEHOLDER) == 70
        assert config.weights.disabled() == [CheckId.VELOCITY]

    def test_unknown_weight_ignored(self):
        config = parse_config("weights:\n  custom_check: 500\n")
        assert config.weights == DEFAULT_CONFIG.weights

    def test_auto_close(self):
        assert parse_config("auto_close: true\n").auto_close is True

    def test_allowlist(self):
        config = parse_config("allowlist:\n  users:\n    - alice\n    - bob\n")
        assert config.allowlist.users == ("alice", "bob")
        assert config.allowlist.bots == DEFAULT_BOTS

    def test_allowlist_bots_replaced(self):
        config = parse_config("allowlist:\n  bots:\n    - my-bot[bot]\n")
        assert config.allowlist.bots == ("my-bot[bot]",)

    @pytest.mark.parametrize("document", [
        "weights: [",
        "- just\n- a list\n",
        "thresholds: 5\n",
        "thresholds:\n  warn: 150\n",
        "thresholds:\n  block: -1\n",
        "thresholds:\n  warn: high\n",
        "thresholds:\n  warn: 70\n  flag: 60\n",
        "weights:\n  velocity: 101\n",
        "weights:\n  velocity: true\n",
        "auto_close: yes please\n",
        "allowlist:\n  users: alice\n",
        "allowlist:\n  users:\n    - 42\n",
        "allowlist: [alice]\n",
        "weights:\n  velocity: \"80\"\n",
        "thresholds:\n  flag: true\n",
        "auto_close:\n",
    ])
    def test_invalid(self, document):
        with pytest.raises(ConfigError):
            parse_config(document)

    def test_error_names_the_section(self):
        with pytest.raises(ConfigError, match="thresholds"):
            parse_config("thresholds:\n  warn: 70\n  flag: 60\n")

    def test_empty_sections_are_defaults(self):
        assert parse_config("thresholds:\nweights:\nallowlist:\n") == DEFAULT_CONFIG

    def test_null_allowlist_entries(self):
        config = parse_config("allowlist:\n  users:\n  bots:\n")
        assert config.allowlist.users == ()
        assert config.allowlist.bots == ()

    def test_integer_weights_stay_integers(self):
        weight = parse_config("weights:\n  velocity: 10\n").weights.for_check(CheckId.VELOCITY)
        assert weight == 10
        assert isinstance(weight, int)


class TestModels:
    def test_thresholds_order_checked_on_construction(self):
        with pytest.raises(ValidationError):
            Thresholds(warn=70, flag=60)

    def test_equal_thresholds_allowed(self):
        assert Thresholds(warn=50, flag=50, block=50).block == 50

    def test_weight_range(self):
        with pytest.raises(ValidationError):
            Weights.from_mapping({"velocity": 101})
        with pytest.raises(ValidationError):
            Weights(shotgun=-5)

    def test_from_mapping_ignores_unknown_names(self):
        weights = Weights.from_mapping({CheckId.SHOTGUN: 0, "custom_check": 5})
        assert weights.for_check(CheckId.SHOTGUN) == 0
        assert weights == Weights(shotgun=0)

    def test_frozen(self):
        with pytest.raises(ValidationError):
            DEFAULT_CONFIG.thresholds.warn = 10


class TestLoadConfig:
    def test_none_and_blank(self):
        assert load_config(None) == DEFAULT_CONFIG
        assert load_config("   \n") == DEFAULT_CONFIG

    def test_invalid_falls_back_to_defaults(self, caplog):
        logger = logging.getLogger("tests.config")
        with caplog.at_level(logging.WARNING, logger="tests.config"):
            config = load_config("thresholds:\n  warn: 150\n", logger)
        assert config == DEFAULT_CONFIG
        assert "Ignoring invalid configuration" in caplog.text

    def test_valid(self):
        assert load_config("auto_close: true\n").auto_close is True

    def test_missing_file(self, tmp_path):
        assert load_config_file(tmp_path / ".slopgate.yml") == DEFAULT_CONFIG

    def test_file(self, tmp_path):
        path = tmp_path / ".slopgate.yml"
        path.write_text("thresholds:\n  block: 90\nweights:\n  copy_paste: 10\n")
        config = load_config_file(path)
        assert config.thresholds.block == 90
        assert config.weights.for_check(CheckId.COPY_PASTE) == 10


class TestAllowlist:
    def test_default_bot(self):
        assert is_allowlisted(DEFAULT_CONFIG, "dependabot[bot]", is_bot=True)

    def test_bot_name_from_a_user_account(self):
        assert not is_allowlisted(DEFAULT_CONFIG, "dependabot[bot]", is_bot=False)

    def test_user(self):
        config = parse_config("allowlist:\n  users: [alice]\n")
        assert is_allowlisted(config, "alice")
        assert not is_allowlisted(config, "mallory")
