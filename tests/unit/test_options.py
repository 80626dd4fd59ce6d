"""Tests for profile options and options loading."""

import json
from pathlib import Path

import pytest

from hostgrants.config.settings import ConfigError
from hostgrants.core.config import OptionsConfig, load_profile_options
from hostgrants.core.options import AnkiCardOptions, ProfileOptions


class TestProfileOptions:
    """Tests for ProfileOptions.from_dict."""

    def test_empty_dict_defaults(self):
        options = ProfileOptions.from_dict({})

        assert options.parsing.enable_mecab_parser is False
        assert options.clipboard.enable_background_monitor is False
        assert options.clipboard.enable_search_page_monitor is False
        assert dict(options.anki.terms.fields) == {}
        assert dict(options.anki.kanji.fields) == {}

    def test_none_defaults(self):
        assert ProfileOptions.from_dict(None) == ProfileOptions()

    def test_camel_case_keys(self):
        options = ProfileOptions.from_dict(
            {
                "parsing": {"enableMecabParser": True},
                "clipboard": {"enableBackgroundMonitor": False, "enableSearchPageMonitor": True},
                "anki": {
                    "terms": {"fields": {"expression": "{expression}"}},
                    "kanji": {"fields": {"character": "{character}"}},
                },
                "general": {"language": "ja"},
            }
        )

        assert options.parsing.enable_mecab_parser is True
        assert options.clipboard.enable_search_page_monitor is True
        assert options.clipboard.any_monitor_enabled is True
        assert options.anki.terms.fields["expression"] == "{expression}"
        assert options.anki.kanji.fields["character"] == "{character}"

    def test_none_field_value_becomes_empty(self):
        options = ProfileOptions.from_dict({"anki": {"terms": {"fields": {"audio": None}}}})

        assert options.anki.terms.fields["audio"] == ""

    def test_fields_are_read_only(self):
        options = ProfileOptions.from_dict({"anki": {"terms": {"fields": {"a": "{expression}"}}}})

        with pytest.raises(TypeError):
            options.anki.terms.fields["a"] = "{clipboard-text}"  # type: ignore[index]

    def test_source_dict_changes_do_not_leak(self):
        fields = {"a": "{expression}"}
        options = ProfileOptions.from_dict({"anki": {"terms": {"fields": fields}}})

        fields["a"] = "{clipboard-text}"

        assert options.anki.terms.fields["a"] == "{expression}"

    def test_card_options_freeze_plain_dict(self):
        card = AnkiCardOptions(fields={"a": "{expression}"})

        with pytest.raises(TypeError):
            card.fields["b"] = "x"  # type: ignore[index]

    def test_collection_order(self):
        options = ProfileOptions.from_dict({})

        assert [name for name, _ in options.anki.iter_field_collections()] == ["terms", "kanji"]

    def test_to_dict_round_trip(self):
        data = {
            "parsing": {"enableMecabParser": True},
            "clipboard": {"enableBackgroundMonitor": True, "enableSearchPageMonitor": False},
            "anki": {"terms": {"fields": {"a": "{clipboard-image}"}}, "kanji": {"fields": {}}},
        }

        assert ProfileOptions.from_dict(data).to_dict() == data


class TestOptionsConfig:
    """Tests for loading options from files."""

    def test_defaults_only(self, tmp_path: Path):
        defaults = tmp_path / "defaults.yaml"
        defaults.write_text("parsing:\n  enableMecabParser: false\n")

        config = OptionsConfig.load(defaults_path=defaults)

        assert config.get("parsing.enableMecabParser") is False
        assert config.get("missing.key", "fallback") == "fallback"

    def test_user_file_overrides_defaults(self, tmp_path: Path):
        defaults = tmp_path / "defaults.yaml"
        defaults.write_text(
            "clipboard:\n  enableBackgroundMonitor: false\n  enableSearchPageMonitor: false\n"
        )
        profile = tmp_path / "profile.yaml"
        profile.write_text("clipboard:\n  enableSearchPageMonitor: true\n")

        config = OptionsConfig.load(profile, defaults_path=defaults)

        assert config.get("clipboard.enableBackgroundMonitor") is False
        assert config.get("clipboard.enableSearchPageMonitor") is True
        assert config.to_profile_options().clipboard.enable_search_page_monitor is True

    def test_json_profile(self, tmp_path: Path):
        profile = tmp_path / "profile.json"
        profile.write_text(json.dumps({"anki": {"kanji": {"fields": {"k": "{clipboard-text}"}}}}))

        options = load_profile_options(profile)

        assert options.anki.kanji.fields["k"] == "{clipboard-text}"

    def test_missing_defaults_file_is_ignored(self, tmp_path: Path):
        config = OptionsConfig.load(defaults_path=tmp_path / "nope.yaml")

        assert config.to_dict() == {}

    def test_missing_profile_raises(self, tmp_path: Path):
        with pytest.raises(ConfigError, match="Options file not found"):
            load_profile_options(tmp_path / "missing.yaml")

    def test_non_mapping_profile_raises(self, tmp_path: Path):
        profile = tmp_path / "profile.yaml"
        profile.write_text("- just\n- a list\n")

        with pytest.raises(ConfigError, match="must contain a mapping"):
            load_profile_options(profile)

    def test_malformed_yaml_raises(self, tmp_path: Path):
        profile = tmp_path / "profile.yaml"
        profile.write_text("parsing: [unclosed\n")

        with pytest.raises(ConfigError, match="Failed to load options"):
            load_profile_options(profile)

    def test_empty_profile_uses_defaults(self, tmp_path: Path):
        profile = tmp_path / "profile.yaml"
        profile.write_text("")

        assert load_profile_options(profile) == ProfileOptions()


class TestProfileOptionsValidation:
    """Malformed profiles raise ConfigError naming the offending key."""

    @pytest.mark.parametrize(
        ("data", "key"),
        [
            ({"parsing": True}, "'parsing'"),
            ({"clipboard": ["enableBackgroundMonitor"]}, "'clipboard'"),
            ({"anki": "terms"}, "'anki'"),
            ({"anki": {"kanji": 3}}, "'anki.kanji'"),
            ({"anki": {"terms": {"fields": ["a", "b"]}}}, "'anki.terms.fields'"),
            ({"anki": {"kanji": {"fields": "{clipboard-text}"}}}, "'anki.kanji.fields'"),
        ],
    )
    def test_non_mapping_sections(self, data, key):
        with pytest.raises(ConfigError, match=key):
            ProfileOptions.from_dict(data)

    def test_non_mapping_profile(self):
        with pytest.raises(ConfigError, match="'profile' must be a mapping"):
            ProfileOptions.from_dict(["parsing"])  # type: ignore[arg-type]

    @pytest.mark.parametrize("value", ["false", "true", 0, 1, "no"])
    def test_non_boolean_mecab_flag(self, value):
        with pytest.raises(ConfigError, match="parsing.enableMecabParser"):
            ProfileOptions.from_dict({"parsing": {"enableMecabParser": value}})

    def test_non_boolean_clipboard_flag(self):
        with pytest.raises(ConfigError, match="clipboard.enableSearchPageMonitor"):
            ProfileOptions.from_dict({"clipboard": {"enableSearchPageMonitor": "false"}})

    def test_null_flags_and_sections_mean_disabled(self):
        options = ProfileOptions.from_dict(
            {"parsing": {"enableMecabParser": None}, "clipboard": None, "anki": {"terms": {"fields": None}}}
        )

        assert options == ProfileOptions()

    def test_quoted_flag_in_profile_file(self, tmp_path: Path):
        profile = tmp_path / "profile.yaml"
        profile.write_text("parsing:\n  enableMecabParser: 'false'\n")

        with pytest.raises(ConfigError, match="parsing.enableMecabParser"):
            load_profile_options(profile)

    def test_list_fields_in_profile_file(self, tmp_path: Path):
        profile = tmp_path / "profile.yaml"
        profile.write_text("anki:\n  terms:\n    fields: [a, b]\n")

        with pytest.raises(ConfigError, match="anki.terms.fields"):
            load_profile_options(profile)
