import json

import pytest

from labeleer_cli.errors import InvalidProjectSetupError
from labeleer_cli.formats import SupportedFormat
from labeleer_cli.project_setup import (
    PROJECT_FILE_NAME,
    ProjectPathEntry,
    ProjectSetup,
    android_qualifier_to_tag,
    create_project_setup,
    inquire_project_setup,
    load_project_setup,
    locate_paths_for_variant,
)


def _touch(root, relative):
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("", encoding="utf-8")
    return path


class TestLocatePaths:
    def test_single_file_formats_use_wildcard(self, tmp_path):
        _touch(tmp_path, "app/i18n/labels.json")
        _touch(tmp_path, "node_modules/pkg/labels.json")

        assert locate_paths_for_variant(SupportedFormat.JSON, tmp_path) == [
            ProjectPathEntry(locale="*", path="app/i18n/labels.json")
        ]

    def test_single_file_format_without_match(self, tmp_path):
        assert locate_paths_for_variant(SupportedFormat.XCSTRINGS, tmp_path) == []

    def test_yaml_accepts_yml(self, tmp_path):
        _touch(tmp_path, "labels.yml")

        assert locate_paths_for_variant(SupportedFormat.YAML, tmp_path) == [
            ProjectPathEntry(locale="*", path="labels.yml")
        ]

    def test_ts_collects_every_labels_file(self, tmp_path):
        _touch(tmp_path, "a/labels.ts")
        _touch(tmp_path, "b/labels.ts")

        entries = locate_paths_for_variant(SupportedFormat.TS, tmp_path)

        assert [(e.locale, e.path) for e in entries] == [("*", "a/labels.ts"), ("*", "b/labels.ts")]

    def test_apple_strings_locale_from_lproj(self, tmp_path):
        _touch(tmp_path, "App/Base.lproj/Localizable.strings")
        _touch(tmp_path, "App/en.lproj/Localizable.strings")
        _touch(tmp_path, "App/pt-BR.lproj/Localizable.strings")
        _touch(tmp_path, "App/Localizable.strings")

        entries = locate_paths_for_variant(SupportedFormat.APPLE_STRINGS, tmp_path)

        assert [(e.locale, e.path) for e in entries] == [
            ("en_US", "App/en.lproj/Localizable.strings"),
            ("pt_BR", "App/pt-BR.lproj/Localizable.strings"),
        ]

    def test_android_strings_locale_from_values_directory(self, tmp_path):
        _touch(tmp_path, "res/values/strings.xml")
        _touch(tmp_path, "res/values-fr/strings.xml")
        _touch(tmp_path, "res/values-night/strings.xml")
        _touch(tmp_path, "res/values-pt-rBR/strings.xml")

        entries = locate_paths_for_variant(SupportedFormat.ANDROID_STRINGS, tmp_path)

        assert [(e.locale, e.path) for e in entries] == [
            ("fr_FR", "res/values-fr/strings.xml"),
            ("pt_BR", "res/values-pt-rBR/strings.xml"),
        ]

    @pytest.mark.parametrize("variant", [SupportedFormat.XLIFF, SupportedFormat.PO])
    def test_formats_without_layout_detection(self, tmp_path, variant):
        _touch(tmp_path, "labels.po")
        _touch(tmp_path, "labels.xliff")

        assert locate_paths_for_variant(variant, tmp_path) == []


@pytest.mark.parametrize(
    "directory,expected",
    [
        ("values-fr", "fr"),
        ("values-pt-rBR", "pt-BR"),
        ("values-b+sr+Latn", "sr-Latn"),
        ("values", None),
        ("drawable-fr", None),
    ],
)
def test_android_qualifier_to_tag(directory, expected):
    assert android_qualifier_to_tag(directory) == expected


class TestPersistence:
    def test_create_then_load(self, tmp_path):
        paths = [ProjectPathEntry(locale="*", path="labels.json")]

        created = create_project_setup(tmp_path, SupportedFormat.JSON, paths)

        assert load_project_setup(tmp_path) == created
        raw = json.loads((tmp_path / PROJECT_FILE_NAME).read_text(encoding="utf-8"))
        assert raw == {"variant": "json", "paths": [{"locale": "*", "path": "labels.json"}]}

    def test_existing_setup_is_not_overwritten(self, tmp_path):
        first = create_project_setup(tmp_path, SupportedFormat.JSON, [ProjectPathEntry(locale="*", path="a.json")])

        second = create_project_setup(tmp_path, SupportedFormat.YAML, [ProjectPathEntry(locale="*", path="b.yaml")])

        assert second == first

    def test_empty_paths_are_rejected(self, tmp_path):
        with pytest.raises(InvalidProjectSetupError):
            create_project_setup(tmp_path, SupportedFormat.PO, [])

        assert not (tmp_path / PROJECT_FILE_NAME).exists()

    def test_load_normalizes_locales(self, tmp_path):
        (tmp_path / PROJECT_FILE_NAME).write_text(
            json.dumps({"variant": "apple-strings", "paths": [{"locale": "en-GB", "path": "en-GB.lproj/Localizable.strings"}]}),
            encoding="utf-8",
        )

        setup = load_project_setup(tmp_path)

        assert setup.variant is SupportedFormat.APPLE_STRINGS
        assert setup.paths[0].locale == "en_GB"

    @pytest.mark.parametrize(
        "document",
        [
            {"variant": "json", "paths": []},
            {"variant": "csv", "paths": [{"locale": "*", "path": "labels.csv"}]},
            {"variant": "json", "paths": [{"locale": "klingon", "path": "labels.json"}]},
        ],
    )
    def test_invalid_documents(self, tmp_path, document):
        (tmp_path / PROJECT_FILE_NAME).write_text(json.dumps(document), encoding="utf-8")

        with pytest.raises(InvalidProjectSetupError):
            load_project_setup(tmp_path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_project_setup(tmp_path)


class TestInquireProjectSetup:
    def test_existing_setup_needs_no_prompt(self, tmp_path, scripted_terminal):
        existing = create_project_setup(tmp_path, SupportedFormat.JSON, [ProjectPathEntry(locale="*", path="labels.json")])
        terminal = scripted_terminal()

        assert inquire_project_setup(terminal, tmp_path) == existing
        assert terminal.prompts == []

    def test_decline(self, tmp_path, scripted_terminal):
        terminal = scripted_terminal([False])

        assert inquire_project_setup(terminal, tmp_path) is None
        assert not (tmp_path / PROJECT_FILE_NAME).exists()

    def test_create_for_detected_layout(self, tmp_path, scripted_terminal):
        _touch(tmp_path, "res/values-de/strings.xml")
        terminal = scripted_terminal([True, SupportedFormat.ANDROID_STRINGS])

        setup = inquire_project_setup(terminal, tmp_path)

        assert setup == ProjectSetup(
            variant=SupportedFormat.ANDROID_STRINGS,
            paths=[ProjectPathEntry(locale="de_DE", path="res/values-de/strings.xml")],
        )
        assert (tmp_path / PROJECT_FILE_NAME).exists()
