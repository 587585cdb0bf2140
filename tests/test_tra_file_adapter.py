"""TraFileAdapter: merging the four language tables into one translation map."""

import logging
from types import MappingProxyType

import pytest

from adapters import InvalidInputFormat, TranslationDataPort
from adapters.tra_file import TraFileAdapter


SAMPLE_TRA_DATA = {
    "en": '10001,"Submit","All"\n10002,"Cancel","All"\n10003,"Welcome","All"',
    "fr": '10001,"Soumettre","All"\n10002,"Annuler","All"\n10003,"Bienvenue","All"',
    "nl": '10001,"Indienen","All"\n10002,"Annuleren","All"\n10003,"Welkom","All"',
    "de": '10001,"Einreichen","All"\n10002,"Abbrechen","All"\n10003,"Willkommen","All"',
}


class TestConstruction:

    def test_valid_data(self):
        adapter = TraFileAdapter(SAMPLE_TRA_DATA)
        assert isinstance(adapter, TranslationDataPort)

    def test_invalid_data_raises(self):
        with pytest.raises(InvalidInputFormat):
            TraFileAdapter({"invalid": "data"})

    @pytest.mark.parametrize("missing", ["en", "fr", "nl", "de"])
    def test_each_language_is_required(self, missing):
        data = {k: v for k, v in SAMPLE_TRA_DATA.items() if k != missing}
        with pytest.raises(InvalidInputFormat):
            TraFileAdapter(data)

    def test_read_only_mapping_input(self):
        adapter = TraFileAdapter(MappingProxyType({"en": '1,"a"', "fr": "", "nl": "", "de": ""}))
        assert adapter.get_translation_map() == {"1": {"en": "a"}}

    def test_non_text_language_raises(self):
        with pytest.raises(InvalidInputFormat):
            TraFileAdapter(dict(SAMPLE_TRA_DATA, nl=b"10001,\"Indienen\""))


class TestTranslationMap:

    def test_all_languages_present(self):
        translation_map = TraFileAdapter(SAMPLE_TRA_DATA).get_translation_map()
        assert translation_map["10001"] == {
            "en": "Submit",
            "fr": "Soumettre",
            "nl": "Indienen",
            "de": "Einreichen",
        }
        assert translation_map["10003"]["de"] == "Willkommen"

    def test_end_to_end_example(self):
        adapter = TraFileAdapter({
            "en": '1,"Submit","All"\n2,"Cancel","All"',
            "fr": '1,"Soumettre","All"',
            "nl": "",
            "de": "",
        })
        assert adapter.get_translation_map() == {
            "1": {"en": "Submit", "fr": "Soumettre"},
            "2": {"en": "Cancel"},
        }
        assert adapter.get_translation_count() == 2
        assert adapter.get_metadata_map() == {}

    def test_bundle_holds_only_present_languages(self):
        adapter = TraFileAdapter({
            "en": '42,"Only en and fr"',
            "fr": '42,"Seulement en et fr"',
            "nl": '7,"Iets anders"',
            "de": "",
        })
        bundle = adapter.get_translation_map()["42"]
        assert set(bundle) == {"en", "fr"}
        assert "" not in bundle.values()

    def test_identifier_only_in_one_language(self):
        adapter = TraFileAdapter({"en": "", "fr": "", "nl": "", "de": '9,"Nur Deutsch"'})
        assert adapter.get_translation_map() == {"9": {"de": "Nur Deutsch"}}

    def test_bundles_match_per_language_tables(self):
        data = {
            "en": '1,"a"\n2,"b"\n3,"c"',
            "fr": '2,"bb"\n4,"dd"',
            "nl": '1,"aaa"\n4,"ddd"\nbroken',
            "de": '5,"eeee"',
        }
        translation_map = TraFileAdapter(data).get_translation_map()
        assert set(translation_map) == {"1", "2", "3", "4", "5"}
        assert translation_map["4"] == {"fr": "dd", "nl": "ddd"}
        assert translation_map["5"] == {"de": "eeee"}

    def test_duplicate_identifier_last_write_wins(self):
        adapter = TraFileAdapter({
            "en": '1,"Old"\n1,"New"',
            "fr": "",
            "nl": "",
            "de": "",
        })
        assert adapter.get_translation_map()["1"] == {"en": "New"}

    def test_byte_order_mark_keeps_first_entry(self):
        data = dict(SAMPLE_TRA_DATA, fr="\ufeff" + SAMPLE_TRA_DATA["fr"])
        adapter = TraFileAdapter(data)
        assert adapter.get_translation_map()["10001"]["fr"] == "Soumettre"
        assert adapter.get_skipped_line_counts()["fr"] == 0

    def test_windows_line_endings(self):
        crlf = {k: v.replace("\n", "\r\n") for k, v in SAMPLE_TRA_DATA.items()}
        assert TraFileAdapter(crlf).get_translation_map() == TraFileAdapter(SAMPLE_TRA_DATA).get_translation_map()

    def test_map_is_read_only(self):
        translation_map = TraFileAdapter(SAMPLE_TRA_DATA).get_translation_map()
        with pytest.raises(TypeError):
            translation_map["99999"] = {"en": "Injected"}
        with pytest.raises(TypeError):
            translation_map["10001"]["en"] = "Changed"


class TestAccessors:

    def test_translation_count(self):
        assert TraFileAdapter(SAMPLE_TRA_DATA).get_translation_count() == 3

    def test_empty_files(self):
        adapter = TraFileAdapter({"en": "", "fr": "", "nl": "", "de": ""})
        assert adapter.get_translation_map() == {}
        assert adapter.get_translation_count() == 0

    def test_metadata_map_is_empty(self):
        assert TraFileAdapter(SAMPLE_TRA_DATA).get_metadata_map() == {}

    def test_source_identifier(self):
        assert TraFileAdapter(SAMPLE_TRA_DATA).get_source_identifier() == "tra-files"

    def test_get_translation(self):
        adapter = TraFileAdapter(SAMPLE_TRA_DATA)
        assert adapter.get_translation("10002")["nl"] == "Annuleren"
        assert adapter.get_translation("404") is None

    def test_skipped_line_counts(self):
        adapter = TraFileAdapter({
            "en": '1,"Ok"\nbad line\n\n',
            "fr": "",
            "nl": "still bad\nagain bad",
            "de": '1,"Gut"',
        })
        assert adapter.get_skipped_line_counts() == {"en": 1, "fr": 0, "nl": 2, "de": 0}

    def test_build_stats_are_logged(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="adapters.tra_file"):
            TraFileAdapter(dict(SAMPLE_TRA_DATA, en='1,"a"\n1,"b"\nxx'))
        assert "en: 1 entries, 1 skipped lines, 1 duplicate ids" in caplog.text
