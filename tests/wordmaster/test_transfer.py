"""Tests for JSON word list import/export and CSV conversion."""

import json
from pathlib import Path

import pytest

from wordmaster.transfer import (
    convert_dictionary_csv,
    export_words,
    import_example_words,
    import_word_file,
    load_word_list,
    write_word_list,
)

NOW = 1700000000

CSV_HEADER = "id,word,en_phonetic,us_phonetic,desc,en_pronunciation,us_pronunciation,svg_url\n"


class TestLoadWordList:
    """Tests for load_word_list."""

    def test_wrapped_list(self, tmp_path: Path):
        path = tmp_path / "words.json"
        path.write_text(json.dumps({"words": [{"word": "apple"}, {"word": "pear"}]}))

        records = load_word_list(path)
        assert [r["word"] for r in records] == ["apple", "pear"]

    def test_bare_list(self, tmp_path: Path):
        path = tmp_path / "words.json"
        path.write_text(json.dumps([{"word": "apple"}]))

        assert load_word_list(path) == [{"word": "apple"}]

    def test_not_a_word_list(self, tmp_path: Path):
        path = tmp_path / "words.json"
        path.write_text(json.dumps({"entries": []}))

        with pytest.raises(ValueError):
            load_word_list(path)

    def test_invalid_json(self, tmp_path: Path):
        path = tmp_path / "words.json"
        path.write_text("{not json")

        with pytest.raises(json.JSONDecodeError):
            load_word_list(path)


class TestImportExport:
    """Tests for moving words between files and the database."""

    def test_import_word_file(self, temp_db, tmp_path: Path):
        from wordmaster.database import get_word

        path = tmp_path / "words.json"
        write_word_list(
            [
                {"word": "apple", "imageUrl": "/images/apple.jpg", "nextReview": 5},
                {"word": "Apple"},
            ],
            path,
        )

        result = import_word_file(path, lambda: NOW)

        assert result.n_imported == 1
        assert result.skipped == [("Apple", "duplicate")]
        word = get_word(result.imported[0].id)
        assert word.image_url == "/images/apple.jpg"
        assert word.next_review == NOW + 86400

    def test_export_uses_record_keys(self, temp_db, tmp_path: Path):
        from wordmaster.database import add_word, review_word

        word = add_word({"word": "apple", "translation": "苹果"}, lambda: NOW)
        review_word(word.id, 5, lambda: NOW)

        path = tmp_path / "export.json"
        assert export_words(path) == 1

        data = json.loads(path.read_text(encoding="utf-8"))
        exported = data["words"][0]
        assert set(exported) == {
            "id", "word", "phonetic", "pronunciation", "definition", "example",
            "translation", "imageUrl", "difficulty", "lastReviewed", "nextReview",
            "reviewCount", "easeFactor", "interval", "learned", "mastered",
        }
        assert exported["translation"] == "苹果"
        assert exported["reviewCount"] == 1
        assert exported["learned"] is True

    def test_exported_file_reimports_as_new_words(self, temp_db, tmp_path: Path):
        from wordmaster.database import add_word, delete_word, get_word, review_word

        word = add_word({"word": "apple"}, lambda: NOW)
        review_word(word.id, 5, lambda: NOW)
        path = tmp_path / "export.json"
        export_words(path)
        delete_word(word.id)

        result = import_word_file(path, lambda: NOW)

        reimported = get_word(result.imported[0].id)
        assert reimported.id != word.id
        assert reimported.learned is False
        assert reimported.review_count == 0

    def test_import_example_words(self, temp_db):
        from wordmaster.database import count_words

        result = import_example_words(lambda: NOW)

        assert result.n_imported == 5
        assert count_words() == 5
        assert import_example_words(lambda: NOW).n_imported == 0


class TestConvertDictionaryCsv:
    """Tests for the spreadsheet converter."""

    def test_converts_rows(self, tmp_path: Path):
        csv_path = tmp_path / "dict.csv"
        csv_path.write_text(
            CSV_HEADER
            + '1,apple,ˈæpl,ˈæpəl,"n. a fruit, round",en.mp3,us.mp3,https://img/apple.svg\n',
            encoding="utf-8",
        )

        records = convert_dictionary_csv(csv_path)

        assert records == [{
            "word": "apple",
            "phonetic": "UK: ˈæpl, US: ˈæpəl",
            "definition": "n. a fruit, round",
            "example": "",
            "translation": "",
            "imageUrl": "https://img/apple.svg",
        }]

    def test_skips_short_rows(self, tmp_path: Path):
        csv_path = tmp_path / "dict.csv"
        csv_path.write_text(
            CSV_HEADER + "1,apple\n2,pear,a,b,fruit,,,\n",
            encoding="utf-8",
        )

        records = convert_dictionary_csv(csv_path)
        assert [r["word"] for r in records] == ["pear"]

    def test_header_only(self, tmp_path: Path):
        csv_path = tmp_path / "dict.csv"
        csv_path.write_text(CSV_HEADER, encoding="utf-8")

        assert convert_dictionary_csv(csv_path) == []

    def test_round_trip_through_word_list(self, tmp_path: Path):
        csv_path = tmp_path / "dict.csv"
        csv_path.write_text(CSV_HEADER + "1,pear,p,p,fruit,,,\n", encoding="utf-8")
        output = tmp_path / "words.json"

        write_word_list(convert_dictionary_csv(csv_path), output)

        assert load_word_list(output)[0]["word"] == "pear"
