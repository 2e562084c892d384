"""Tests for the command-line interface."""

import json

import pytest

from wine_lens import SearchResult, cli
from wine_lens.exceptions import AuthenticationError
from wine_lens.search.base import BaseSearchClient

RESULTS = {
    "Quinta do Carmo": {
        "hits": [
            {
                "id": 1,
                "name": "Quinta do Carmo",
                "vintages": [
                    {"year": "2018", "seo_name": "quinta-do-carmo-tinto-2018"},
                    {"year": "2020", "seo_name": "quinta-do-carmo-tinto-2020"},
                ],
            }
        ]
    },
}


class FakeSearchClient(BaseSearchClient):
    def search(self, query: str) -> SearchResult:
        return SearchResult.model_validate(RESULTS.get(query, {"hits": []}))


@pytest.fixture
def guesses_file(tmp_path):
    path = tmp_path / "guesses.json"
    path.write_text(
        json.dumps(
            [
                {"name": "Quinta do Carmo", "type": "red", "year": "2018", "price": "19.49"},
                {"name": "Vinha Marines", "type": "red", "year": "N/A", "price": "14.99"},
            ]
        ),
        encoding="utf-8",
    )
    return path


@pytest.fixture
def fake_search(mocker):
    return mocker.patch("wine_lens.cli.VivinoSearchClient", return_value=FakeSearchClient())


def test_cli_prints_formatted_matches(guesses_file, fake_search, capsys):
    code = cli.main(["--guesses", str(guesses_file)])

    out = capsys.readouterr().out
    assert code == 0
    assert "Wine: Quinta do Carmo" in out
    assert "confident (1 of 1 hits)" in out
    assert "Quinta do Carmo [2018]" in out
    assert "Wine: Vinha Marines" in out
    assert "unknown year" in out
    assert "no_hits" in out


def test_cli_json_output_and_results_file(guesses_file, fake_search, tmp_path, capsys):
    results_path = tmp_path / "results_main.json"

    code = cli.main(["--guesses", str(guesses_file), "--json", "--results-path", str(results_path)])

    payload = json.loads(capsys.readouterr().out)
    assert code == 0
    assert [item["status"] for item in payload] == ["confident", "no_hits"]
    assert payload[0]["hits"][0]["vintages"][0]["year"] == "2018"

    raw = json.loads(results_path.read_text(encoding="utf-8"))
    assert len(raw) == 2
    assert len(raw[0]["hits"][0]["vintages"]) == 2


def test_cli_extracts_from_image(mocker, fake_search, capsys):
    extract = mocker.patch("wine_lens.cli.extract", return_value=[])

    code = cli.main(["shelf.jpg", "--api-key", "test-key"])

    assert code == 0
    extract.assert_called_once_with("shelf.jpg", api_key="test-key")


def test_cli_reports_errors(guesses_file, mocker, capsys):
    mocker.patch("wine_lens.cli.VivinoSearchClient", side_effect=AuthenticationError("no key"))

    code = cli.main(["--guesses", str(guesses_file)])

    assert code == 1
    assert "Error: no key" in capsys.readouterr().err


def test_cli_rejects_unreadable_guesses(tmp_path, fake_search, capsys):
    bad = tmp_path / "bad.json"
    bad.write_text('{"name": "not a list"}', encoding="utf-8")

    code = cli.main(["--guesses", str(bad)])

    assert code == 1
    assert "Failed to read guesses" in capsys.readouterr().err


def test_cli_requires_image_or_guesses():
    with pytest.raises(SystemExit):
        cli.main([])
