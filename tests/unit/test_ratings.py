"""Tests for OMDb rating normalisation."""

from vestri.services.ratings import empty_bundle, normalize


def test_full_payload():
    payload = {
        "imdbRating": "8.1",
        "imdbVotes": "1,234",
        "Ratings": [
            {"Source": "Internet Movie Database", "Value": "8.1/10"},
            {"Source": "Rotten Tomatoes", "Value": "93%"},
            {"Source": "Metacritic", "Value": "71/100"},
        ],
        "Metascore": "71",
    }

    bundle = normalize(payload)

    assert bundle.imdb.rating == "8.1"
    assert bundle.imdb.votes == "1,234"
    assert bundle.rotten_tomatoes == "93%"
    assert bundle.metacritic == "71"
    assert bundle.error is None


def test_missing_sources_are_none():
    payload = {
        "imdbRating": "7.2",
        "imdbVotes": "N/A",
        "Ratings": [{"Source": "Internet Movie Database", "Value": "7.2/10"}],
        "Metascore": "N/A",
    }

    bundle = normalize(payload)

    assert bundle.imdb.rating == "7.2"
    assert bundle.imdb.votes is None
    assert bundle.rotten_tomatoes is None
    assert bundle.metacritic is None


def test_metascore_used_when_list_lacks_metacritic():
    bundle = normalize({"Ratings": [], "Metascore": "64"})

    assert bundle.metacritic == "64"


def test_empty_payload():
    bundle = normalize({})

    assert bundle.imdb.rating is None
    assert bundle.imdb.votes is None
    assert bundle.rotten_tomatoes is None
    assert bundle.metacritic is None


def test_empty_bundle_carries_error():
    bundle = empty_bundle("Movie not found!")

    assert bundle.error == "Movie not found!"
    assert bundle.imdb.rating is None
    assert bundle.rotten_tomatoes is None
