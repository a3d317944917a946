"""
Tests unitaires pour NfoCodec.

Verifie la generation des quatre types de NFO, la signature <generator>,
et la lecture tolerante des NFO existants.
"""

from lxml import etree

from media_scraper.core.ports.api_clients import MovieDetails, SeasonDetails, ShowDetails
from media_scraper.services.nfo import NfoCodec


class TestGeneration:
    def test_tvshow_nfo_fields(self, nfo_codec: NfoCodec, show_details: ShowDetails) -> None:
        content = nfo_codec.tvshow(show_details)
        root = etree.fromstring(content.encode("utf-8"))

        assert content.startswith("<?xml")
        assert root.tag == "tvshow"
        assert root.findtext("title") == "Show"
        assert root.findtext("originaltitle") == "Show Original"
        assert root.findtext("year") == "2008"
        assert root.findtext("premiered") == "2008-01-20"
        assert root.findtext("rating") == "8.9"
        assert root.findtext("status") == "Ended"
        assert root.findtext("tmdbid") == "1396"
        assert root.find("uniqueid[@type='tmdb']").text == "1396"
        assert root.find("uniqueid[@type='imdb']").text == "tt0903747"
        assert root.findtext("genre") == "Drama"
        assert root.findtext("generator") == "media-scraper-web"

    def test_season_nfo(
        self, nfo_codec: NfoCodec, show_details: ShowDetails, season_details: SeasonDetails
    ) -> None:
        root = etree.fromstring(nfo_codec.season(show_details, season_details).encode("utf-8"))
        assert root.tag == "season"
        assert root.findtext("seasonnumber") == "1"
        assert root.findtext("showtitle") == "Show"

    def test_episode_nfo_single(
        self, nfo_codec: NfoCodec, show_details: ShowDetails, season_details: SeasonDetails
    ) -> None:
        content = nfo_codec.episode(show_details, season_details, [1])
        root = etree.fromstring(content.encode("utf-8"))
        assert root.tag == "episodedetails"
        assert root.findtext("title") == "Pilot"
        assert root.findtext("season") == "1"
        assert root.findtext("episode") == "1"
        assert root.findtext("aired") == "2008-01-20"
        assert root.findtext("runtime") == "58"

    def test_episode_nfo_multi_episode_concatenates_blocks(
        self, nfo_codec: NfoCodec, show_details: ShowDetails, season_details: SeasonDetails
    ) -> None:
        content = nfo_codec.episode(show_details, season_details, [1, 2])
        assert content.count("<episodedetails>") == 2
        assert content.count("<?xml") == 1
        assert content.count("<generator>media-scraper-web</generator>") == 2
        assert "Cat&apos;s in the Bag" in content or "Cat's in the Bag" in content

    def test_episode_missing_from_season_gets_default_title(
        self, nfo_codec: NfoCodec, show_details: ShowDetails
    ) -> None:
        content = nfo_codec.episode(show_details, SeasonDetails(season_number=3), [9])
        root = etree.fromstring(content.encode("utf-8"))
        assert root.findtext("title") == "Episode 9"
        assert root.findtext("season") == "3"

    def test_movie_nfo(self, nfo_codec: NfoCodec, movie_details: MovieDetails) -> None:
        root = etree.fromstring(nfo_codec.movie(movie_details).encode("utf-8"))
        assert root.tag == "movie"
        assert root.findtext("title") == "Dune"
        assert root.findtext("tagline") == "Beyond fear, destiny awaits."
        assert root.findtext("runtime") == "155"
        assert root.findtext("year") == "2021"
        assert root.findtext("tmdbid") == "438631"

    def test_special_characters_are_escaped(self, nfo_codec: NfoCodec) -> None:
        show = ShowDetails(id=1, name="Law & Order <SVU>")
        content = nfo_codec.tvshow(show)
        assert "Law &amp; Order &lt;SVU&gt;" in content
        assert etree.fromstring(content.encode("utf-8")).findtext("title") == "Law & Order <SVU>"

    def test_empty_values_are_omitted(self, nfo_codec: NfoCodec) -> None:
        root = etree.fromstring(nfo_codec.tvshow(ShowDetails(id=7, name="Bare")).encode("utf-8"))
        assert root.find("plot") is None
        assert root.find("rating") is None
        assert root.find("uniqueid[@type='imdb']") is None


class TestSignature:
    def test_generated_nfo_is_signed(self, nfo_codec: NfoCodec, show_details: ShowDetails) -> None:
        assert nfo_codec.is_signed(nfo_codec.tvshow(show_details))

    def test_foreign_nfo_is_not_signed(self, nfo_codec: NfoCodec) -> None:
        assert not nfo_codec.is_signed("<tvshow><title>X</title><generator>Kodi</generator></tvshow>")

    def test_other_generator_is_not_signed(self, show_details: ShowDetails) -> None:
        content = NfoCodec("other-tool").tvshow(show_details)
        assert not NfoCodec("media-scraper-web").is_signed(content)


class TestReading:
    def test_extract_catalog_id(self) -> None:
        assert NfoCodec.extract_catalog_id("<tvshow><tmdbid> 1396 </tmdbid></tvshow>") == 1396

    def test_extract_catalog_id_absent(self) -> None:
        assert NfoCodec.extract_catalog_id("<tvshow><title>X</title></tvshow>") is None

    def test_read_details_of_generated_movie(self, nfo_codec: NfoCodec, movie_details: MovieDetails) -> None:
        details = NfoCodec.read_details(nfo_codec.movie(movie_details))
        assert details.title == "Dune"
        assert details.tagline == "Beyond fear, destiny awaits."
        assert details.runtime == 155
        assert details.vote_average == 7.8
        assert details.year == 2021
        assert details.tmdb_id == 438631

    def test_read_details_uniqueid_fallback(self) -> None:
        content = '<movie><uniqueid type="tmdb">550</uniqueid><premiered>1999-10-15</premiered></movie>'
        details = NfoCodec.read_details(content)
        assert details.tmdb_id == 550
        assert details.year == 1999

    def test_read_details_tolerates_bad_values(self) -> None:
        content = "<movie><runtime>long</runtime><rating>n/a</rating><year>19x9</year><foo>bar</foo></movie>"
        details = NfoCodec.read_details(content)
        assert details.runtime is None
        assert details.vote_average is None
        assert details.year is None

    def test_read_details_of_garbage(self) -> None:
        details = NfoCodec.read_details("not xml at all")
        assert details.title is None
        assert details.tmdb_id is None
