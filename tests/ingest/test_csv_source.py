from pathlib import Path

import pytest

from batting_analysis.exceptions import ParseError
from batting_analysis.ingest.column_maps import event_row, game_log_row
from batting_analysis.ingest.csv_source import event_source, find_game_logs, game_log_source, load_season_logs
from tests.helpers import event, event_fields, game_log_fields, write_rows


class TestGameLogRow:
    def test_named_fields_from_fixed_columns(self, two_team_fields: list[list[str]]) -> None:
        row = game_log_row(two_team_fields[0])
        assert row.season == 2001
        assert (row.visiting_team, row.home_team) == ("AAA", "BBB")
        assert (row.visiting_score, row.home_score) == (5, 3)
        assert row.visiting.ab == 35
        assert row.visiting.sf == 1
        assert row.home.hbp == 1
        assert row.home.triples == 1
        assert row.winner == "AAA"

    def test_blank_fields_are_missing(self) -> None:
        row = game_log_row(game_log_fields("19050601", "BOS", "NY1", None, 2, {"ab": 30}, {}))
        assert row.visiting_score is None
        assert row.visiting.ab == 30
        assert row.visiting.h is None
        assert row.home.ab is None
        assert row.winner is None

    def test_tie_has_no_winner(self) -> None:
        assert game_log_row(game_log_fields("19050601", "BOS", "NY1", 2, 2)).winner is None


class TestEventRow:
    def test_seven_columns(self) -> None:
        row = event_row(["ANA200104020", "erstd001", "20", "1", "1", "0", "0"])
        assert row == event("ANA200104020", "erstd001", event_code=20, at_bat=1, hit_value=1)
        assert row.is_hit

    def test_walk_is_non_at_bat_appearance(self) -> None:
        assert event_row(["G", "p", "14", "0", "0", "0", "0"]).is_non_at_bat_appearance


class TestGameLogSource:
    def test_fetch(self, tmp_path: Path, two_team_fields: list[list[str]]) -> None:
        path = write_rows(tmp_path / "GL2001.TXT", two_team_fields)
        source = game_log_source(path)
        rows = source.fetch()
        assert len(rows) == 4
        assert source.source_type == "game_log"
        assert source.source_detail == str(path)

    def test_non_numeric_field_is_parse_error_with_location(self, tmp_path: Path) -> None:
        good = game_log_fields("20010401", "AAA", "BBB", 1, 2, {"ab": 30}, {"ab": 31})
        bad = game_log_fields("20010402", "AAA", "BBB", 1, 2, {"ab": 30}, {"ab": 31})
        bad[21] = "thirty"
        path = write_rows(tmp_path / "GL2001.TXT", [good, bad])
        with pytest.raises(ParseError, match="column 22") as exc_info:
            game_log_source(path).fetch()
        assert exc_info.value.line == 2
        assert exc_info.value.path == path

    def test_short_row_is_parse_error(self, tmp_path: Path) -> None:
        path = write_rows(tmp_path / "GL2001.TXT", [["20010401", "1", "Sun", "AAA"]])
        with pytest.raises(ParseError, match="columns"):
            game_log_source(path).fetch()

    def test_bad_date_is_parse_error(self, tmp_path: Path) -> None:
        path = write_rows(tmp_path / "GL2001.TXT", [game_log_fields("April", "AAA", "BBB", 1, 2)])
        with pytest.raises(ParseError, match="date"):
            game_log_source(path).fetch()

    def test_missing_file_is_parse_error(self, tmp_path: Path) -> None:
        with pytest.raises(ParseError, match="cannot read"):
            game_log_source(tmp_path / "GL1999.TXT").fetch()


class TestEventSource:
    def test_fetch_skips_blank_lines(self, tmp_path: Path) -> None:
        rows = [event("G1", "p1", hit_value=1, event_code=20), event("G1", "p1"), event("G2", "p2")]
        path = tmp_path / "events.csv"
        write_rows(path, [event_fields(r) for r in rows[:2]] + [[]] + [event_fields(rows[2])])
        assert event_source(path).fetch() == rows

    def test_wrong_column_count(self, tmp_path: Path) -> None:
        path = write_rows(tmp_path / "events.csv", [["G1", "p1", 20, 1, 1, 0]])
        with pytest.raises(ParseError, match="expected 7 columns"):
            event_source(path).fetch()

    def test_non_integer_flag(self, tmp_path: Path) -> None:
        path = write_rows(tmp_path / "events.csv", [["G1", "p1", 20, "yes", 1, 0, 0]])
        with pytest.raises(ParseError, match="column 4"):
            event_source(path).fetch()

    @pytest.mark.parametrize(
        ("fields", "column"),
        [
            (["G1", "p1", 20, 7, 1, 0, 0], 4),
            (["G1", "p1", 20, 1, 5, 0, 0], 5),
            (["G1", "p1", 20, 1, -1, 0, 0], 5),
            (["G1", "p1", 20, 0, 0, 2, 0], 6),
            (["G1", "p1", 20, 0, 0, 0, 3], 7),
        ],
    )
    def test_out_of_range_values(self, tmp_path: Path, fields: list[object], column: int) -> None:
        path = write_rows(tmp_path / "events.csv", [fields])
        with pytest.raises(ParseError, match=f"column {column}: expected") as exc_info:
            event_source(path).fetch()
        assert exc_info.value.line == 1

    def test_home_run_and_flags_at_upper_bound(self, tmp_path: Path) -> None:
        path = write_rows(tmp_path / "events.csv", [["G1", "p1", 23, 1, 4, 0, 0], ["G1", "p1", 2, 0, 0, 1, 1]])
        rows = event_source(path).fetch()
        assert rows[0].hit_value == 4
        assert (rows[1].sacrifice_hit, rows[1].sacrifice_fly) == (1, 1)

    def test_invalid_utf8_is_parse_error(self, tmp_path: Path) -> None:
        path = tmp_path / "events.csv"
        path.write_bytes(b'"G1","p\xe9rez01",20,1,1,0,0\n')
        with pytest.raises(ParseError, match="not valid utf-8") as exc_info:
            event_source(path).fetch()
        assert exc_info.value.path == path

    def test_other_encoding_can_be_requested(self, tmp_path: Path) -> None:
        path = tmp_path / "events.csv"
        path.write_bytes(b'"G1","p\xe9rez01",20,1,1,0,0\n')
        assert event_source(path).fetch(encoding="latin-1")[0].player_id == "p\u00e9rez01"


class TestLoadSeasonLogs:
    def test_finds_yearly_files(self, tmp_path: Path, two_team_fields: list[list[str]]) -> None:
        write_rows(tmp_path / "GL2001.TXT", two_team_fields)
        write_rows(tmp_path / "gl2002.txt", two_team_fields)
        (tmp_path / "notes.txt").write_text("ignore me")
        assert set(find_game_logs(tmp_path)) == {2001, 2002}

    def test_loads_range_and_skips_missing_years(self, tmp_path: Path, two_team_fields: list[list[str]]) -> None:
        write_rows(tmp_path / "GL2001.TXT", two_team_fields)
        write_rows(tmp_path / "GL2003.TXT", two_team_fields)
        seasons = load_season_logs(tmp_path, 2000, 2002)
        assert list(seasons) == [2001]
        assert len(seasons[2001]) == 4

    def test_missing_directory(self, tmp_path: Path) -> None:
        with pytest.raises(ParseError, match="directory"):
            load_season_logs(tmp_path / "nope", 2000, 2001)
