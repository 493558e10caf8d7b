"""Tests for the TTM schedule client. Network calls are mocked."""

import base64
import json
from unittest.mock import MagicMock, patch

import pytest
import requests

from gameswap import schedule_client
from gameswap.errors import OutputWriteError, ScheduleFetchError
from gameswap.schedule import load_schedule_csv

URL = "https://example.test/schedules/games/"


def _make_ttm_game(game_id, game_date="2025-03-10", division="U13 A",
                   home="Orleans U13 A1", away="Kanata U13 A1"):
    return {
        "id": f"row-{game_id}",
        "gameID": game_id,
        "gameDate": game_date,
        "gameTime": "19:00",
        "venue": "Rink 1",
        "division": division,
        "homeTeam": home,
        "awayTeam": away,
    }


def _make_envelope(games):
    data = base64.b64encode(json.dumps(games).encode()).decode()
    return {"id": 1, "data": data}


def _mock_response(payload):
    resp = MagicMock()
    resp.json.return_value = payload
    resp.raise_for_status.return_value = None
    return resp


class TestDecodeEnvelope:
    def test_decodes_games(self):
        games = [_make_ttm_game("G1"), _make_ttm_game("G2")]
        assert schedule_client.decode_envelope(_make_envelope(games)) == games

    def test_missing_data(self):
        with pytest.raises(ScheduleFetchError):
            schedule_client.decode_envelope({"id": 1})

    def test_bad_base64(self):
        with pytest.raises(ScheduleFetchError):
            schedule_client.decode_envelope({"id": 1, "data": "not base64!!"})

    def test_bad_json(self):
        data = base64.b64encode(b"{not json").decode()
        with pytest.raises(ScheduleFetchError):
            schedule_client.decode_envelope({"id": 1, "data": data})

    def test_not_a_list(self):
        data = base64.b64encode(b'{"gameID": "G1"}').decode()
        with pytest.raises(ScheduleFetchError):
            schedule_client.decode_envelope({"id": 1, "data": data})

    def test_envelope_not_an_object(self):
        with pytest.raises(ScheduleFetchError):
            schedule_client.decode_envelope(["x"])

    def test_rows_not_objects(self):
        data = base64.b64encode(b'["a", "b"]').decode()
        with pytest.raises(ScheduleFetchError):
            schedule_client.decode_envelope({"id": 1, "data": data})


class TestRecordsToRows:
    def test_positional_order(self):
        rows = schedule_client.records_to_rows([_make_ttm_game("G1")])
        assert rows == [
            ["U13 A", "G1", "2025-03-10", "19:00", "Rink 1", "Orleans U13 A1", "Kanata U13 A1"]
        ]

    def test_missing_and_null_fields(self):
        game = _make_ttm_game("G1")
        del game["venue"]
        game["awayTeam"] = None
        row = schedule_client.records_to_rows([game])[0]
        assert row[4] == ""
        assert row[6] == ""


class TestDownloadSchedule:
    def test_download(self):
        games = [_make_ttm_game("G1"), _make_ttm_game("G2", "2025-03-12")]
        mock_log = MagicMock()
        with patch("gameswap.schedule_client.requests.get",
                   return_value=_mock_response(_make_envelope(games))) as mock_get:
            rows = schedule_client.download_schedule(URL, timeout=5, log=mock_log)
        mock_get.assert_called_once_with(URL, timeout=5)
        assert [r[1] for r in rows] == ["G1", "G2"]
        assert mock_log.call_count >= 1

    def test_http_error(self):
        resp = _mock_response({})
        resp.raise_for_status.side_effect = requests.HTTPError("503 Server Error")
        with patch("gameswap.schedule_client.requests.get", return_value=resp):
            with pytest.raises(ScheduleFetchError) as exc:
                schedule_client.download_schedule(URL, log=MagicMock())
        assert "503" in str(exc.value)

    def test_connection_error(self):
        with patch("gameswap.schedule_client.requests.get",
                   side_effect=requests.ConnectionError("refused")):
            with pytest.raises(ScheduleFetchError):
                schedule_client.download_schedule(URL, log=MagicMock())

    def test_invalid_json_response(self):
        resp = _mock_response(None)
        resp.json.side_effect = ValueError("Expecting value")
        with patch("gameswap.schedule_client.requests.get", return_value=resp):
            with pytest.raises(ScheduleFetchError):
                schedule_client.download_schedule(URL, log=MagicMock())

    def test_response_not_an_object(self):
        with patch("gameswap.schedule_client.requests.get",
                   return_value=_mock_response(["x"])):
            with pytest.raises(ScheduleFetchError):
                schedule_client.download_schedule(URL, log=MagicMock())


class TestSaveScheduleCsv:
    def test_header_and_rows(self, tmp_path):
        rows = schedule_client.records_to_rows([_make_ttm_game("0042"), _make_ttm_game("G2")])
        path = schedule_client.save_schedule_csv(rows, tmp_path / "data" / "schedule.csv")
        lines = path.read_text().splitlines()
        assert lines[0] == "Division,GameID,Date,Time,Arena,Home Team,Away Team"
        assert lines[1] == "U13 A,0042,2025-03-10,19:00,Rink 1,Orleans U13 A1,Kanata U13 A1"

    def test_loads_back_with_header_skipped(self, tmp_path):
        rows = schedule_client.records_to_rows([_make_ttm_game("0042"), _make_ttm_game("G2")])
        path = schedule_client.save_schedule_csv(rows, tmp_path / "schedule.csv")
        schedule = load_schedule_csv(path)
        assert schedule.well_formed().game_ids() == ["0042", "G2"]

    def test_write_failure(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("")
        with pytest.raises(OutputWriteError):
            schedule_client.save_schedule_csv([], blocker / "schedule.csv")
