import logging
from datetime import datetime

import pytest

from dashcam_mosaic.domain.value_objects import Camera
from dashcam_mosaic.exceptions import EventTimestampError, SegmentParseError
from dashcam_mosaic.services.segment_collector import collect_segments, list_segment_files
from dashcam_mosaic.services.segment_parser import (
    FilenameSegmentParser,
    is_event_folder_name,
    parse_event_timestamp,
)


class TestFilenameSegmentParser:

    def test_parses_camera_and_start_time(self, tmp_path):
        path = tmp_path / "2019-09-20_12-34-56-left_repeater.mp4"

        segment = FilenameSegmentParser().parse(path)

        assert segment.camera == Camera.LEFT_REPEATER
        assert segment.start_time == datetime(2019, 9, 20, 12, 34, 56)
        assert segment.path == path

    def test_camera_is_case_insensitive(self, tmp_path):
        segment = FilenameSegmentParser().parse(tmp_path / "2019-09-20_12-34-56-FRONT.MP4")
        assert segment.camera == Camera.FRONT

    @pytest.mark.parametrize("name", [
        "2019-09-20_12-34-56-front.txt",
        "2019-09-20_12-34-56-roof.mp4",
        "2019-13-40_12-34-56-front.mp4",
        "front.mp4",
        "event.json",
    ])
    def test_rejects_unparseable_names(self, tmp_path, name):
        with pytest.raises(SegmentParseError) as exc:
            FilenameSegmentParser().parse(tmp_path / name)
        assert exc.value.details["path"] == str(tmp_path / name)

    def test_custom_extensions(self, tmp_path):
        parser = FilenameSegmentParser([".mov"])
        assert parser.parse(tmp_path / "2019-09-20_12-34-56-back.mov").camera == Camera.BACK
        with pytest.raises(SegmentParseError):
            parser.parse(tmp_path / "2019-09-20_12-34-56-back.mp4")


def test_parse_event_timestamp():
    assert parse_event_timestamp("2019-09-20_12-34-56") == datetime(2019, 9, 20, 12, 34, 56)
    assert is_event_folder_name("2019-09-20_12-34-56")
    assert not is_event_folder_name("RecentClips")
    with pytest.raises(EventTimestampError):
        parse_event_timestamp("2019-09-20")


def test_non_files_are_excluded(make_event_folder):
    folder = make_event_folder(["2019-09-20_12-34-00-front.mp4"])
    (folder / "thumbs").mkdir()

    files = list_segment_files(folder)

    assert files == [folder / "2019-09-20_12-34-00-front.mp4"]


def test_missing_folder_yields_no_segments(tmp_path, caplog):
    with caplog.at_level(logging.ERROR):
        segments = collect_segments(tmp_path / "gone", FilenameSegmentParser())

    assert segments == []
    assert "Cannot list folder" in caplog.text


def test_collect_drops_unparseable_and_sorts(make_event_folder, caplog):
    folder = make_event_folder([
        "2019-09-20_12-35-00-front.mp4",
        "event.json",
        "2019-09-20_12-34-00-back.mp4",
    ])

    with caplog.at_level(logging.WARNING):
        segments = collect_segments(folder, FilenameSegmentParser())

    assert [s.camera for s in segments] == [Camera.BACK, Camera.FRONT]
    assert str(folder / "event.json") in caplog.text
