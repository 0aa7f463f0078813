import logging
from datetime import datetime
from pathlib import Path

import pytest

from dashcam_mosaic.domain.aggregates import EventClip
from dashcam_mosaic.domain.value_objects import Camera, Segment
from dashcam_mosaic.exceptions import EventTimestampError
from dashcam_mosaic.services.interfaces import ISegmentParser


def _segment(camera, minute, name):
    return Segment(camera, datetime(2019, 9, 20, 12, minute), Path(f"/clips/{name}"))


class ListingOrderParser(ISegmentParser):
    """Gives every file the same start time so only discovery order remains."""

    def __init__(self):
        self.seen = []

    def parse(self, path):
        self.seen.append(path)
        return Segment(Camera.FRONT, datetime(2019, 9, 20, 12, 0), path)


def test_from_folder_sorts_segments_by_start_time(make_event_folder):
    folder = make_event_folder([
        "2019-09-20_12-36-00-front.mp4",
        "2019-09-20_12-34-00-back.mp4",
        "2019-09-20_12-35-00-front.mp4",
        "2019-09-20_12-34-00-front.mp4",
    ])

    event = EventClip.from_folder(folder)

    starts = [s.start_time for s in event.segments]
    assert starts == sorted(starts)
    assert event.when == datetime(2019, 9, 20, 12, 34, 56)
    assert event.folder == folder
    assert len(event.segments) == 4


def test_equal_start_times_keep_discovery_order(make_event_folder):
    folder = make_event_folder(["c.mp4", "a.mp4", "b.mp4", "d.mp4"])
    parser = ListingOrderParser()

    event = EventClip.from_folder(folder, parser)

    assert len(parser.seen) == 4
    assert [s.path for s in event.segments] == parser.seen


def test_constructor_sorts_by_start_time_and_keeps_ties():
    segments = [
        _segment(Camera.FRONT, 5, "f5"),
        _segment(Camera.BACK, 1, "b1"),
        _segment(Camera.FRONT, 1, "f1"),
        _segment(Camera.BACK, 3, "b3"),
    ]

    event = EventClip(Path("/clips"), datetime(2019, 9, 20, 12, 0), segments)

    assert [s.path.name for s in event.segments] == ["b1", "f1", "b3", "f5"]
    assert event.earliest_start == datetime(2019, 9, 20, 12, 1)


def test_partial_parse_failure_is_not_fatal(make_event_folder, caplog):
    folder = make_event_folder([
        "2019-09-20_12-34-00-front.mp4",
        "2019-09-20_12-34-00-back.mp4",
        "2019-09-20_12-35-00-front.mp4",
        "2019-09-20_12-35-00-back.mp4",
        "garbage.mp4",
    ])

    with caplog.at_level(logging.WARNING):
        event = EventClip.from_folder(folder)

    assert len(event.segments) == 4
    assert "garbage.mp4" in caplog.text


def test_invalid_folder_name_is_fatal(make_event_folder):
    folder = make_event_folder(["2019-09-20_12-34-00-front.mp4"], name="not-a-timestamp")

    with pytest.raises(EventTimestampError):
        EventClip.from_folder(folder)


def test_empty_event(make_event_folder):
    event = EventClip.from_folder(make_event_folder([]))

    assert event.is_empty()
    assert event.earliest_start is None
    assert event.segments_for(Camera.FRONT) == []


def test_segments_for_is_order_preserving_filter():
    segments = [
        _segment(Camera.FRONT, 1, "f1"),
        _segment(Camera.BACK, 1, "b1"),
        _segment(Camera.FRONT, 2, "f2"),
        _segment(Camera.BACK, 3, "b2"),
        _segment(Camera.FRONT, 3, "f3"),
    ]
    event = EventClip(Path("/clips"), datetime(2019, 9, 20, 12, 0), segments)

    fronts = event.segments_for(Camera.FRONT)

    assert [s.path.name for s in fronts] == ["f1", "f2", "f3"]
    assert [s for s in event.segments if s.camera == Camera.FRONT] == fronts
    assert event.segments_for(Camera.LEFT_REPEATER) == []
    assert event.cameras() == [Camera.FRONT, Camera.BACK]


def test_segments_are_frozen():
    event = EventClip(Path("/clips"), datetime(2019, 9, 20), [_segment(Camera.FRONT, 1, "f1")])

    assert isinstance(event.segments, tuple)
    assert not event.is_empty()
    assert event.earliest_start == datetime(2019, 9, 20, 12, 1)
