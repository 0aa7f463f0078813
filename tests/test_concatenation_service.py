from datetime import datetime
from pathlib import Path

import pytest

from dashcam_mosaic.domain.aggregates import EventClip
from dashcam_mosaic.domain.value_objects import Camera
from dashcam_mosaic.exceptions import BackendExitError, EmptySelectionError
from dashcam_mosaic.services.concatenation_service import ConcatenationService, concat_output_path

SEGMENTS = [
    "2019-09-20_12-35-00-front.mp4",
    "2019-09-20_12-34-00-front.mp4",
    "2019-09-20_12-34-00-back.mp4",
    "2019-09-20_12-36-00-front.mp4",
]


@pytest.fixture
def event(make_event_folder):
    return EventClip.from_folder(make_event_folder(SEGMENTS))


def test_output_path_is_deterministic():
    event = EventClip(Path("/clips/2019-09-20_12-34-56"), datetime(2019, 9, 20, 12, 34, 56))

    first = concat_output_path(event, Camera.LEFT_REPEATER)
    second = concat_output_path(event, Camera.LEFT_REPEATER)

    assert first == second
    assert str(first) == "/clips/2019-09-20_12-34-56/2019-09-20_12-34-56-left_repeater-tmp.mp4"


def test_concatenates_camera_segments_in_capture_order(event, transcoder, settings):
    service = ConcatenationService(transcoder, settings)

    output = service.concatenate(event, Camera.FRONT)

    assert output == concat_output_path(event, Camera.FRONT)
    assert output.exists()
    assert [p.name for p in transcoder.playlists[0]] == [
        "2019-09-20_12-34-00-front.mp4",
        "2019-09-20_12-35-00-front.mp4",
        "2019-09-20_12-36-00-front.mp4",
    ]


def test_uses_stream_copy_and_run_scoped_output(event, transcoder, settings):
    ConcatenationService(transcoder, settings).concatenate(event, Camera.BACK)

    args, run_path = transcoder.calls[0]
    assert args[:4] == ["-f", "concat", "-safe", "0"]
    assert args[-3:] == ["-c", "copy", str(run_path)]
    assert run_path.parent == event.folder
    assert run_path.name.startswith("2019-09-20_12-34-56-back-tmp.part-")
    assert not run_path.exists()


def test_playlist_is_removed_after_run(event, transcoder, settings):
    ConcatenationService(transcoder, settings).concatenate(event, Camera.FRONT)

    assert list(settings.playlist_dir.iterdir()) == []


def test_empty_selection_is_rejected(event, transcoder, settings):
    with pytest.raises(EmptySelectionError):
        ConcatenationService(transcoder, settings).concatenate(event, Camera.RIGHT_REPEATER)

    assert transcoder.calls == []
    assert not concat_output_path(event, Camera.RIGHT_REPEATER).exists()


def test_backend_failure_raises_and_leaves_no_artifacts(event, transcoder, settings):
    transcoder.fail_with = 1

    with pytest.raises(BackendExitError) as exc:
        ConcatenationService(transcoder, settings).concatenate(event, Camera.FRONT)

    assert exc.value.returncode == 1
    _, run_path = transcoder.calls[0]
    assert not run_path.exists()
    assert not concat_output_path(event, Camera.FRONT).exists()
    assert list(settings.playlist_dir.iterdir()) == []
