import sys
from pathlib import Path

# Add project root to Python path FIRST
project_dir = Path(__file__).parent.parent
sys.path.insert(0, str(project_dir))

# Now import after path is set
import pytest
from dashcam_mosaic.config.settings import PipelineSettings
from dashcam_mosaic.services.ffmpeg_runner import BackendResult
from dashcam_mosaic.services.interfaces import ITranscoder
from dashcam_mosaic.services.playlist_builder import read_playlist

EVENT_NAME = "2019-09-20_12-34-56"


class FakeTranscoder(ITranscoder):
    """Records backend requests and writes the expected output file."""

    def __init__(self):
        self.calls = []
        self.playlists = []
        self.fail_with = None
        # Leave a truncated output behind when failing, like a killed ffmpeg
        self.partial_output = False

    def run(self, args, output_path):
        args = [str(a) for a in args]
        self.calls.append((args, Path(output_path)))
        if "concat" in args:
            playlist = Path(args[args.index("-i") + 1])
            self.playlists.append(read_playlist(playlist))
        if self.fail_with is not None:
            if self.partial_output:
                Path(output_path).write_bytes(b"truncated")
            return BackendResult.failed(output_path, self.fail_with, "boom")
        Path(output_path).write_bytes(b"video")
        return BackendResult.success(output_path)


@pytest.fixture
def transcoder():
    return FakeTranscoder()


@pytest.fixture
def settings(tmp_path):
    playlist_dir = tmp_path / "playlists"
    playlist_dir.mkdir()
    return PipelineSettings(playlist_dir=playlist_dir)


@pytest.fixture
def make_event_folder(tmp_path):
    """Create <tmp>/SentryClips/<name> holding empty files with the given names."""
    def _make(filenames, name=EVENT_NAME):
        folder = tmp_path / "SentryClips" / name
        folder.mkdir(parents=True)
        for filename in filenames:
            (folder / filename).write_bytes(b"segment")
        return folder
    return _make
