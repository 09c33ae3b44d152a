"""Tests for the recording program wrapper and its fan-out stream."""

import os
import signal

import pytest

from hotword_listener.config import RecorderConfig
from hotword_listener.core import audio_recorder
from hotword_listener.core.audio_recorder import AudioRecorder, AudioStream


class Sink:
    def __init__(self):
        self.chunks = []

    def write(self, chunk):
        self.chunks.append(chunk)


class FakeProcess:
    """Popen stand-in whose stdout is the read end of an OS pipe."""

    def __init__(self, command, stdout=None, stderr=None, env=None):
        self.command = command
        self.env = env
        self.pid = 4242
        self.returncode = None
        self.signals = []
        read_fd, self.write_fd = os.pipe()
        self.stdout = os.fdopen(read_fd, "rb")

    def feed(self, data):
        os.write(self.write_fd, data)

    def finish(self):
        if self.write_fd is not None:
            os.close(self.write_fd)
            self.write_fd = None

    def poll(self):
        return self.returncode

    def wait(self, timeout=None):
        if self.returncode is None:
            self.returncode = 0
        return self.returncode

    def terminate(self):
        self.returncode = -signal.SIGTERM
        self.finish()

    def kill(self):
        self.returncode = -signal.SIGKILL
        self.finish()

    def send_signal(self, sig):
        self.signals.append(sig)


@pytest.fixture
def processes(monkeypatch):
    spawned = []

    def popen(command, **kwargs):
        process = FakeProcess(command, **kwargs)
        spawned.append(process)
        return process

    monkeypatch.setattr(audio_recorder.subprocess, "Popen", popen)
    yield spawned
    for process in spawned:
        process.finish()


def test_rec_command():
    recorder = AudioRecorder(RecorderConfig(program="rec"))
    assert recorder.command == [
        "rec", "-q", "-r", "16000", "-c", "1", "-e", "signed-integer", "-b", "16", "-t", "raw", "-",
    ]


def test_sox_command_uses_default_device():
    recorder = AudioRecorder(RecorderConfig(program="sox"))
    assert recorder.command[:3] == ["sox", "-d", "-q"]


def test_silence_trimming_only_with_threshold():
    recorder = AudioRecorder(RecorderConfig(program="rec", threshold=0.5, silence=1.0))
    assert recorder.command[-7:] == ["silence", "1", "0.1", "0.5%", "1", "1.0", "0.5%"]


def test_arecord_command_with_device():
    recorder = AudioRecorder(RecorderConfig(program="arecord", device="hw:1,0"))
    assert recorder.command == [
        "arecord", "-q", "-r", "16000", "-c", "1", "-t", "raw", "-f", "S16_LE", "-D", "hw:1,0", "-",
    ]


def test_unsupported_program():
    with pytest.raises(ValueError):
        AudioRecorder(RecorderConfig(program="ffmpeg"))


def test_stream_pipe_and_unpipe():
    stream = AudioStream()
    first, second = Sink(), Sink()
    assert stream.pipe(first) is first
    stream.pipe(first)
    stream.pipe(second)
    assert stream.sink_count == 2

    stream.push(b"a")
    stream.unpipe(first)
    stream.push(b"b")

    assert first.chunks == [b"a"]
    assert second.chunks == [b"a", b"b"]

    stream.unpipe()
    assert stream.sink_count == 0


def test_closed_stream_drops_chunks():
    stream = AudioStream()
    sink = stream.pipe(Sink())
    stream.close()
    stream.push(b"a")
    assert sink.chunks == []
    assert stream.closed


def test_start_streams_process_output(processes):
    recorder = AudioRecorder(RecorderConfig(program="rec"))
    assert recorder.stream() is None

    assert recorder.start() is recorder
    sink = recorder.stream().pipe(Sink())
    reader = recorder._reader

    process = processes[0]
    process.feed(b"\x01\x02\x03\x04")
    process.finish()
    reader.join(timeout=2.0)

    assert b"".join(sink.chunks) == b"\x01\x02\x03\x04"
    assert recorder.stream().closed


def test_device_sets_audiodev_for_sox_family(processes):
    AudioRecorder(RecorderConfig(program="rec", device="hw:2")).start()
    assert processes[0].env["AUDIODEV"] == "hw:2"


def test_pause_resume_signal_process(processes):
    recorder = AudioRecorder(RecorderConfig())
    recorder.start()
    process = processes[0]

    assert recorder.pause() is recorder
    assert recorder.is_paused()
    recorder.pause()
    assert recorder.resume() is recorder
    assert not recorder.is_paused()

    assert process.signals == [signal.SIGSTOP, signal.SIGCONT]
    recorder.stop()


def test_stop_terminates_and_closes_stream(processes):
    recorder = AudioRecorder(RecorderConfig())
    recorder.start()
    stream = recorder.stream()

    assert recorder.stop() is recorder
    assert processes[0].returncode == -signal.SIGTERM
    assert stream.closed
    assert recorder.stream() is None
    assert not recorder.is_running()


def test_stop_while_paused_continues_first(processes):
    recorder = AudioRecorder(RecorderConfig())
    recorder.start().pause()
    recorder.stop()
    assert processes[0].signals == [signal.SIGSTOP, signal.SIGCONT]
    assert not recorder.is_paused()


def test_lifecycle_calls_when_idle_are_noops(processes):
    recorder = AudioRecorder(RecorderConfig())
    assert recorder.stop() is recorder
    assert recorder.pause() is recorder
    assert recorder.resume() is recorder
    assert processes == []


def test_start_restarts_running_recording(processes):
    recorder = AudioRecorder(RecorderConfig())
    recorder.start()
    first_stream = recorder.stream()
    recorder.start()

    assert len(processes) == 2
    assert processes[0].returncode == -signal.SIGTERM
    assert first_stream.closed
    assert recorder.stream() is not first_stream
    recorder.stop()
