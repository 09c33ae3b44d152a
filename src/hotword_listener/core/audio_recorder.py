"""Microphone capture through an external recording program (rec, sox or arecord)."""

import logging
import os
import signal
import subprocess
import threading
from typing import List, Optional, Protocol

from ..config import RecorderConfig

logger = logging.getLogger(__name__)

SUPPORTED_PROGRAMS = ("rec", "sox", "arecord")


class AudioSink(Protocol):
    """Anything that accepts raw audio chunks (e.g. HotwordDetector)."""

    def write(self, chunk: bytes) -> None: ...


class AudioStream:
    """Readable byte stream that forwards chunks to piped sinks.

    pipe()/unpipe() and chunk delivery share a lock, so once unpipe()
    returns the sink receives nothing more from this stream.
    """

    def __init__(self):
        self._sinks: List[AudioSink] = []
        self._lock = threading.RLock()
        self.closed = False

    def pipe(self, sink: AudioSink) -> AudioSink:
        """Connect a sink to the stream.

        Args:
            sink: Object exposing write(bytes)

        Returns:
            The sink, for chaining
        """
        with self._lock:
            if sink not in self._sinks:
                self._sinks.append(sink)
        return sink

    def unpipe(self, sink: Optional[AudioSink] = None):
        """Disconnect a sink, or all sinks when none is given."""
        with self._lock:
            if sink is None:
                self._sinks.clear()
            elif sink in self._sinks:
                self._sinks.remove(sink)

    @property
    def sink_count(self) -> int:
        with self._lock:
            return len(self._sinks)

    def push(self, chunk: bytes):
        """Deliver a chunk to every connected sink."""
        with self._lock:
            if self.closed:
                return
            for sink in list(self._sinks):
                sink.write(chunk)

    def close(self):
        with self._lock:
            self.closed = True
            self._sinks.clear()


class AudioRecorder:
    """Spawns a recording program and streams its raw PCM output.

    The process writes headerless signed 16-bit audio to stdout; a reader
    thread pushes it into an AudioStream that consumers pipe into.
    """

    def __init__(self, config: RecorderConfig):
        """Initialize audio recorder.

        Args:
            config: Capture parameters

        Raises:
            ValueError: If the recording program is not supported
        """
        if config.program not in SUPPORTED_PROGRAMS:
            raise ValueError(
                f"Unsupported recording program '{config.program}' "
                f"(expected one of: {', '.join(SUPPORTED_PROGRAMS)})"
            )

        self.config = config
        self._process: Optional[subprocess.Popen] = None
        self._stream: Optional[AudioStream] = None
        self._reader: Optional[threading.Thread] = None
        self._paused = False

        logger.info(
            f"AudioRecorder initialized: program={config.program}, "
            f"{config.sample_rate}Hz, {config.channels}ch, threshold={config.threshold}"
        )

    @property
    def command(self) -> List[str]:
        """Build the command line for the configured program."""
        cfg = self.config
        if cfg.program == "arecord":
            args = [
                "arecord",
                "-q",
                "-r", str(cfg.sample_rate),
                "-c", str(cfg.channels),
                "-t", "raw",
                "-f", "S16_LE",
            ]
            if cfg.device:
                args += ["-D", cfg.device]
            return args + ["-"]

        args = [cfg.program]
        if cfg.program == "sox":
            args.append("-d")
        args += [
            "-q",
            "-r", str(cfg.sample_rate),
            "-c", str(cfg.channels),
            "-e", "signed-integer",
            "-b", str(cfg.bits),
            "-t", "raw",
            "-",
        ]
        if cfg.threshold:
            threshold = f"{cfg.threshold}%"
            args += ["silence", "1", "0.1", threshold, "1", str(cfg.silence), threshold]
        return args

    def _environment(self) -> dict:
        env = os.environ.copy()
        if self.config.device and self.config.program != "arecord":
            env["AUDIODEV"] = self.config.device
        return env

    def is_running(self) -> bool:
        return self._process is not None and self._process.poll() is None

    def is_paused(self) -> bool:
        return self._paused

    def stream(self) -> Optional[AudioStream]:
        """Return the stream of the current recording (None when stopped)."""
        return self._stream

    def start(self) -> "AudioRecorder":
        """Start the recording program.

        A recording that is already running is stopped first.

        Raises:
            OSError: If the program cannot be spawned
        """
        if self._process is not None:
            logger.warning("Recording already running, restarting")
            self.stop()

        command = self.command
        self._process = subprocess.Popen(
            command,
            stdout=subprocess.PIPE,
            stderr=subprocess.DEVNULL,
            env=self._environment(),
        )
        self._paused = False
        self._stream = AudioStream()
        self._reader = threading.Thread(
            target=self._read_loop,
            args=(self._process, self._stream),
            name="audio-recorder-reader",
            daemon=True,
        )
        self._reader.start()

        logger.info(f"Recording started: {' '.join(command)} (pid {self._process.pid})")
        return self

    def stop(self) -> "AudioRecorder":
        """Stop the recording program and close its stream."""
        if self._process is None:
            logger.debug("Recording not running")
            return self

        process, reader = self._process, self._reader
        self._process = None
        self._reader = None

        if self._paused:
            # A stopped process cannot handle SIGTERM until continued
            self._send_signal(process, signal.SIGCONT)
            self._paused = False

        if process.poll() is None:
            process.terminate()
            try:
                process.wait(timeout=2.0)
            except subprocess.TimeoutExpired:
                logger.warning(f"Recording process {process.pid} did not exit, killing it")
                process.kill()
                process.wait()

        if self._stream is not None:
            self._stream.close()
            self._stream = None

        if reader is not None and reader is not threading.current_thread():
            reader.join(timeout=1.0)

        logger.info("Recording stopped")
        return self

    def pause(self) -> "AudioRecorder":
        """Suspend the recording program, keeping it alive."""
        if self._process is None or self._paused:
            logger.debug("Recording not running or already paused")
            return self

        self._send_signal(self._process, signal.SIGSTOP)
        self._paused = True
        logger.info("Recording paused")
        return self

    def resume(self) -> "AudioRecorder":
        """Continue a paused recording."""
        if self._process is None or not self._paused:
            logger.debug("Recording not paused")
            return self

        self._send_signal(self._process, signal.SIGCONT)
        self._paused = False
        logger.info("Recording resumed")
        return self

    @staticmethod
    def _send_signal(process: subprocess.Popen, sig: int):
        if process.poll() is None:
            process.send_signal(sig)

    def _read_loop(self, process: subprocess.Popen, stream: AudioStream):
        """Reader thread: push stdout chunks into the stream until EOF."""
        stdout = process.stdout
        try:
            while True:
                chunk = stdout.read(self.config.chunk_bytes)
                if not chunk:
                    break
                stream.push(chunk)
        except Exception as e:
            logger.error(f"Error reading from recording program: {e}", exc_info=True)
        finally:
            stream.close()
            stdout.close()

        returncode = process.wait()
        if returncode not in (0, -signal.SIGTERM, -signal.SIGKILL):
            logger.warning(f"Recording program exited with code {returncode}")
