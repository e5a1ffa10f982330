"""
MPV audio output over JSON IPC.

mpv runs idle with keep-open, so a finished file stays loaded with
eof-reached set instead of being dropped; poll() turns that into a single
TrackEnded event per load.
"""

import json
import os
import socket
import subprocess
import tempfile
import time
from pathlib import Path
from typing import Any, Optional

from loguru import logger

from .output import BaseOutput

SOCKET_TIMEOUT = 2.0
STARTUP_TIMEOUT = 5.0


def check_mpv_available() -> bool:
    """Check if MPV is available on the system."""
    try:
        result = subprocess.run(
            ["mpv", "--version"], capture_output=True, text=True, timeout=5
        )
        return result.returncode == 0
    except (subprocess.SubprocessError, FileNotFoundError, OSError):
        return False


def _request(socket_path: Optional[str], command: dict[str, Any]) -> Optional[dict]:
    """Send one JSON IPC command and return the decoded response."""
    if not socket_path or not os.path.exists(socket_path):
        return None

    try:
        sock = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
        sock.settimeout(SOCKET_TIMEOUT)
        try:
            sock.connect(socket_path)
            sock.sendall((json.dumps(command) + "\n").encode("utf-8"))
            response = sock.recv(4096).decode("utf-8").strip()
        finally:
            sock.close()
    except (socket.error, OSError) as e:
        logger.debug(f"mpv IPC request failed: {e}")
        return None

    # mpv may interleave async event lines; the reply is the line with "error"
    for line in response.splitlines():
        try:
            data = json.loads(line)
        except json.JSONDecodeError:
            continue
        if "error" in data:
            return data
    return None


def send_mpv_command(socket_path: Optional[str], command: dict[str, Any]) -> bool:
    """Send JSON IPC command to MPV. Returns True on success."""
    response = _request(socket_path, command)
    return response is not None and response.get("error") == "success"


def get_mpv_property(socket_path: Optional[str], property_name: str) -> Any:
    """Get a property value from MPV, or None on failure."""
    response = _request(socket_path, {"command": ["get_property", property_name]})
    if response and response.get("error") == "success":
        return response.get("data")
    return None


def default_socket_path() -> str:
    return str(Path(tempfile.gettempdir()) / f"sparkle-mpv-{os.getpid()}")


class MpvOutput(BaseOutput):
    """Audio output backed by an mpv subprocess."""

    def __init__(self, socket_path: str, process: Optional[subprocess.Popen] = None):
        super().__init__()
        self.socket_path = socket_path
        self.process = process
        self._playing = False
        self._ended = False
        self._failed = False

    @classmethod
    def launch(cls, socket_path: Optional[str] = None) -> Optional["MpvOutput"]:
        """Start mpv with JSON IPC and return an output, or None on failure."""
        path = socket_path or default_socket_path()
        logger.info(f"Starting MPV player with socket: {path}")

        try:
            if os.path.exists(path):
                logger.debug(f"Removing existing socket: {path}")
                os.unlink(path)

            process = subprocess.Popen(
                [
                    "mpv",
                    "--idle=yes",
                    "--no-video",
                    "--no-terminal",
                    f"--input-ipc-server={path}",
                    "--keep-open=yes",
                    "--load-scripts=no",
                ],
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                stdin=subprocess.DEVNULL,
            )
        except (subprocess.SubprocessError, OSError) as e:
            logger.error(f"Failed to start MPV: {e}")
            return None

        start_time = time.time()
        while not os.path.exists(path):
            if time.time() - start_time > STARTUP_TIMEOUT:
                logger.error(f"MPV socket creation timeout after {STARTUP_TIMEOUT}s")
                process.kill()
                return None
            time.sleep(0.1)

        if not send_mpv_command(path, {"command": ["get_property", "idle-active"]}):
            logger.error("MPV socket connection test failed")
            process.kill()
            return None

        logger.info("MPV started successfully")
        return cls(path, process)

    def is_running(self) -> bool:
        """Check if the mpv process is alive and its socket exists."""
        if self.process is not None and self.process.poll() is not None:
            return False
        return os.path.exists(self.socket_path)

    def _command(self, *args: Any) -> bool:
        if not self.is_running():
            return False
        return send_mpv_command(self.socket_path, {"command": list(args)})

    def load(self, audio_ref: str) -> None:
        self._begin_load(audio_ref)
        self._playing = False
        self._ended = False
        self._failed = False
        # Load paused; start() decides when sound begins
        self._command("set_property", "pause", True)
        if not self._command("loadfile", audio_ref, "replace"):
            logger.warning(f"mpv rejected loadfile for {audio_ref}")

    def unload(self) -> None:
        self._begin_load(None)
        self._playing = False
        self._command("stop")

    def start(self) -> bool:
        if self.source is None or not self.is_running():
            return False
        if self._failed:
            # mpv dropped the unplayable file; load it again under a new generation
            self.load(self.source)
        elif self._ended:
            # Restarting a finished file rewinds it first
            self._command("seek", 0, "absolute")
            self._ended = False
        self._playing = self._command("set_property", "pause", False)
        return self._playing

    def pause(self) -> None:
        self._playing = False
        self._command("set_property", "pause", True)

    def set_volume(self, volume: float) -> None:
        self._command("set_property", "volume", round(volume * 100))

    def seek(self, position: float) -> bool:
        if self.source is None:
            return False
        return self._command("seek", max(0.0, position), "absolute")

    def position(self) -> float:
        return get_mpv_property(self.socket_path, "time-pos") or 0.0

    def duration(self) -> float:
        return get_mpv_property(self.socket_path, "duration") or 0.0

    def poll(self) -> None:
        """Check for end-of-track or playback failure and emit events."""
        if self.source is None or self._ended or self._failed:
            return

        if not self.is_running():
            if self._playing:
                self._failed = True
                self._playing = False
                self.emit_failure("mpv process exited")
            return

        if get_mpv_property(self.socket_path, "eof-reached") is True:
            self._ended = True
            self._playing = False
            self.emit_track_ended()
            return

        # An unplayable file leaves mpv idle with nothing loaded
        if self._playing and get_mpv_property(self.socket_path, "idle-active") is True:
            self._failed = True
            self._playing = False
            self.emit_failure(f"could not play {self.source}")

    def close(self) -> None:
        """Stop the mpv process and remove its socket."""
        if self.process:
            try:
                self.process.kill()
                self.process.wait(timeout=2.0)
            except (OSError, subprocess.TimeoutExpired) as e:
                logger.warning(f"MPV did not exit cleanly: {e}")
            self.process = None

        if os.path.exists(self.socket_path):
            try:
                os.unlink(self.socket_path)
            except OSError:
                pass
