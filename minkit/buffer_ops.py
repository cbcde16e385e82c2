"""Sample buffers and the objects that read from and loop over them."""

from __future__ import annotations

import math
from collections.abc import Callable, Iterable
from typing import Any, Optional

import numpy as np

from minkit.outlet import Outlet

MAX_CHANNELS = 64


class SampleBuffer:
    """A block of audio samples laid out as frames by channels.

    Reads and writes clamp the frame and channel to the valid range, so a
    lookup never falls outside the buffer. Listeners are called with
    ``"modified"`` whenever the content is marked dirty.
    """

    def __init__(
        self,
        frames: int = 44100,
        channels: int = 1,
        samplerate: float = 44100.0,
        data: Optional[Iterable[Any]] = None,
    ) -> None:
        if samplerate <= 0:
            raise ValueError("samplerate must be positive")
        self.samplerate = float(samplerate)
        if data is not None:
            array = np.array(data, dtype=np.float32)
            if array.ndim == 1:
                array = array[:, np.newaxis]
            if array.ndim != 2:
                raise ValueError("data must be one- or two-dimensional")
            self.data = array
        else:
            if channels < 1:
                raise ValueError("a buffer needs at least one channel")
            self.data = np.zeros((max(int(frames), 0), int(channels)), dtype=np.float32)
        self._listeners: list[Callable[[str], None]] = []

    @property
    def frame_count(self) -> int:
        """Number of frames held."""
        return int(self.data.shape[0])

    @property
    def channel_count(self) -> int:
        """Number of channels held."""
        return int(self.data.shape[1])

    @property
    def length_in_seconds(self) -> float:
        """Duration of the buffer at its sample rate."""
        return self.frame_count / self.samplerate

    @property
    def valid(self) -> bool:
        """Whether the buffer holds any samples to read."""
        return self.frame_count > 0 and self.channel_count > 0

    def _clamped(self, frame: int, channel: int) -> tuple[int, int]:
        if not self.valid:
            raise IndexError("buffer is empty")
        frame = min(max(int(frame), 0), self.frame_count - 1)
        channel = min(max(int(channel), 0), self.channel_count - 1)
        return frame, channel

    def lookup(self, frame: int, channel: int = 0) -> float:
        """Read one sample, clamping frame and channel into range."""
        f, c = self._clamped(frame, channel)
        return float(self.data[f, c])

    def store(self, frame: int, channel: int, value: float) -> None:
        """Write one sample, clamping frame and channel into range."""
        f, c = self._clamped(frame, channel)
        self.data[f, c] = np.float32(value)

    def resize(self, milliseconds: float) -> None:
        """Change the length to ``milliseconds`` at the buffer's sample rate."""
        self.resize_in_samples(int(round(float(milliseconds) * self.samplerate / 1000.0)))

    def resize_in_samples(self, frames: int) -> None:
        """Change the length to ``frames``, keeping the overlapping content."""
        frames = int(frames)
        if frames < 0:
            raise ValueError("frame count cannot be negative")
        resized = np.zeros((frames, self.channel_count), dtype=np.float32)
        keep = min(frames, self.frame_count)
        resized[:keep] = self.data[:keep]
        self.data = resized
        self.dirty()

    def add_listener(self, listener: Callable[[str], None]) -> None:
        """Be told of changes to the buffer."""
        self._listeners.append(listener)

    def remove_listener(self, listener: Callable[[str], None]) -> None:
        """Stop being told of changes to the buffer."""
        self._listeners.remove(listener)

    def dirty(self) -> None:
        """Tell every listener that the content changed."""
        for listener in list(self._listeners):
            listener("modified")


class BufferIndex:
    """Read samples from a buffer at the indices given by an input signal."""

    description = "Read from a buffer~."

    def __init__(
        self,
        buffer: Optional[SampleBuffer] = None,
        channel: Optional[int] = None,
    ) -> None:
        self.buffer: Optional[SampleBuffer] = None
        self.outlet_changed = Outlet(
            "(symbol) Notification that the content of the buffer~ changed."
        )
        self._channel = 1
        if buffer is not None:
            self.set_buffer(buffer)
        if channel is not None:
            self.channel = channel

    def _notify(self, event: str) -> None:
        self.outlet_changed.send(event)

    def set_buffer(self, buffer: Optional[SampleBuffer]) -> None:
        """Bind to ``buffer``, or unbind when it is ``None``."""
        if self.buffer is not None:
            self.buffer.remove_listener(self._notify)
            self.buffer = None
            self._notify("unbinding")
        if buffer is not None:
            self.buffer = buffer
            buffer.add_listener(self._notify)
            self._notify("binding")

    @property
    def channel(self) -> int:
        """The 1-based channel to read, clamped to 1..64."""
        return self._channel

    @channel.setter
    def channel(self, value: Any) -> None:
        self._channel = min(max(int(value), 1), MAX_CHANNELS)

    def number(self, value: Any, inlet: int = 1) -> None:
        """Set the channel when the number arrives at the right inlet."""
        if inlet == 1:
            self.channel = value

    def perform(self, indices: Iterable[float]) -> np.ndarray:
        """Return the sample at each (rounded) index; silence if unbound."""
        positions = np.asarray(list(indices), dtype=np.float64)
        buffer = self.buffer
        if buffer is None or not buffer.valid:
            return np.zeros(positions.shape, dtype=np.float64)
        chan = min(self._channel - 1, buffer.channel_count - 1)
        frames = np.clip(np.trunc(positions + 0.5), 0, buffer.frame_count - 1).astype(np.intp)
        return buffer.data[frames, chan].astype(np.float64)


class BufferLoop:
    """Play a buffer as a loop, optionally recording the input into it."""

    description = "Read from a buffer~."

    def __init__(
        self,
        buffer: Optional[SampleBuffer] = None,
        channel: Optional[int] = None,
    ) -> None:
        self.buffer: Optional[SampleBuffer] = None
        self._channel = 1
        self._length = 1000.0
        self._frames = 44100
        self.speed = 1.0
        self.record = False
        self._playback_position = 0.0
        self._record_position = 0
        self._one_over_samplerate = 1.0
        if buffer is not None:
            self.set_buffer(buffer)
        if channel is not None:
            self.channel = channel

    def set_buffer(self, buffer: Optional[SampleBuffer]) -> None:
        """Bind to ``buffer``, or unbind when it is ``None``."""
        self.buffer = buffer

    @property
    def channel(self) -> int:
        """The 1-based channel to use, never below 1."""
        return self._channel

    @channel.setter
    def channel(self, value: Any) -> None:
        self._channel = max(int(value), 1)

    @property
    def length(self) -> float:
        """Length of the loop in milliseconds."""
        if self.buffer is not None:
            return self.buffer.length_in_seconds * 1000.0
        return self._length

    @length.setter
    def length(self, value: Any) -> None:
        new_length = float(value)
        if new_length <= 0.0:
            new_length = 1.0
        self._length = new_length
        if self.buffer is not None:
            self.buffer.resize(new_length)

    @property
    def frames(self) -> int:
        """Length of the loop in samples."""
        if self.buffer is not None:
            return self.buffer.frame_count
        return self._frames

    @frames.setter
    def frames(self, value: Any) -> None:
        new_length = max(int(value), 1)
        self._frames = new_length
        if self.buffer is not None:
            self.buffer.resize_in_samples(new_length)

    def number(self, value: Any) -> None:
        """Turn recording on or off."""
        self.record = bool(value)

    def dspsetup(self, samplerate: float) -> None:
        """Prepare for processing at ``samplerate``."""
        if samplerate <= 0:
            raise ValueError("samplerate must be positive")
        self._one_over_samplerate = 1.0 / float(samplerate)

    def perform(self, samples: Iterable[float]) -> tuple[np.ndarray, np.ndarray]:
        """Process one block; return the loop output and the sync ramp."""
        block = np.asarray(list(samples), dtype=np.float64)
        out = np.zeros(block.shape, dtype=np.float64)
        sync = np.zeros(block.shape, dtype=np.float64)
        buffer = self.buffer
        if buffer is None or not buffer.valid:
            return out, sync

        chan = min(self._channel - 1, buffer.channel_count - 1)
        frames = buffer.frame_count
        stepsize = (1.0 / buffer.length_in_seconds) * float(self.speed) * self._one_over_samplerate

        position = self._playback_position
        for i in range(block.size):
            position = math.fmod(position + stepsize, 1.0)
            sync[i] = position
            out[i] = buffer.lookup(int(position * frames), chan)
        self._playback_position = position

        if self.record:
            record_position = self._record_position
            for value in block:
                if record_position >= frames:
                    record_position = 0
                buffer.store(record_position, chan, value)
                record_position += 1
            self._record_position = record_position
            buffer.dirty()

        return out, sync