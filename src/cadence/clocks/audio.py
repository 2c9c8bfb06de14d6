"""
Audio-device clock.

Ticks once per audio block from a ``sounddevice`` output stream callback.
Time advances with the number of frames rendered, so it follows the sound
card's sample clock instead of the system clock.
"""

import logging

import numpy as np

from ..clock import Clock

logger = logging.getLogger(__name__)


class AudioClock(Clock):

    def __init__(self, sr: int = 44100, blocksize: int = 512, channels: int = 1, latency="high"):
        super().__init__(rate=sr / blocksize)
        self.sr = int(sr)
        self.blocksize = int(blocksize)
        self.channels = int(channels)
        self.latency = latency
        self.sample_pos = 0
        self.stream = None

    @property
    def running(self) -> bool:
        return self.stream is not None

    def start(self):
        if self.stream is not None:
            return

        # Importing sounddevice loads PortAudio, so only do it when a stream is wanted
        import sounddevice as sd

        self.stream = sd.OutputStream(
            samplerate=self.sr,
            blocksize=self.blocksize,
            channels=self.channels,
            dtype="float32",
            latency=self.latency,
            callback=self.callback,
        )
        self.stream.start()
        logger.info(
            "Audio clock started: %d Hz, %d frames per block (%.3f ms per tick)",
            self.sr, self.blocksize, self.tick_duration * 1000.0,
        )

    def stop(self):
        stream, self.stream = self.stream, None
        if stream is None:
            return
        stream.stop()
        stream.close()
        logger.info("Audio clock stopped")

    def callback(self, outdata, frames, time_info, status):
        """Audio callback: one tick per block, stamped with the block's start"""
        if status:
            logger.warning("Audio stream status: %s", status)

        outdata[:] = np.zeros((frames, outdata.shape[1]), dtype=np.float32)

        self.time = self.sample_pos / self.sr
        self._fire_tick()
        self.sample_pos += frames

    def tick(self):
        """Render one block of silence without a device, e.g. for offline runs."""
        self.callback(
            np.zeros((self.blocksize, self.channels), dtype=np.float32),
            self.blocksize, None, None,
        )
