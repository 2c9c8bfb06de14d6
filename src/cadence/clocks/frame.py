"""
Animation-frame clock.

Ticks once per rendered frame, paced by ``pygame.time.Clock`` so that a
pygame main loop and its scheduled animations share the same cadence.
"""

import logging
from typing import Optional

import pygame

from ..clock import RealtimeClock

logger = logging.getLogger(__name__)


class FrameClock(RealtimeClock):
    """Realtime clock driven by a frame loop.

    ``rate`` should match the display's refresh rate (or the frame cap the
    application wants).
    """

    def __init__(self, rate: float = 60.0, frame_timer=None):
        super().__init__(rate)
        self.frame_timer = frame_timer if frame_timer is not None else pygame.time.Clock()
        self.running = False
        self.frame_count = 0

    @property
    def fps(self) -> float:
        """Measured frames per second, averaged by pygame."""
        return self.frame_timer.get_fps()

    def start(self):
        self.running = True
        logger.info("Frame clock armed at %.1f fps", self.rate)

    def stop(self):
        self.running = False

    def tick(self):
        # Blocks until the next frame is due
        self.frame_timer.tick(self.rate)
        self.frame_count += 1
        super().tick()

    def run(self, max_frames: Optional[int] = None) -> int:
        """Tick frames on the calling thread until stopped or ``max_frames``
        frames have run. Returns the number of frames ticked.
        """
        if not self.running:
            self.start()

        frames = 0
        while self.running and (max_frames is None or frames < max_frames):
            self.tick()
            frames += 1
        return frames
