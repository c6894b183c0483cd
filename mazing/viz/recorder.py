import logging
import os
from datetime import datetime

import cv2
import numpy as np
import pygame

logger = logging.getLogger(__name__)


class VideoRecorder:
    FPS = 30
    FOURCC = 'mp4v'

    def __init__(self, active=False, output_file=None, fps=None):
        self.active = active
        self.output_file = output_file
        self.fps = fps or self.FPS
        self.writer = None
        self.frame_size = None
        self.frame_count = 0

        if self.active and not self.output_file:
            self.output_file = self.default_path("maze_gen")

    @staticmethod
    def default_path(prefix: str, directory: str = "recordings") -> str:
        ts = datetime.now().strftime("%Y%m%d_%H%M%S")
        fname = f"{prefix}_{ts}.mp4"
        if os.path.isdir(directory):
            return os.path.join(directory, fname)
        return fname

    def capture_frame(self, surface: pygame.Surface):
        if not self.active:
            return

        width, height = surface.get_size()
        if self.writer is None:
            self.frame_size = (width, height)
            fourcc = cv2.VideoWriter_fourcc(*self.FOURCC)
            self.writer = cv2.VideoWriter(self.output_file, fourcc, self.fps, self.frame_size)
            logger.info("Recording started: %s", self.output_file)
        elif (width, height) != self.frame_size:
            # The writer is fixed-size; resized windows are scaled back
            surface = pygame.transform.smoothscale(surface, self.frame_size)

        # (width, height, 3) RGB -> (height, width, 3) BGR
        frame = np.transpose(pygame.surfarray.array3d(surface), (1, 0, 2))
        frame = cv2.cvtColor(frame, cv2.COLOR_RGB2BGR)

        self.writer.write(frame)
        self.frame_count += 1

    def stop(self):
        if self.writer:
            self.writer.release()
            logger.info("Video saved: %s (%d frames)", self.output_file, self.frame_count)
            self.writer = None
