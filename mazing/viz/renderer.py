import logging
from typing import Optional

import pygame

from mazing.algo.base import Args, Status
from mazing.algo.executor import Executor
from mazing.algo.worker import BackgroundRunner
from mazing.core.maze import Maze

logger = logging.getLogger(__name__)


class Renderer:
    COLOR_BG = (10, 10, 10)
    COLOR_WALL = (200, 200, 200)
    COLOR_VISITED = (60, 100, 160)  # Blue tint
    COLOR_ACTIVE = (200, 120, 40)   # Orange, walk or run in progress
    COLOR_CURRENT = (255, 215, 0)   # Gold
    COLOR_FAR = (160, 30, 60)       # Distance heat map, deepest end

    STEPS_PER_FRAME = 50

    def __init__(self, executor: Executor, args: Args, width=1280, height=720,
                 steps_per_frame: int = None, runner: Optional[BackgroundRunner] = None,
                 record=False):
        self.executor = executor
        self.args = args
        self.maze: Maze = args.maze
        self.runner = runner
        self.steps_per_frame = steps_per_frame or self.STEPS_PER_FRAME
        self.screen_width = width
        self.screen_height = height

        # Camera
        self.cell_size = 20.0  # Pixels per cell
        self.offset_x = 0.0
        self.offset_y = 0.0
        self.zoom_speed = 1.1

        from mazing.viz.recorder import VideoRecorder
        self.recorder = VideoRecorder(active=record)

        self.font = None
        self.running = True
        self.paused = False
        self.clock = None
        self.surface = None
        self.status: Optional[Status] = None

    @property
    def finished(self) -> bool:
        if self.runner is not None:
            return not self.runner.is_running
        return len(self.executor) == 0 or (self.status is not None and self.status.is_aborted)

    def fit_to_screen(self):
        """Auto-adjust zoom and pan to fit the entire maze on screen with padding."""
        padding = 40
        available_w = self.screen_width - (padding * 2)
        available_h = self.screen_height - (padding * 2)

        self.cell_size = min(available_w / self.maze.columns, available_h / self.maze.lines)

        total_w = self.maze.columns * self.cell_size
        total_h = self.maze.lines * self.cell_size
        self.offset_x = (self.screen_width - total_w) / 2
        self.offset_y = (self.screen_height - total_h) / 2

    def init_window(self):
        pygame.init()
        pygame.display.set_caption(f"mazing - {self.maze.columns}x{self.maze.lines}")
        self.surface = pygame.display.set_mode((self.screen_width, self.screen_height), pygame.RESIZABLE)
        self.clock = pygame.time.Clock()
        self.font = pygame.font.SysFont("Consolas", 16)
        self.fit_to_screen()

    def handle_input(self):
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False

            elif event.type == pygame.VIDEORESIZE:
                self.screen_width, self.screen_height = event.w, event.h

            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    self.running = False
                elif event.key == pygame.K_SPACE:
                    self.paused = not self.paused
                elif event.key == pygame.K_s and self.runner is None:
                    # Single tick, handy while paused
                    self.status = self.executor.run_step(self.args)
                elif event.key == pygame.K_t and self.runner is None:
                    self.status = self.executor.run_task(self.args)
                elif event.key == pygame.K_f:
                    self.fit_to_screen()

            elif event.type == pygame.MOUSEWHEEL:
                # Zoom towards mouse
                mx, my = pygame.mouse.get_pos()
                wx = (mx - self.offset_x) / self.cell_size
                wy = (my - self.offset_y) / self.cell_size

                if event.y > 0:
                    self.cell_size *= self.zoom_speed
                else:
                    self.cell_size /= self.zoom_speed
                self.cell_size = max(0.5, min(200.0, self.cell_size))

                self.offset_x = mx - wx * self.cell_size
                self.offset_y = my - wy * self.cell_size

            elif event.type == pygame.MOUSEMOTION:
                if pygame.mouse.get_pressed()[0] or pygame.mouse.get_pressed()[2]:
                    self.offset_x += event.rel[0]
                    self.offset_y += event.rel[1]

    def cell_color(self, flags: int, depth: Optional[int]):
        if flags & Maze.CURRENT:
            return self.COLOR_CURRENT
        if flags & Maze.ACTIVE:
            return self.COLOR_ACTIVE
        if depth is not None:
            highest = max(1, self.args.distance_map.highest)
            t = depth / highest
            return tuple(int(a + (b - a) * t) for a, b in zip(self.COLOR_VISITED, self.COLOR_FAR))
        if flags & Maze.VISITED:
            return self.COLOR_VISITED
        return None

    def draw_maze(self):
        self.surface.fill(self.COLOR_BG)
        grid = self.maze.grid
        depths = self.args.distance_map.grid if self.args.distance_map is not None else None

        # Culling: visible cell range only
        start_x = max(0, int(-self.offset_x / self.cell_size))
        start_y = max(0, int(-self.offset_y / self.cell_size))
        end_x = min(grid.columns, int((self.screen_width - self.offset_x) / self.cell_size) + 1)
        end_y = min(grid.lines, int((self.screen_height - self.offset_y) / self.cell_size) + 1)

        draw_walls = self.cell_size > 4.0
        size = int(self.cell_size) + 1

        for y in range(start_y, end_y):
            for x in range(start_x, end_x):
                idx = y * grid.columns + x
                flags = grid.cells[idx]
                depth = depths.cells[idx] if depths is not None else None

                px = int(x * self.cell_size + self.offset_x)
                py = int(y * self.cell_size + self.offset_y)

                color = self.cell_color(flags, depth)
                if color is not None:
                    pygame.draw.rect(self.surface, color, (px, py, size, size))

                if not draw_walls:
                    continue

                # Closed gates are walls; down/right are stored on this cell
                if not flags & Maze.GATE_DOWN:
                    pygame.draw.line(self.surface, self.COLOR_WALL, (px, py + size), (px + size, py + size), 1)
                if not flags & Maze.GATE_RIGHT:
                    pygame.draw.line(self.surface, self.COLOR_WALL, (px + size, py), (px + size, py + size), 1)
                if y == 0:
                    pygame.draw.line(self.surface, self.COLOR_WALL, (px, py), (px + size, py), 1)
                if x == 0:
                    pygame.draw.line(self.surface, self.COLOR_WALL, (px, py), (px, py + size), 1)

    def draw_hud(self):
        task = self.executor.front
        if self.status is not None and self.status.is_aborted:
            state = f"Aborted: {self.status.reason}"
        elif self.finished:
            state = "Done"
        else:
            state = "Paused" if self.paused else "Running"
        info = [
            f"FPS: {int(self.clock.get_fps())}",
            f"Size: {self.maze.columns}x{self.maze.lines}",
            f"Task: {task.name if task else '-'}",
            f"Status: {state}",
            "REC" if self.recorder.active else "",
        ]
        if self.args.distance_map is not None:
            info.insert(3, f"Highest: {self.args.distance_map.highest}")

        for i, text in enumerate(info):
            lbl = self.font.render(text, True, (255, 255, 255))
            self.surface.blit(lbl, (10, 10 + i * 20))

    def step(self):
        if self.runner is not None or self.paused or self.finished:
            return
        status = self.executor.run_batch(self.args, self.steps_per_frame)
        if status is not None:
            self.status = status

    def run_loop(self):
        if self.runner is not None:
            self.runner.start()

        while self.running:
            self.handle_input()
            self.step()

            if self.runner is not None:
                # Read only between the worker's ticks
                with self.maze.lock:
                    self.draw_maze()
                self.status = self.runner.status
            else:
                self.draw_maze()
            self.draw_hud()
            pygame.display.flip()

            if self.recorder.active:
                self.recorder.capture_frame(self.surface)

            self.clock.tick(60)

        if self.runner is not None:
            self.runner.stop()
            self.runner.join()
        self.recorder.stop()
        pygame.quit()
        return self.status
