#Pygame visualization for symbol grids + generation steps

from __future__ import annotations

import pygame


#color schemes for visual aspects, keyed by the value of each symbol kind
COLORS = {
    "wall": (0, 0, 0),
    "open": (255, 255, 255),
    "path": (255, 0, 255),
    "entrance": (255, 0, 255),
    "exit": (255, 0, 255),
    "joined": (170, 210, 250),
}

BACKGROUND = (10, 10, 10)
STATS_BACKGROUND = (25, 25, 25)
TEXT_COLOR = (235, 235, 235)


def kind_color(kind):
    return COLORS[kind.value]


class MazeVisualizer:
    #Shows one symbol grid, or steps through debug snapshots and then shows the final grid

    def __init__(
        self,
        symbols,
        snapshots=None,
        tile_size=24,
        stats_height=90,
        steps_per_second=10,
        title_suffix="",
        stats=None,
    ):
        self.symbols = symbols
        self.snapshots = list(snapshots or [])
        self.tile_size = tile_size
        self.stats_height = stats_height
        self.steps_per_second = steps_per_second
        self.title_suffix = title_suffix
        self.stats = list(stats or [])

    def frames(self):
        return self.snapshots + [self.symbols]

    def _compute_layout(self, grid_cols, grid_rows, container_w, container_h):
        usable_w = max(320, container_w - 16)
        usable_h = max(240, container_h - 16)

        tile_size = self.tile_size
        stats_height = self.stats_height
        for _ in range(4):
            max_tile_w = max(1, usable_w // grid_cols)
            max_tile_h = max(1, (usable_h - stats_height) // grid_rows)
            tile_size = max(1, min(self.tile_size, max_tile_w, max_tile_h))
            line_height = max(16, int(18 * max(tile_size, 8) / 24))
            stats_height = max(70, line_height * (len(self.stats) + 1))

        view_width = grid_cols * tile_size
        panel_height = grid_rows * tile_size + stats_height
        return tile_size, stats_height, view_width, panel_height

    def run(self):
        frames = self.frames()
        grid_rows = len(self.symbols)
        grid_cols = len(self.symbols[0])

        pygame.init()
        display_info = pygame.display.Info()
        default_w = max(640, int(display_info.current_w * 0.9))
        default_h = max(480, int(display_info.current_h * 0.8))
        screen = pygame.display.set_mode((default_w, default_h), pygame.RESIZABLE)
        pygame.display.set_caption(f"Kruskal Maze{self.title_suffix}")
        tile_size, stats_height, view_width, panel_height = self._compute_layout(
            grid_cols, grid_rows, *screen.get_size()
        )
        font_size = max(14, int(18 * max(tile_size, 8) / 24))
        font = pygame.font.SysFont(None, font_size)
        clock = pygame.time.Clock()
        fullscreen = False
        last_window_size = screen.get_size()
        frame_idx = 0

        running = True
        while running:

            #Generation steps shown per second, the final maze stays up until the window closes
            clock.tick(self.steps_per_second)
            tile_size, stats_height, view_width, panel_height = self._compute_layout(
                grid_cols, grid_rows, *screen.get_size()
            )
            new_font_size = max(14, int(18 * max(tile_size, 8) / 24))
            if new_font_size != font_size:
                font_size = new_font_size
                font = pygame.font.SysFont(None, font_size)
            for event in pygame.event.get():
                if event.type == pygame.QUIT or (
                    event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE
                ):
                    running = False
                if event.type == pygame.VIDEORESIZE and not fullscreen:
                    last_window_size = (event.w, event.h)
                    screen = pygame.display.set_mode(last_window_size, pygame.RESIZABLE)
                if event.type == pygame.KEYDOWN and event.key == pygame.K_f:
                    fullscreen = not fullscreen
                    if fullscreen:
                        display_info = pygame.display.Info()
                        screen = pygame.display.set_mode((display_info.current_w, display_info.current_h), pygame.FULLSCREEN)
                    else:
                        screen = pygame.display.set_mode(last_window_size, pygame.RESIZABLE)

            screen.fill(BACKGROUND)

            for gy, grid_row in enumerate(frames[frame_idx]):
                for gx, kind in enumerate(grid_row):
                    rect = pygame.Rect(gx * tile_size, gy * tile_size, tile_size, tile_size)
                    pygame.draw.rect(screen, kind_color(kind), rect)

            if len(frames) > 1:
                step_text = f"step: {min(frame_idx, len(frames) - 2)}/{len(frames) - 2}"
            else:
                step_text = "step: -"
            lines = self.stats + [step_text]
            pad = 6
            line_height = max(16, int(18 * max(tile_size, 8) / 24))
            stats_rect = pygame.Rect(
                0,
                grid_rows * tile_size,
                view_width,
                max(stats_height, line_height * len(lines) + pad * 2),
            )
            pygame.draw.rect(screen, STATS_BACKGROUND, stats_rect)

            for i, text in enumerate(lines):
                surface = font.render(text, True, TEXT_COLOR)
                screen.blit(surface, (stats_rect.x + pad, stats_rect.y + pad + i * line_height))

            pygame.display.flip()

            if frame_idx < len(frames) - 1:
                frame_idx += 1

        pygame.quit()
