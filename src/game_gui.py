import logging
import os
import sys

import pygame

from engine import Direction
from game import Game2048, GameOver
from session import Session


COLORS = {
    'background': (250, 248, 239),
    'grid_background': (187, 173, 160),
    'empty_cell': (205, 193, 180),
    'text_dark': (119, 110, 101),
    'text_light': (249, 246, 242),
    'game_over': (200, 0, 0),
    # tile colors
    2: (238, 228, 218),
    4: (237, 224, 200),
    8: (242, 177, 121),
    16: (245, 149, 99),
    32: (246, 124, 95),
    64: (246, 94, 59),
    128: (237, 207, 114),
    256: (237, 204, 97),
    512: (237, 200, 80),
    1024: (237, 197, 63),
    2048: (237, 194, 46),
}

KEY_TO_DIRECTION = {
    pygame.K_LEFT: Direction.LEFT,
    pygame.K_RIGHT: Direction.RIGHT,
    pygame.K_UP: Direction.UP,
    pygame.K_DOWN: Direction.DOWN,
}


class GameGUI:
    def __init__(self, game_factory=Game2048):
        """open the game window for a single local player"""
        pygame.init()

        self.game_factory = game_factory
        self.session = Session("local", game_factory())
        self.last_result = None

        self.cell_size = 100
        self.cell_margin = 10
        self.header_height = 120

        size = self.game.grid.size
        grid_size = size * self.cell_size + (size + 1) * self.cell_margin
        self.window_width = grid_size
        self.window_height = grid_size + self.header_height

        self.screen = pygame.display.set_mode((self.window_width, self.window_height))
        pygame.display.set_caption("2048")

        self.font_large = pygame.font.Font(None, 48)
        self.font_medium = pygame.font.Font(None, 36)
        self.font_small = pygame.font.Font(None, 24)

        self.clock = pygame.time.Clock()

    @property
    def game(self):
        return self.session.game

    def cell_rect(self, row, col):
        """screen rectangle of a grid cell"""
        pitch = self.cell_size + self.cell_margin
        left = self.cell_margin + col * pitch
        top = self.header_height + self.cell_margin + row * pitch
        return pygame.Rect(left, top, self.cell_size, self.cell_size)

    def tile_font(self, value):
        digits = len(str(value))
        if digits <= 2:
            return self.font_large
        if digits == 3:
            return self.font_medium
        return self.font_small

    def draw_board(self):
        self.screen.fill(COLORS['background'])
        self.draw_header()

        board_rect = pygame.Rect(0, self.header_height, self.window_width, self.window_width)
        pygame.draw.rect(self.screen, COLORS['grid_background'], board_rect)

        grid = self.game.grid
        for row in range(grid.size):
            for col in range(grid.size):
                self.draw_cell(row, col, grid.get(row, col))

    def draw_header(self):
        """score, best score and what the player can do next"""
        score_text = f"Score: {self.game.score}   Best: {self.session.best_score}"
        score_surface = self.font_large.render(score_text, True, COLORS['text_dark'])
        self.screen.blit(score_surface, (20, 20))

        if self.game.game_over:
            status = f"{GameOver(self.game.score)}. Press R to restart"
            color = COLORS['game_over']
        else:
            status = "Use arrow keys to move tiles"
            color = COLORS['text_dark']
        self.screen.blit(self.font_small.render(status, True, color), (20, 70))

        hint = self.font_small.render("Press R to restart, ESC to quit", True, COLORS['text_dark'])
        self.screen.blit(hint, (20, 95))

    def draw_cell(self, row, col, value):
        rect = self.cell_rect(row, col)
        background, foreground = tile_style(value)
        pygame.draw.rect(self.screen, background, rect, border_radius=8)

        if value:
            label = self.tile_font(value).render(str(value), True, foreground)
            self.screen.blit(label, label.get_rect(center=rect.center))

    def restart(self):
        self.session.restart(self.game_factory())
        self.last_result = None
        print(f"Game restarted! Best score: {self.session.best_score}")

    def handle_keypress(self, key):
        """returns False when the player wants to stop"""
        if key == pygame.K_ESCAPE:
            return False

        if key == pygame.K_r:
            self.restart()
        elif key in KEY_TO_DIRECTION and not self.game.game_over:
            self.last_result = self.game.apply_direction(KEY_TO_DIRECTION[key])
            if isinstance(self.last_result, GameOver):
                self.session.record_best()
                print(self.last_result)

        return True

    def process_events(self):
        """apply queued input, False once the window should close"""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                return False
            if event.type == pygame.KEYDOWN and not self.handle_keypress(event.key):
                return False
        return True

    def run(self, fps=60):
        print("2048 started: arrow keys move, R restarts, ESC quits")

        while self.process_events():
            self.draw_board()
            pygame.display.flip()
            self.clock.tick(fps)

        pygame.quit()


def tile_style(value):
    """(background, text) colours for a cell value"""
    if not value:
        return COLORS['empty_cell'], COLORS['text_dark']
    background = COLORS.get(min(value, 2048), COLORS[2048])
    foreground = COLORS['text_dark'] if value <= 4 else COLORS['text_light']
    return background, foreground


def main():
    logging.basicConfig(level=os.environ.get("TG2048_LOG_LEVEL", "INFO").upper())
    try:
        GameGUI().run()
    finally:
        pygame.quit()
    sys.exit()


if __name__ == "__main__":
    main()
