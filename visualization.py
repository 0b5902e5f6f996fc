# visualization.py
"""
Hosts the playground in a Pygame window.

Translates pointer input into spawn requests, renders the side panel with
the shape, motion and line-toggle buttons, and shows the live particle
count. The frame cycle itself belongs to SimulationLoop; this module only
paces it and presents what it drew.
"""
import logging
from typing import Dict, Iterator, List, Tuple

import pygame

from constants import (
    FULLSCREEN, WINDOW_SIZE, UI_PANEL_WIDTH, FPS, WINDOW_CAPTION,
    UI_BACKGROUND_ALPHA, BUTTON_HEIGHT, BUTTON_SPACING, BUTTON_COLOR,
    BUTTON_HOVER_COLOR, BUTTON_SELECTED_COLOR, TEXT_COLOR, TEXT_COLOR_SELECTED
)
from motion import motion_names
from shapes import shape_names
from simulation import SimulationLoop, SpawnPreset

# --- Data Contracts ---
#
# class Visualizer:
#   - __init__(self, presets: Dict[str, SpawnPreset]):
#     - Inputs: Spawn presets keyed "click" and "move".
#     - Side Effects: Initializes Pygame and creates the display surface.
#
#   - frames(self, loop: SimulationLoop) -> Iterator[None]:
#     - Outputs: Yields once per display frame until the user quits.
#     - Side Effects: Handles events before each yield (spawns, selection,
#       resize). After each resume, presents the frame and waits on the
#       clock to hold FPS.

class Visualizer:
    """
    Renders the playground and routes user input to the simulation loop.
    """
    def __init__(self, presets: Dict[str, SpawnPreset]):
        """
        Initializes Pygame and the display window.
        """
        pygame.init()
        pygame.font.init()

        if FULLSCREEN:
            display_info = pygame.display.Info()
            width, height = display_info.current_w, display_info.current_h
            self.screen = pygame.display.set_mode((width, height), pygame.FULLSCREEN)
        else:
            width, height = WINDOW_SIZE
            self.screen = pygame.display.set_mode((width, height), pygame.RESIZABLE)

        pygame.display.set_caption(WINDOW_CAPTION)
        self.clock = pygame.time.Clock()
        self.click_preset = presets['click']
        self.move_preset = presets['move']

        # Use a cleaner, sans-serif font. Pygame will fall back if 'Segoe UI' is not found.
        try:
            self.font_title = pygame.font.SysFont("Segoe UI", 16, bold=True)
            self.font_main = pygame.font.SysFont("Segoe UI", 14)
        except pygame.error:
            logging.warning("Segoe UI font not found, falling back to default sans-serif.")
            self.font_title = pygame.font.SysFont(None, 20, bold=True)
            self.font_main = pygame.font.SysFont(None, 18)

        self._build_surfaces(width, height)

        logging.info(f"Visualizer initialized with Pygame display ({width}x{height}).")

    def _build_surfaces(self, width: int, height: int):
        """(Re)creates the simulation and panel surfaces for the window size."""
        # The simulation area is the total width minus the UI panel
        self.sim_width = max(1, width - UI_PANEL_WIDTH)
        self.sim_height = max(1, height)
        self.sim_surface = pygame.Surface((self.sim_width, self.sim_height))

        self.ui_panel_surface = pygame.Surface((UI_PANEL_WIDTH, self.sim_height), pygame.SRCALPHA)
        self.ui_panel_surface.fill((40, 40, 40, UI_BACKGROUND_ALPHA))

        self._layout_buttons()

    def _layout_buttons(self):
        """Stacks the shape buttons, motion buttons and line toggle in the panel."""
        x = self.sim_width + 20
        button_width = UI_PANEL_WIDTH - 40
        y = 40

        self.shape_buttons: List[Tuple[str, pygame.Rect]] = []
        for name in shape_names():
            self.shape_buttons.append((name, pygame.Rect(x, y, button_width, BUTTON_HEIGHT)))
            y += BUTTON_HEIGHT + BUTTON_SPACING

        y += 30
        self.motion_buttons: List[Tuple[str, pygame.Rect]] = []
        for name in motion_names():
            self.motion_buttons.append((name, pygame.Rect(x, y, button_width, BUTTON_HEIGHT)))
            y += BUTTON_HEIGHT + BUTTON_SPACING

        y += 20
        self.lines_button_rect = pygame.Rect(x, y, button_width, BUTTON_HEIGHT)
        self.count_pos = (x, self.lines_button_rect.bottom + 20)
        self.motion_title_y = self.motion_buttons[0][1].top - 22

    def frames(self, loop: SimulationLoop) -> Iterator[None]:
        """Yields one frame at a time for as long as the window stays open."""
        while self._handle_events(loop):
            yield
            self._present(loop)
            self.clock.tick(FPS)

    def _handle_events(self, loop: SimulationLoop) -> bool:
        """
        Processes pending Pygame events.

        Returns:
            bool: False if the user has quit, True otherwise.
        """
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                logging.info("Quit event received. Shutting down visualizer.")
                return False

            if event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    logging.info("ESC key pressed. Shutting down visualizer.")
                    return False
                if event.key == pygame.K_l:
                    loop.toggle_lines()
                elif event.key == pygame.K_c:
                    loop.field.clear()
                    logging.info("Particles cleared by user.")

            if event.type == pygame.VIDEORESIZE:
                self.screen = pygame.display.get_surface()
                self._build_surfaces(event.w, event.h)
                loop.resize(self.sim_width, self.sim_height, surface=self.sim_surface)
                logging.info(f"Window resized to {event.w}x{event.h}.")

            if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                if event.pos[0] >= self.sim_width:
                    self._click_panel(loop, event.pos)
                else:
                    loop.spawn(event.pos[0], event.pos[1], self.click_preset)

            if event.type == pygame.MOUSEMOTION and event.pos[0] < self.sim_width:
                loop.spawn(event.pos[0], event.pos[1], self.move_preset)

        return True

    def _click_panel(self, loop: SimulationLoop, pos: Tuple[int, int]):
        for name, rect in self.shape_buttons:
            if rect.collidepoint(pos):
                loop.select_shape(name)
                return
        for name, rect in self.motion_buttons:
            if rect.collidepoint(pos):
                loop.select_motion(name)
                return
        if self.lines_button_rect.collidepoint(pos):
            loop.toggle_lines()

    def _draw_button(self, rect: pygame.Rect, label: str, selected: bool,
                     mouse_pos: Tuple[int, int]):
        """Draws one panel button, highlighted when selected or hovered."""
        if selected:
            color, text_color = BUTTON_SELECTED_COLOR, TEXT_COLOR_SELECTED
        elif rect.collidepoint(mouse_pos):
            color, text_color = BUTTON_HOVER_COLOR, TEXT_COLOR
        else:
            color, text_color = BUTTON_COLOR, TEXT_COLOR

        pygame.draw.rect(self.screen, color, rect, border_radius=5)

        text_surf = self.font_main.render(label, True, text_color)
        text_rect = text_surf.get_rect(center=rect.center)
        self.screen.blit(text_surf, text_rect)

    def _present(self, loop: SimulationLoop):
        """Blits the simulation area and draws the panel on top."""
        mouse_pos = pygame.mouse.get_pos()

        self.screen.blit(self.sim_surface, (0, 0))
        self.screen.blit(self.ui_panel_surface, (self.sim_width, 0))

        panel_x = self.sim_width + 20
        self.screen.blit(self.font_title.render("Shape", True, TEXT_COLOR), (panel_x, 12))
        for name, rect in self.shape_buttons:
            self._draw_button(rect, name, name == loop.shape_kind.value, mouse_pos)

        self.screen.blit(self.font_title.render("Motion", True, TEXT_COLOR), (panel_x, self.motion_title_y))
        for name, rect in self.motion_buttons:
            self._draw_button(rect, name, name == loop.motion_kind.value, mouse_pos)

        self._draw_button(self.lines_button_rect, "Lines", loop.draw_lines, mouse_pos)

        count_surf = self.font_main.render(f"{loop.particle_count} particles", True, TEXT_COLOR)
        self.screen.blit(count_surf, self.count_pos)

        pygame.display.flip()

    def close(self):
        """Shuts down Pygame."""
        pygame.font.quit()
        pygame.quit()
