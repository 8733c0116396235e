"""
Input handling abstraction to decouple Pygame input from the viewer logic.
"""

from __future__ import annotations
import pygame
from typing import Optional, Tuple


class InputHandler:
    """
    Abstraction for gathering input state. Processes Pygame events and
    provides per-frame action queries.
    """

    def __init__(self) -> None:
        self._quit = False
        self._rerun = False
        # Toggle closed-cell overlay (T key)
        self._toggle_trace = False
        # Toggle corner-cutting policy (C key)
        self._toggle_corner_cutting = False
        # (mouse button, pixel position) of the last click this frame
        self._click: Optional[Tuple[int, Tuple[int, int]]] = None

    def process_events(self) -> None:
        """Poll Pygame events and update the per-frame action flags."""
        self._quit = False
        self._rerun = False
        self._toggle_trace = False
        self._toggle_corner_cutting = False
        self._click = None
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self._quit = True
            elif event.type == pygame.KEYDOWN:
                if event.key in (pygame.K_ESCAPE, pygame.K_q):
                    self._quit = True
                elif event.key in (pygame.K_r, pygame.K_SPACE):
                    self._rerun = True
                elif event.key == pygame.K_t:
                    self._toggle_trace = True
                elif event.key == pygame.K_c:
                    self._toggle_corner_cutting = True
            elif event.type == pygame.MOUSEBUTTONDOWN and event.button in (1, 3):
                self._click = (event.button, tuple(event.pos))

    def should_quit(self) -> bool:
        """Return True if a quit command was issued this frame."""
        return self._quit

    def rerun_pressed(self) -> bool:
        return self._rerun

    def toggle_trace_pressed(self) -> bool:
        return self._toggle_trace

    def toggle_corner_cutting_pressed(self) -> bool:
        return self._toggle_corner_cutting

    def mouse_click(self) -> Optional[Tuple[int, Tuple[int, int]]]:
        """Return (button, pixel position) of a left/right click this frame, or None."""
        return self._click
