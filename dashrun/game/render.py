# dashrun/game/render.py
from __future__ import annotations
import math
from typing import Optional
import pygame
from .config import (
    WIDTH, HEIGHT, PLAYER_SIZE, CAT_SIZE,
    COLOR_BG, COLOR_GROUND, COLOR_PLAYER, COLOR_PLATFORM, COLOR_SPIKE,
    COLOR_CAT, COLOR_FG, COLOR_PANEL,
)
from .run_state import Snapshot


class Renderer:
    """Draws a Snapshot onto a surface. Read-only: it never sees the RunState itself."""

    def __init__(self, font: Optional[pygame.font.Font] = None,
                 width: int = WIDTH, height: int = HEIGHT):
        self.width = width
        self.height = height
        self._font = font
        btn_w, btn_h = 220, 110
        self.restart_rect = pygame.Rect((width - btn_w) // 2, (height - btn_h) // 2, btn_w, btn_h)

        self._player_sprite = pygame.Surface((PLAYER_SIZE, PLAYER_SIZE), pygame.SRCALPHA)
        self._player_sprite.fill(COLOR_PLAYER)
        self._cat_sprite = self._build_cat_sprite()

    @property
    def font(self) -> pygame.font.Font:
        if self._font is None:
            if not pygame.font.get_init():
                pygame.font.init()
            self._font = pygame.font.SysFont("jetbrainsmono", 18)
        return self._font

    def draw(self, surf: pygame.Surface, snap: Snapshot):
        surf.fill(COLOR_BG)

        for seg in snap.ground:
            pygame.draw.rect(surf, COLOR_GROUND,
                             pygame.Rect(int(seg.x), int(seg.y), int(seg.width) + 1, int(seg.height)))

        for o in snap.obstacles:
            if o.kind == "platform":
                pygame.draw.rect(surf, COLOR_PLATFORM,
                                 pygame.Rect(int(o.x), int(o.y), int(o.width), int(o.height)))
            else:
                for tri in o.spike_points():
                    pygame.draw.polygon(surf, COLOR_SPIKE, tri)

        for cat in snap.cats:
            self._blit_rotated(surf, self._cat_sprite, cat.x + CAT_SIZE / 2, cat.y + CAT_SIZE / 2,
                               cat.rotation)

        p = snap.player
        self._blit_rotated(surf, self._player_sprite, p.x + PLAYER_SIZE / 2, p.y + PLAYER_SIZE / 2,
                           p.rotation)

        hud = f"Score: {snap.display_score}"
        surf.blit(self.font.render(hud, True, COLOR_FG), (12, 10))
        surf.blit(self.font.render("SPACE / click jump (x2 mid-air) | ESC quit", True, (160, 160, 160)),
                  (12, 32))

        if snap.is_game_over:
            self._draw_game_over(surf, snap)

    def _draw_game_over(self, surf: pygame.Surface, snap: Snapshot):
        r = self.restart_rect
        pygame.draw.rect(surf, COLOR_PANEL, r, border_radius=10)
        pygame.draw.rect(surf, COLOR_SPIKE, r, width=2, border_radius=10)
        lines = (f"Game over - {snap.display_score}", "Restart (R)", "New layout (N)")
        y = r.top + 8
        for msg in lines:
            txt = self.font.render(msg, True, COLOR_FG)
            surf.blit(txt, (r.centerx - txt.get_width() // 2, y))
            y += txt.get_height() + 2

    @staticmethod
    def _blit_rotated(surf: pygame.Surface, sprite: pygame.Surface, cx: float, cy: float,
                      rotation: float):
        # pygame rotates counter-clockwise in degrees; screen y points down
        rotated = pygame.transform.rotate(sprite, -math.degrees(rotation))
        surf.blit(rotated, rotated.get_rect(center=(int(cx), int(cy))))

    @staticmethod
    def _build_cat_sprite() -> pygame.Surface:
        s = pygame.Surface((CAT_SIZE, CAT_SIZE), pygame.SRCALPHA)
        body = pygame.Rect(2, CAT_SIZE // 3, CAT_SIZE - 4, CAT_SIZE * 2 // 3 - 2)
        pygame.draw.ellipse(s, COLOR_CAT, body)
        ear = CAT_SIZE // 4
        pygame.draw.polygon(s, COLOR_CAT, [(4, body.top + 2), (4 + ear, body.top + 2), (4, body.top - ear)])
        pygame.draw.polygon(s, COLOR_CAT, [(CAT_SIZE - 4, body.top + 2), (CAT_SIZE - 4 - ear, body.top + 2),
                                           (CAT_SIZE - 4, body.top - ear)])
        return s
