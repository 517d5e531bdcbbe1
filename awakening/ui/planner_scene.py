"""Interactive pygame planner screen."""
from __future__ import annotations

import asyncio
import string
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Dict, Optional, Tuple

import pygame

from awakening.data.awakening_steps import MAX_LEVEL, MIN_LEVEL
from awakening.engine.logger import ChannelLogger
from awakening.planner.model import AwakeningPlannerModel
from awakening.planner.optimizer import AllocationResult, Currency
from awakening.ui.advice import AdvisorClient, pro_tip
from awakening.ui.report import MODE_LABELS

Color = Tuple[int, int, int]

BACKGROUND: Color = (250, 250, 250)
PANEL: Color = (24, 24, 27)
TEXT: Color = (39, 39, 42)
MUTED: Color = (161, 161, 170)
CHARACTER_RED: Color = (220, 38, 38)
UNIVERSAL_BLUE: Color = (37, 99, 235)
SHORTFALL_ORANGE: Color = (249, 115, 22)
WHITE: Color = (255, 255, 255)

STONE_FIELDS = ("character_stones", "universal_stones")
MAX_FIELD_DIGITS = 7


class PlannerScene:
    """Keyboard-driven editor that re-plans on every change.

    Controls: LEFT/RIGHT current level, UP/DOWN target level, TAB switches the
    stone field being edited, digits and BACKSPACE edit it, M toggles the
    strategy, A asks the remote advisor, Q or ESC quits.
    """

    def __init__(
        self,
        model: AwakeningPlannerModel,
        advisor: Optional[AdvisorClient] = None,
        logger: Optional[ChannelLogger] = None,
    ) -> None:
        self.model = model
        self.advisor = advisor
        self.logger = logger
        self.focus = 0
        self.buffers: Dict[str, str] = {
            name: self._buffer_text(getattr(model, name)) for name in STONE_FIELDS
        }
        self.result: Optional[AllocationResult] = None
        self.remote_tip: Optional[str] = None
        self._executor: Optional[ThreadPoolExecutor] = None
        self._pending: Optional[Future] = None
        self.font: Optional[pygame.font.Font] = None
        self.small_font: Optional[pygame.font.Font] = None
        self.large_font: Optional[pygame.font.Font] = None
        self.refresh()

    @staticmethod
    def _buffer_text(value: int) -> str:
        return "" if value == 0 else str(value)

    @property
    def focused_field(self) -> str:
        return STONE_FIELDS[self.focus]

    @property
    def tip(self) -> str:
        return self.remote_tip or pro_tip(self.result)

    def on_enter(self) -> None:
        self.font = pygame.font.Font(None, 30)
        self.small_font = pygame.font.Font(None, 22)
        self.large_font = pygame.font.Font(None, 72)

    def on_exit(self) -> None:
        if self._executor is not None:
            self._executor.shutdown(wait=False)
            self._executor = None

    # ------------------------------------------------------------------
    # State changes
    # ------------------------------------------------------------------
    def refresh(self) -> None:
        self.result = self.model.plan()
        self.remote_tip = None
        if self.logger and self.logger.enabled:
            shortfall = self.result.universal_shortfall if self.result else None
            self.logger.debug(
                "Inputs ★%d→★%d char=%d uni=%d mode=%s shortfall=%s",
                self.model.current_level,
                self.model.target_level,
                self.model.character_stones,
                self.model.universal_stones,
                self.model.mode.value,
                shortfall,
            )

    def _commit_field(self) -> None:
        name = self.focused_field
        text = self.buffers[name]
        if name == "character_stones":
            self.model.set_character_stones(text)
        else:
            self.model.set_universal_stones(text)

    def handle_event(self, event: pygame.event.Event) -> None:
        if event.type != pygame.KEYDOWN:
            return
        key = event.key
        if key in (pygame.K_q, pygame.K_ESCAPE):
            pygame.event.post(pygame.event.Event(pygame.QUIT))
            return
        if key == pygame.K_a:
            self.request_tip()
            return
        if key == pygame.K_LEFT:
            self.model.set_current_level(self.model.current_level - 1)
        elif key == pygame.K_RIGHT:
            self.model.set_current_level(self.model.current_level + 1)
        elif key == pygame.K_UP:
            self.model.step_target(1)
        elif key == pygame.K_DOWN:
            self.model.step_target(-1)
        elif key == pygame.K_TAB:
            self.focus = (self.focus + 1) % len(STONE_FIELDS)
            return
        elif key == pygame.K_m:
            self.model.toggle_mode()
        elif key == pygame.K_BACKSPACE:
            self.buffers[self.focused_field] = self.buffers[self.focused_field][:-1]
            self._commit_field()
        elif getattr(event, "unicode", "") and event.unicode in string.digits:
            text = self.buffers[self.focused_field]
            if len(text) >= MAX_FIELD_DIGITS:
                return
            text = (text + event.unicode).lstrip("0")
            self.buffers[self.focused_field] = text
            self._commit_field()
        else:
            return
        self.refresh()

    # ------------------------------------------------------------------
    # Remote advisor
    # ------------------------------------------------------------------
    def request_tip(self) -> bool:
        """Start a background tip request; False if one is already running."""

        if self.advisor is None:
            return False
        if self._pending is not None and not self._pending.done():
            return False
        if self._executor is None:
            self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="advisor")
        shortfall = self.result.universal_shortfall if self.result else 0
        args = (
            self.model.character,
            self.model.current_level,
            self.model.target_level,
            shortfall,
        )
        self._pending = self._executor.submit(lambda: asyncio.run(self.advisor.fetch_tip(*args)))
        if self.logger and self.logger.enabled:
            self.logger.info("Requested advisor tip for %s", self.model.character or "character")
        return True

    def update(self, dt: float) -> None:
        if self._pending is not None and self._pending.done():
            self.remote_tip = self._pending.result()
            self._pending = None

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------
    def render(self, surface: pygame.Surface, alpha: float) -> None:
        if self.font is None:
            self.on_enter()
        surface.fill(BACKGROUND)
        width = surface.get_width()
        y = 16
        y = self._draw_text(surface, "AWAKENING STONE PLANNER", (16, y), self.font, CHARACTER_RED)
        if self.model.character:
            y = self._draw_text(surface, self.model.character, (16, y), self.small_font, MUTED)
        y += 8

        y = self._draw_levels(surface, y, width)
        y = self._draw_fields(surface, y, width)
        y = self._draw_text(surface, f"Strategy [M]: {MODE_LABELS[self.model.mode]}", (16, y), self.small_font, TEXT)
        y += 8

        if self.result is not None:
            y = self._draw_shortfall(surface, y, width)
            for payment in self.result.assignment:
                y = self._draw_step(surface, payment, y, width)
        y += 8
        pygame.draw.rect(surface, PANEL, pygame.Rect(16, y, width - 32, 72), border_radius=12)
        self._draw_wrapped(surface, self.tip, (28, y + 10), width - 56)

    def _draw_text(self, surface, text: str, pos: Tuple[int, int], font, color: Color) -> int:
        label = font.render(text, True, color)
        surface.blit(label, pos)
        return pos[1] + label.get_height() + 6

    def _draw_wrapped(self, surface, text: str, pos: Tuple[int, int], max_width: int) -> None:
        x, y = pos
        line = ""
        for word in text.split():
            candidate = f"{line} {word}".strip()
            if line and self.small_font.size(candidate)[0] > max_width:
                y = self._draw_text(surface, line, (x, y), self.small_font, WHITE)
                line = word
            else:
                line = candidate
        if line:
            self._draw_text(surface, line, (x, y), self.small_font, WHITE)

    def _draw_levels(self, surface, y: int, width: int) -> int:
        y = self._draw_text(surface, "Current level [LEFT/RIGHT]   Target [UP/DOWN]", (16, y), self.small_font, MUTED)
        cell = (width - 32) // (MAX_LEVEL - MIN_LEVEL + 1)
        for level in range(MIN_LEVEL, MAX_LEVEL + 1):
            rect = pygame.Rect(16 + (level - MIN_LEVEL) * cell, y, cell - 6, 36)
            if level == self.model.current_level:
                fill, color = CHARACTER_RED, WHITE
            elif level == self.model.target_level:
                fill, color = PANEL, WHITE
            else:
                fill, color = (244, 244, 245), MUTED
            pygame.draw.rect(surface, fill, rect, border_radius=8)
            label = self.font.render(str(level), True, color)
            surface.blit(label, label.get_rect(center=rect.center))
        return y + 48

    def _draw_fields(self, surface, y: int, width: int) -> int:
        half = (width - 40) // 2
        titles = {"character_stones": "Character stones", "universal_stones": "Universal stones"}
        colors = {"character_stones": CHARACTER_RED, "universal_stones": UNIVERSAL_BLUE}
        for index, name in enumerate(STONE_FIELDS):
            x = 16 + index * (half + 8)
            self._draw_text(surface, titles[name], (x, y), self.small_font, colors[name])
            rect = pygame.Rect(x, y + 22, half, 48)
            pygame.draw.rect(surface, (244, 244, 245), rect, border_radius=12)
            if index == self.focus:
                pygame.draw.rect(surface, colors[name], rect, width=2, border_radius=12)
            text = self.buffers[name] or "0"
            label = self.font.render(text, True, colors[name] if self.buffers[name] else MUTED)
            surface.blit(label, label.get_rect(center=rect.center))
        return y + 82

    def _draw_shortfall(self, surface, y: int, width: int) -> int:
        rect = pygame.Rect(16, y, width - 32, 84)
        pygame.draw.rect(surface, PANEL, rect, border_radius=16)
        self._draw_text(surface, "SHORTFALL", (28, y + 12), self.small_font, SHORTFALL_ORANGE)
        self._draw_text(surface, "Universal stones needed", (28, y + 36), self.small_font, WHITE)
        value = self.large_font.render(str(self.result.universal_shortfall), True, SHORTFALL_ORANGE)
        surface.blit(value, value.get_rect(midright=(rect.right - 16, rect.centery)))
        return y + rect.height + 10

    def _draw_step(self, surface, payment, y: int, width: int) -> int:
        step = payment.step
        is_character = payment.currency is Currency.CHARACTER
        accent = CHARACTER_RED if is_character else UNIVERSAL_BLUE
        rect = pygame.Rect(16, y, width - 32, 44)
        pygame.draw.rect(surface, (244, 244, 245), rect, border_radius=10)
        pygame.draw.rect(surface, accent, pygame.Rect(16, y, 6, 44))
        self._draw_text(surface, f"{step.from_level} > {step.to_level}  {step.label}", (30, y + 4), self.small_font, TEXT)
        self._draw_text(surface, f"Cost {step.cost}", (30, y + 22), self.small_font, MUTED)
        badge = self.small_font.render("Character" if is_character else "Universal", True, WHITE)
        badge_rect = badge.get_rect(midright=(rect.right - 16, rect.centery)).inflate(16, 8)
        pygame.draw.rect(surface, accent, badge_rect, border_radius=8)
        surface.blit(badge, badge.get_rect(center=badge_rect.center))
        return y + 50


__all__ = ["PlannerScene", "STONE_FIELDS"]
