from __future__ import annotations

from typing import TYPE_CHECKING, List, Tuple

from chainfall.constants import PREVIEW_CELL_SIZE

if TYPE_CHECKING:
    from chainfall.ui.layout import BoardGeometry
    from chainfall.utils.snapshot import GameSnapshot

STATUS_STABLE = "Stable"
STATUS_FALLING = "Falling"

STABLE_COLOR = (78, 205, 196)   # #4ECDC4
COMBO_COLOR = (255, 165, 0)     # #FFA500
TEXT_COLOR = (230, 230, 240)


def status_label(snapshot: "GameSnapshot") -> str:
    """Gravity/combo indicator text; an active combo wins over gravity state."""
    if snapshot.combo_count >= 1:
        return f"Combo x{snapshot.combo_count}"
    if snapshot.is_gravity_animating:
        return STATUS_FALLING
    return STATUS_STABLE


def status_color(snapshot: "GameSnapshot") -> Tuple[int, int, int]:
    return COMBO_COLOR if snapshot.combo_count >= 1 else STABLE_COLOR


def hud_lines(snapshot: "GameSnapshot") -> List[str]:
    return [
        f"Score {snapshot.score}",
        f"Level {snapshot.level}",
        f"Lines {snapshot.lines_cleared}",
    ]


class HudRenderer:
    """Side panel: next piece preview, counters and the status label."""

    def render(self, arcade, snapshot: "GameSnapshot", geometry: "BoardGeometry") -> None:
        x = geometry.panel_left
        y = geometry.top - 24
        arcade.draw_text("Next", x, y, TEXT_COLOR, 16, bold=True)
        y -= 12
        queued = snapshot.queued
        if queued is not None:
            for r, row in enumerate(queued.shape):
                for c, value in enumerate(row):
                    if not value:
                        continue
                    left = x + c * PREVIEW_CELL_SIZE
                    bottom = y - (r + 1) * PREVIEW_CELL_SIZE
                    arcade.draw_lbwh_rectangle_filled(left, bottom, PREVIEW_CELL_SIZE, PREVIEW_CELL_SIZE, queued.color)
                    arcade.draw_lbwh_rectangle_outline(left, bottom, PREVIEW_CELL_SIZE, PREVIEW_CELL_SIZE, (51, 51, 51), 1)
        y -= PREVIEW_CELL_SIZE * 3 + 20
        for line in hud_lines(snapshot):
            arcade.draw_text(line, x, y, TEXT_COLOR, 14)
            y -= 26
        arcade.draw_text(status_label(snapshot), x, y - 10, status_color(snapshot), 16, bold=True)

    def render_overlay(self, arcade, snapshot: "GameSnapshot", geometry: "BoardGeometry") -> None:
        if not (snapshot.paused or snapshot.game_over):
            return
        arcade.draw_lbwh_rectangle_filled(geometry.left, geometry.bottom, geometry.width, geometry.height, (0, 0, 0, 170))
        center_x = geometry.left + geometry.width / 2
        center_y = geometry.bottom + geometry.height / 2
        if snapshot.game_over:
            arcade.draw_text("GAME OVER", center_x, center_y + 20, (255, 220, 220), 24,
                             anchor_x="center", anchor_y="center", bold=True)
            arcade.draw_text(f"Final score {snapshot.final_score or 0}", center_x, center_y - 14, TEXT_COLOR, 14,
                             anchor_x="center", anchor_y="center")
            arcade.draw_text("R to restart", center_x, center_y - 40, TEXT_COLOR, 12,
                             anchor_x="center", anchor_y="center")
        else:
            arcade.draw_text("PAUSED", center_x, center_y, (220, 240, 255), 24,
                             anchor_x="center", anchor_y="center", bold=True)
