"""SVG board renderer + JavaScript click handler for Gradio."""

from __future__ import annotations

from typing import Optional

from wuziqi.game.board import COL_LABELS, GomokuGameState, format_point
from wuziqi.game.types import Player, Point

# Layout constants
CELL_SIZE = 40
MARGIN = 40
STONE_RADIUS = 17
CLICK_RADIUS = 18  # Invisible click target radius

# Colors
BG_COLOR = "#DCB35C"
LINE_COLOR = "#4A3728"
BLACK_STONE = "#1A1A1A"
WHITE_STONE = "#F5F5F5"
WHITE_STROKE = "#888"
WIN_LINE_COLOR = "#E74C3C"

# Banner colors keyed by outcome
BANNER_COLORS = {
    "You win!": "#4ADE80",
    "Computer wins!": "#F87171",
}
BANNER_DEFAULT_COLOR = "#FFFFFF"


def _board_px(size: int) -> int:
    return MARGIN * 2 + CELL_SIZE * (size - 1)


def _coord(point: Point) -> tuple[int, int]:
    """Convert 0-indexed board coordinates to SVG pixel coordinates."""
    return MARGIN + point.col * CELL_SIZE, MARGIN + point.row * CELL_SIZE


def _banner(message: str, px: int) -> list[str]:
    color = BANNER_COLORS.get(message, BANNER_DEFAULT_COLOR)
    mid = px // 2
    return [
        f'<rect x="0" y="{mid - 30}" width="{px}" height="60" '
        f'fill="rgba(0, 0, 0, 0.6)"/>',
        f'<text x="{mid}" y="{mid + 10}" text-anchor="middle" '
        f'font-size="30" font-weight="bold" fill="{color}">{message}</text>',
    ]


def render_board_svg(
    game_state: GomokuGameState,
    clickable: bool = True,
    highlight_last: bool = True,
    game_over_message: str = "",
) -> str:
    """Render the board as an SVG string."""
    board = game_state.board
    size = board.size
    px = _board_px(size)
    parts: list[str] = []

    # SVG header
    parts.append(
        f'<svg xmlns="http://www.w3.org/2000/svg" '
        f'width="{px}" height="{px}" '
        f'viewBox="0 0 {px} {px}" '
        f'id="gomoku-board">'
    )

    # Background
    parts.append(f'<rect width="{px}" height="{px}" fill="{BG_COLOR}" rx="4"/>')

    # Grid lines
    far = MARGIN + (size - 1) * CELL_SIZE
    for i in range(size):
        offset = MARGIN + i * CELL_SIZE
        parts.append(
            f'<line x1="{offset}" y1="{MARGIN}" x2="{offset}" y2="{far}" '
            f'stroke="{LINE_COLOR}" stroke-width="1"/>'
        )
        parts.append(
            f'<line x1="{MARGIN}" y1="{offset}" x2="{far}" y2="{offset}" '
            f'stroke="{LINE_COLOR}" stroke-width="1"/>'
        )

    # Center star point
    cx, cy = _coord(board.center)
    parts.append(f'<circle cx="{cx}" cy="{cy}" r="4" fill="{LINE_COLOR}"/>')

    # Column labels (top) and row labels (left)
    for i in range(size):
        x, _ = _coord(Point(0, i))
        parts.append(
            f'<text x="{x}" y="{MARGIN - 15}" text-anchor="middle" '
            f'font-size="13" font-family="monospace" fill="{LINE_COLOR}">'
            f'{COL_LABELS[i]}</text>'
        )
        _, y = _coord(Point(i, 0))
        parts.append(
            f'<text x="{MARGIN - 22}" y="{y + 5}" text-anchor="middle" '
            f'font-size="13" font-family="monospace" fill="{LINE_COLOR}">'
            f'{i + 1}</text>'
        )

    # Stones
    last_point: Optional[Point] = None
    if game_state.moves:
        last_point = game_state.moves[-1].point
    winning = set(game_state.winning_line)

    for pt, player in board.stones():
        x, y = _coord(pt)
        fill = BLACK_STONE if player is Player.BLACK else WHITE_STONE
        stroke = "none" if player is Player.BLACK else WHITE_STROKE
        parts.append(
            f'<circle cx="{x}" cy="{y}" r="{STONE_RADIUS}" '
            f'fill="{fill}" stroke="{stroke}" stroke-width="1.5"/>'
        )
        if pt in winning:
            parts.append(
                f'<circle cx="{x}" cy="{y}" r="{STONE_RADIUS + 2}" fill="none" '
                f'stroke="{WIN_LINE_COLOR}" stroke-width="3" class="win-stone"/>'
            )
        elif highlight_last and pt == last_point:
            marker_color = WHITE_STONE if player is Player.BLACK else BLACK_STONE
            parts.append(
                f'<circle cx="{x}" cy="{y}" r="5" '
                f'fill="{marker_color}" opacity="0.7"/>'
            )

    # Clickable intersection targets (invisible circles)
    if clickable and not game_state.is_over:
        for pt in board.empty_points():
            x, y = _coord(pt)
            coord_str = format_point(pt)
            parts.append(
                f'<circle cx="{x}" cy="{y}" r="{CLICK_RADIUS}" '
                f'fill="transparent" class="board-click" '
                f'data-coord="{coord_str}" style="cursor:pointer">'
                f'<title>{coord_str}</title></circle>'
            )

    if game_over_message:
        parts.extend(_banner(game_over_message, px))

    parts.append("</svg>")
    return "\n".join(parts)


# JavaScript that handles clicks on the SVG and writes the coordinate to
# a hidden Gradio Textbox, then triggers the submit button.
BOARD_CLICK_JS = """
() => {
    if (window._gomokuClickBound) return;
    window._gomokuClickBound = true;

    document.addEventListener('click', function(e) {
        const circle = e.target.closest('.board-click');
        if (!circle) return;
        const coord = circle.getAttribute('data-coord');
        if (!coord) return;

        const container = document.querySelector('#coord-input textarea, #coord-input input');
        if (container) {
            // Native setter so Gradio notices the change
            const nativeSetter = Object.getOwnPropertyDescriptor(
                window.HTMLInputElement.prototype, 'value'
            )?.set || Object.getOwnPropertyDescriptor(
                window.HTMLTextAreaElement.prototype, 'value'
            )?.set;
            if (nativeSetter) {
                nativeSetter.call(container, coord);
            } else {
                container.value = coord;
            }
            container.dispatchEvent(new Event('input', { bubbles: true }));
            const btn = document.querySelector('#coord-submit');
            if (btn) btn.click();
        }
    });
}
"""
