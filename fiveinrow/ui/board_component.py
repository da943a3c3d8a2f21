"""SVG board renderer + JavaScript click handler for Gradio."""

from __future__ import annotations

from typing import Optional

from fiveinrow.game.board import BOARD_SIZE, COL_LABELS, GameState, format_point
from fiveinrow.game.types import EMPTY, Player, Point

# Layout constants
CELL_SIZE = 44
MARGIN = 40
BOARD_PX = MARGIN * 2 + CELL_SIZE * (BOARD_SIZE - 1)
STONE_RADIUS = 18
CLICK_RADIUS = 20  # Invisible click target radius

# Colors
BG_COLOR = "#DCB35C"
LINE_COLOR = "#4A3728"
BLACK_STONE = "#1A1A1A"
WHITE_STONE = "#F5F5F5"
WHITE_STROKE = "#888"
BANNER_WIN = "#4ADE80"
BANNER_LOSS = "#F87171"
BANNER_DRAW = "#FFFFFF"

WIN_MESSAGE = "You win!"
LOSS_MESSAGE = "AI wins!"
DRAW_MESSAGE = "Draw!"

# Star points on a 13x13 board
STAR_POINTS = [Point(3, 3), Point(3, 9), Point(6, 6), Point(9, 3), Point(9, 9)]


def _coord(row: int, col: int) -> tuple[int, int]:
    """Convert 0-indexed board coordinates to SVG pixel coordinates."""
    return MARGIN + col * CELL_SIZE, MARGIN + row * CELL_SIZE


def _stone(x: int, y: int, player: Player, opacity: float = 1.0) -> str:
    fill = BLACK_STONE if player is Player.BLACK else WHITE_STONE
    stroke = "none" if player is Player.BLACK else WHITE_STROKE
    return (
        f'<circle cx="{x}" cy="{y}" r="{STONE_RADIUS}" fill="{fill}" '
        f'stroke="{stroke}" stroke-width="1.5" opacity="{opacity}"/>'
    )


def _banner(message: str) -> str:
    color = {WIN_MESSAGE: BANNER_WIN, LOSS_MESSAGE: BANNER_LOSS}.get(message, BANNER_DRAW)
    y = BOARD_PX // 2
    return (
        f'<rect x="0" y="{y - 30}" width="{BOARD_PX}" height="60" fill="rgba(0,0,0,0.6)"/>'
        f'<text x="{BOARD_PX // 2}" y="{y + 10}" text-anchor="middle" font-size="32" '
        f'font-family="sans-serif" font-weight="bold" fill="{color}">{message}</text>'
    )


def render_board_svg(
    game_state: GameState,
    clickable: bool = True,
    highlight_last: bool = True,
    game_over_message: str = "",
) -> str:
    """Render the board as an SVG string."""
    parts: list[str] = []

    parts.append(
        f'<svg xmlns="http://www.w3.org/2000/svg" '
        f'width="{BOARD_PX}" height="{BOARD_PX}" '
        f'viewBox="0 0 {BOARD_PX} {BOARD_PX}" '
        f'id="fiveinrow-board">'
    )
    parts.append(f'<rect width="{BOARD_PX}" height="{BOARD_PX}" fill="{BG_COLOR}" rx="4"/>')

    # Grid lines
    far = MARGIN + (BOARD_SIZE - 1) * CELL_SIZE
    for i in range(BOARD_SIZE):
        offset = MARGIN + i * CELL_SIZE
        parts.append(
            f'<line x1="{offset}" y1="{MARGIN}" x2="{offset}" y2="{far}" '
            f'stroke="{LINE_COLOR}" stroke-width="1"/>'
        )
        parts.append(
            f'<line x1="{MARGIN}" y1="{offset}" x2="{far}" y2="{offset}" '
            f'stroke="{LINE_COLOR}" stroke-width="1"/>'
        )

    for star in STAR_POINTS:
        cx, cy = _coord(star.row, star.col)
        parts.append(f'<circle cx="{cx}" cy="{cy}" r="4" fill="{LINE_COLOR}"/>')

    # Column labels on top, row labels on the left
    for i in range(BOARD_SIZE):
        x, y = _coord(i, i)
        parts.append(
            f'<text x="{x}" y="{MARGIN - 15}" text-anchor="middle" '
            f'font-size="14" font-family="monospace" fill="{LINE_COLOR}">{COL_LABELS[i]}</text>'
        )
        parts.append(
            f'<text x="{MARGIN - 22}" y="{y + 5}" text-anchor="middle" '
            f'font-size="14" font-family="monospace" fill="{LINE_COLOR}">{i + 1}</text>'
        )

    # Stones
    board = game_state.board
    last_point: Optional[Point] = None
    if game_state.last_move is not None:
        last_point = game_state.last_move.point

    for pt in board.points():
        value = board.get(pt)
        if value == EMPTY:
            continue
        player = Player(value)
        x, y = _coord(pt.row, pt.col)
        parts.append(_stone(x, y, player))
        if highlight_last and pt == last_point:
            marker = WHITE_STONE if player is Player.BLACK else BLACK_STONE
            parts.append(f'<circle cx="{x}" cy="{y}" r="5" fill="{marker}" opacity="0.7"/>')

    # Pending (unconfirmed) move, drawn translucent
    if game_state.pending is not None:
        x, y = _coord(game_state.pending.row, game_state.pending.col)
        parts.append(_stone(x, y, game_state.current_player, opacity=0.5))

    # Clickable intersection targets (invisible circles)
    if clickable and not game_state.is_over:
        for pt in board.points():
            if not board.is_empty(pt):
                continue
            x, y = _coord(pt.row, pt.col)
            coord_str = format_point(pt)
            parts.append(
                f'<circle cx="{x}" cy="{y}" r="{CLICK_RADIUS}" '
                f'fill="transparent" class="board-click" '
                f'data-coord="{coord_str}" style="cursor:pointer">'
                f'<title>{coord_str}</title></circle>'
            )

    if game_over_message:
        parts.append(_banner(game_over_message))

    parts.append("</svg>")
    return "\n".join(parts)


# JavaScript that handles clicks on the SVG and writes the coordinate to
# a hidden Gradio Textbox, then triggers its submit button.
BOARD_CLICK_JS = """
() => {
    if (window._fiveinrowClickBound) return;
    window._fiveinrowClickBound = true;

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
