"""Play tab: human vs computer or hot-seat play on an interactive SVG board."""

from __future__ import annotations

import random as _random
import time as _time
from dataclasses import dataclass, field
from typing import Optional

import gradio as gr

from fiveinrow.agent.selector import calculate_next_move, thinking_delay
from fiveinrow.engine.config import Difficulty
from fiveinrow.game.board import GameState, format_point, parse_coordinate
from fiveinrow.game.record import (
    list_saved_games,
    load_game,
    remove_games,
    rename_game,
    restore_game,
    save_game,
)
from fiveinrow.game.types import Player
from fiveinrow.settings import load_difficulty, save_difficulty
from fiveinrow.ui.board_component import DRAW_MESSAGE, LOSS_MESSAGE, WIN_MESSAGE, render_board_svg

DIFFICULTY_CHOICES = [str(level) for level in Difficulty]
VS_COMPUTER = "vs Computer"
VS_HUMAN = "vs Human"
MODE_CHOICES = [VS_COMPUTER, VS_HUMAN]


def _parse_difficulty(label: str) -> Difficulty:
    return Difficulty[label.upper()]


def _choice_id(choice: Optional[str]) -> Optional[int]:
    """Game id from a dropdown label like '1712345678901: title'."""
    if not choice:
        return None
    try:
        return int(choice.split(":", 1)[0])
    except ValueError:
        return None


@dataclass
class GameSession:
    """Per-tab game state held in gr.State."""

    game: GameState = field(default_factory=GameState)
    human_player: Player = field(default=Player.BLACK)
    difficulty: Difficulty = field(default=Difficulty.MEDIUM)
    vs_computer: bool = True
    need_confirm: bool = False
    simulate_thinking: bool = True
    game_id: Optional[int] = None

    @property
    def computer(self) -> Player:
        return self.human_player.other

    @property
    def human_to_move(self) -> bool:
        """True when the board should accept a click from a person."""
        if self.game.is_over:
            return False
        return not self.vs_computer or self.game.current_player is self.human_player

    def reset(self, human_player: Optional[Player] = None, vs_computer: Optional[bool] = None) -> None:
        self.game = GameState()
        self.game_id = None
        if human_player is not None:
            self.human_player = human_player
        if vs_computer is not None:
            self.vs_computer = vs_computer

    @property
    def game_over_banner(self) -> str:
        """Short text for the SVG overlay banner. Empty if game is not over."""
        g = self.game
        if not g.is_over:
            return ""
        if g.winner is None:
            return DRAW_MESSAGE
        if not self.vs_computer:
            return f"{g.winner} wins!"
        return WIN_MESSAGE if g.winner is self.human_player else LOSS_MESSAGE

    @property
    def status_text(self) -> str:
        g = self.game
        if g.is_over:
            if g.winner is None:
                return "Game over: Draw!"
            if not self.vs_computer:
                return f"Game over: {g.winner} wins! (5-in-a-row)"
            who = "You win!" if g.winner is self.human_player else "AI wins!"
            return f"Game over: {who} ({g.winner} by 5-in-a-row)"
        if g.pending is not None:
            return f"Confirm {format_point(g.pending)}?"
        if not self.vs_computer:
            return f"{g.current_player} to move"
        if g.current_player is self.human_player:
            return f"Your turn ({g.current_player})"
        return f"AI is thinking... ({g.current_player})"


def _make_board_html(session: GameSession) -> str:
    return render_board_svg(
        session.game,
        clickable=session.human_to_move and session.game.pending is None,
        game_over_message=session.game_over_banner,
    )


def _outputs(session: GameSession, status: Optional[str] = None):
    return _make_board_html(session), status or session.status_text, session


def _ai_move(session: GameSession) -> None:
    """Let the computer play if it is its turn."""
    game = session.game
    if not session.vs_computer or game.is_over or game.current_player is not session.computer:
        return
    move = calculate_next_move(game.board, session.difficulty, session.computer)
    if session.simulate_thinking:
        _time.sleep(thinking_delay(session.difficulty))
    game.apply_move(move)


def _apply_human_move(coord_text: str, session: GameSession):
    """Process a human move, then let the computer respond."""
    game = session.game
    if game.is_over:
        return _outputs(session) + ("",)
    if not session.human_to_move:
        return _outputs(session, "Wait, it's the AI's turn.") + ("",)

    point = parse_coordinate(coord_text)
    if point is None:
        return _outputs(session, f"Invalid coordinate: '{coord_text}'. Use format like E5.") + ("",)
    if not game.board.is_empty(point):
        return _outputs(session, f"{format_point(point)} is already occupied.") + ("",)

    if session.need_confirm:
        game.propose(point)
    else:
        game.apply_move(point)
        _ai_move(session)
    return _outputs(session) + ("",)


def _confirm_move(session: GameSession):
    if session.game.confirm() is None:
        return _outputs(session, "No move to confirm.")
    _ai_move(session)
    return _outputs(session)


def _cancel_move(session: GameSession):
    session.game.cancel()
    return _outputs(session)


def _new_game(color_choice: str, difficulty_choice: str, mode_choice: str, session: GameSession):
    """Start a new game. color_choice is 'Black', 'White', or 'Random'; it is
    ignored in hot-seat play."""
    session.difficulty = _parse_difficulty(difficulty_choice)
    if mode_choice == VS_HUMAN:
        session.reset(human_player=Player.BLACK, vs_computer=False)
        return _outputs(session) + ("Hot-seat game: Black moves first.",)

    if color_choice == "Random":
        human = _random.choice([Player.BLACK, Player.WHITE])
    elif color_choice == "White":
        human = Player.WHITE
    else:
        human = Player.BLACK

    session.reset(human_player=human, vs_computer=True)
    # Black moves first
    _ai_move(session)
    return _outputs(session) + (f"You are {human}.",)


def _set_difficulty(difficulty_choice: str, session: GameSession):
    session.difficulty = save_difficulty(_parse_difficulty(difficulty_choice))
    return session


def _set_need_confirm(need_confirm: bool, session: GameSession):
    session.need_confirm = need_confirm
    if not need_confirm:
        session.game.cancel()
    return _outputs(session)


# ---------------------------------------------------------------------------
# Saved games
# ---------------------------------------------------------------------------

def _saved_game_choices() -> list[str]:
    choices = []
    for r in list_saved_games():
        mode = "" if r.get("ai_player", True) else " (vs Human)"
        choices.append(f"{r['id']}: {r.get('title', '')}{mode}")
    return choices


def _refresh_choices(value: Optional[str] = None):
    return gr.update(choices=_saved_game_choices(), value=value)


def _save_game(title: str, session: GameSession):
    """Save the current game to disk, overwriting its earlier save if any."""
    if session.game.board.count_stones() == 0:
        return "No moves to save.", gr.update()
    record = save_game(
        session.game.board,
        session.game.current_player,
        title=(title or "").strip(),
        ai_player=session.vs_computer,
        game_id=session.game_id,
    )
    session.game_id = record["id"]
    return f"Saved: {record['title']}", _refresh_choices()


def _rename_game(choice: Optional[str], title: str):
    game_id = _choice_id(choice)
    title = (title or "").strip()
    if game_id is None:
        return "Pick a saved game first.", gr.update()
    if not title:
        return "Enter a title first.", gr.update()
    try:
        rename_game(game_id, title)
    except (OSError, ValueError):
        return f"Saved game {game_id} could not be read.", _refresh_choices()
    return f"Renamed to: {title}", _refresh_choices()


def _delete_game(choice: Optional[str], session: GameSession):
    game_id = _choice_id(choice)
    if game_id is None:
        return "Pick a saved game first.", gr.update()
    remove_games([game_id])
    if session.game_id == game_id:
        session.game_id = None
    return f"Deleted saved game {game_id}.", _refresh_choices()


def _load_game(choice: Optional[str], session: GameSession):
    game_id = _choice_id(choice)
    if game_id is None:
        return _outputs(session, "Pick a saved game first.")
    try:
        record = load_game(game_id)
    except FileNotFoundError:
        return _outputs(session, f"Saved game {game_id} no longer exists.")
    except (OSError, ValueError):
        return _outputs(session, f"Saved game {game_id} could not be read.")
    if not isinstance(record, dict):
        return _outputs(session, f"Saved game {game_id} could not be read.")
    board, side = restore_game(record)
    session.game = GameState(board, current_player=side)
    session.game_id = game_id
    session.vs_computer = bool(record.get("ai_player", True))
    _ai_move(session)
    return _outputs(session)


def build_play_tab() -> None:
    """Construct the Play tab UI inside a gr.Blocks context."""

    initial = GameSession(difficulty=load_difficulty())
    session_state = gr.State(initial)

    with gr.Row():
        with gr.Column(scale=3):
            board_html = gr.HTML(value=render_board_svg(GameState()), label="Board")
        with gr.Column(scale=1):
            status_text = gr.Textbox(
                value="Your turn (Black)",
                label="Status",
                interactive=False,
                lines=2,
            )
            color_info = gr.Textbox(value="You are Black.", label="Color", interactive=False, lines=1)

            gr.Markdown("### New Game")
            mode_choice = gr.Radio(choices=MODE_CHOICES, value=VS_COMPUTER, label="Opponent")
            color_choice = gr.Radio(choices=["Random", "Black", "White"], value="Black", label="Play as")
            difficulty_choice = gr.Dropdown(
                choices=DIFFICULTY_CHOICES,
                value=str(initial.difficulty),
                label="Difficulty",
            )
            new_game_btn = gr.Button("New Game", variant="primary")

            need_confirm = gr.Checkbox(value=False, label="Confirm each move")
            with gr.Row():
                confirm_btn = gr.Button("Confirm")
                cancel_btn = gr.Button("Cancel")

            gr.Markdown("### Saved Games")
            save_title = gr.Textbox(label="Title", placeholder="Defaults to the save time", lines=1)
            with gr.Row():
                save_btn = gr.Button("Save Game")
                rename_btn = gr.Button("Rename")
            save_status = gr.Textbox(label="Save", interactive=False, lines=1)
            saved_games = gr.Dropdown(choices=_saved_game_choices(), label="Load")
            with gr.Row():
                load_btn = gr.Button("Load Game")
                delete_btn = gr.Button("Delete", variant="stop")

            gr.Markdown("### Enter Move")
            coord_input = gr.Textbox(
                label="Coordinate (e.g. G7)",
                placeholder="G7",
                elem_id="coord-input",
                lines=1,
            )
            coord_submit = gr.Button("Submit Move", elem_id="coord-submit")

    board_outputs = [board_html, status_text, session_state]

    coord_submit.click(
        fn=_apply_human_move,
        inputs=[coord_input, session_state],
        outputs=board_outputs + [coord_input],
    )
    new_game_btn.click(
        fn=_new_game,
        inputs=[color_choice, difficulty_choice, mode_choice, session_state],
        outputs=board_outputs + [color_info],
    )
    difficulty_choice.change(fn=_set_difficulty, inputs=[difficulty_choice, session_state], outputs=[session_state])
    need_confirm.change(fn=_set_need_confirm, inputs=[need_confirm, session_state], outputs=board_outputs)
    confirm_btn.click(fn=_confirm_move, inputs=[session_state], outputs=board_outputs)
    cancel_btn.click(fn=_cancel_move, inputs=[session_state], outputs=board_outputs)
    save_btn.click(fn=_save_game, inputs=[save_title, session_state], outputs=[save_status, saved_games])
    rename_btn.click(fn=_rename_game, inputs=[saved_games, save_title], outputs=[save_status, saved_games])
    delete_btn.click(fn=_delete_game, inputs=[saved_games, session_state], outputs=[save_status, saved_games])
    load_btn.click(fn=_load_game, inputs=[saved_games, session_state], outputs=board_outputs)
