"""Play tab: Human vs computer with interactive SVG board."""

from __future__ import annotations

import time as _time
from dataclasses import dataclass, field
from typing import Optional

import gradio as gr

from wuziqi.agent.base import Agent
from wuziqi.agent.computer_agent import ComputerAgent
from wuziqi.engine.config import Difficulty
from wuziqi.game.board import GomokuGameState, format_point, parse_coordinate
from wuziqi.game.types import Player
from wuziqi.ui.board_component import render_board_svg

DIFFICULTY_CHOICES = [str(d) for d in Difficulty]
COLOR_CHOICES = ["Black (first)", "White (second)"]


@dataclass
class GameSession:
    """Per-tab game state held in gr.State."""

    game: GomokuGameState = field(default_factory=GomokuGameState)
    agent: Agent = field(default_factory=ComputerAgent)
    human_player: Player = field(default=Player.BLACK)
    _turn_start: float = field(default_factory=_time.time)

    def reset(self, human_player: Optional[Player] = None) -> None:
        self.game = GomokuGameState()
        self._turn_start = _time.time()
        if human_player is not None:
            self.human_player = human_player

    def mark_turn_start(self) -> None:
        """Record the moment the current player's clock starts."""
        self._turn_start = _time.time()

    def elapsed_since_turn_start(self) -> float:
        return _time.time() - self._turn_start

    @property
    def game_over_banner(self) -> str:
        """Short text for the SVG overlay banner. Empty if game is not over."""
        g = self.game
        if not g.is_over:
            return ""
        if g.winner is not None:
            if g.winner == self.human_player:
                return "You win!"
            return "Computer wins!"
        return "Draw!"

    @property
    def status_text(self) -> str:
        g = self.game
        if g.is_over:
            if g.winner is not None:
                who = "You win!" if g.winner == self.human_player else "Computer wins!"
                return f"Game over: {who} ({g.winner} by 5-in-a-row)"
            return "Game over: Draw!"
        if g.current_player == self.human_player:
            return f"Your turn ({g.current_player})"
        return f"Computer is thinking... ({g.current_player})"

    @property
    def move_history_table(self) -> list[list[str]]:
        rows: list[list[str]] = []
        for i, move in enumerate(self.game.moves):
            t = f"{move.elapsed:.2f}" if move.elapsed is not None else "-"
            rows.append([str(i + 1), str(move.player), format_point(move.point), t])
        return rows


def _make_board_html(session: GameSession) -> str:
    clickable = (
        not session.game.is_over
        and session.game.current_player == session.human_player
    )
    return render_board_svg(
        session.game,
        clickable=clickable,
        game_over_message=session.game_over_banner,
    )


def _outputs(session: GameSession, status: Optional[str] = None):
    return (
        _make_board_html(session),
        status if status is not None else session.status_text,
        session.move_history_table,
        session,
    )


def _computer_turn(session: GameSession) -> None:
    """Let the computer play if it is its turn and the game is still running."""
    g = session.game
    if g.is_over or g.current_player == session.human_player:
        return
    t0 = _time.time()
    move = session.agent.select_move(g)
    if move is not None:
        g.apply_move(move, elapsed=_time.time() - t0)
    session.mark_turn_start()


def _apply_human_move(coord_text: str, session: GameSession):
    """Process a human move, then let the computer respond."""
    if session.game.is_over:
        return _outputs(session) + ("",)

    if session.game.current_player != session.human_player:
        return _outputs(session, "Wait, it's the computer's turn.") + ("",)

    point = parse_coordinate(coord_text)
    if point is None:
        return _outputs(
            session, f"Invalid coordinate: '{coord_text}'. Use format like H8."
        ) + ("",)

    if not session.game.board.is_empty(point):
        return _outputs(session, f"{format_point(point)} is already occupied.") + ("",)

    session.game.apply_move(point, elapsed=session.elapsed_since_turn_start())
    _computer_turn(session)
    return _outputs(session) + ("",)


def _new_game(color_choice: str, difficulty_choice: str, session: GameSession):
    """Start a new game. The computer opens when the human takes White."""
    human = Player.WHITE if color_choice.startswith("White") else Player.BLACK
    session.agent = ComputerAgent(Difficulty(difficulty_choice))
    session.reset(human_player=human)
    _computer_turn(session)
    return _outputs(session) + (f"You are {human}. Difficulty: {difficulty_choice}.",)


def _undo_move(session: GameSession):
    """Undo the last move pair (computer + human)."""
    if not session.game.moves:
        return _outputs(session, "Nothing to undo.")

    last = session.game.moves[-1]
    if last.player != session.human_player:
        session.game.undo_move()
    if session.game.moves and session.game.moves[-1].player == session.human_player:
        session.game.undo_move()
    session.mark_turn_start()
    _computer_turn(session)
    return _outputs(session)


def _resign(session: GameSession):
    if not session.game.is_over and session.game.current_player == session.human_player:
        session.game.resign()
    return _outputs(session)


def build_play_tab() -> None:
    """Construct the Play tab UI inside a gr.Blocks context."""

    session_state = gr.State(GameSession())

    with gr.Row():
        # Left: board
        with gr.Column(scale=3):
            board_html = gr.HTML(
                value=render_board_svg(GomokuGameState()),
                label="Board",
            )
        # Right: controls
        with gr.Column(scale=1):
            status_text = gr.Textbox(
                value="Your turn (Black)",
                label="Status",
                interactive=False,
                lines=2,
            )
            game_info = gr.Textbox(
                value=f"You are Black. Difficulty: {Difficulty.MEDIUM}.",
                label="Game",
                interactive=False,
                lines=1,
            )

            gr.Markdown("### New Game")
            color_choice = gr.Radio(
                choices=COLOR_CHOICES,
                value=COLOR_CHOICES[0],
                label="Play as",
            )
            difficulty_choice = gr.Radio(
                choices=DIFFICULTY_CHOICES,
                value=str(Difficulty.MEDIUM),
                label="Difficulty",
            )
            new_game_btn = gr.Button("New Game", variant="primary")

            with gr.Row():
                undo_btn = gr.Button("Undo")
                resign_btn = gr.Button("Resign", variant="stop")

            gr.Markdown("### Enter Move")
            coord_input = gr.Textbox(
                label="Coordinate (e.g. H8)",
                placeholder="H8",
                elem_id="coord-input",
                lines=1,
            )
            coord_submit = gr.Button(
                "Submit Move",
                elem_id="coord-submit",
            )

            gr.Markdown("### Move History")
            move_table = gr.Dataframe(
                headers=["#", "Player", "Move", "Time (s)"],
                datatype=["number", "str", "str", "str"],
                interactive=False,
                column_count=4,
            )

    # Outputs shared by most callbacks
    board_outputs = [board_html, status_text, move_table, session_state]

    coord_submit.click(
        fn=_apply_human_move,
        inputs=[coord_input, session_state],
        outputs=board_outputs + [coord_input],
    )

    new_game_btn.click(
        fn=_new_game,
        inputs=[color_choice, difficulty_choice, session_state],
        outputs=board_outputs + [game_info],
    )

    undo_btn.click(
        fn=_undo_move,
        inputs=[session_state],
        outputs=board_outputs,
    )

    resign_btn.click(
        fn=_resign,
        inputs=[session_state],
        outputs=board_outputs,
    )
