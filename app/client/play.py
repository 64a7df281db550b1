"""
➡️ But : Déroulé d'une partie (page "play").

Phases : PLAYER_SETUP -> PLAYING -> COMPLETE, "play again" ramène à PLAYER_SETUP.

Par question : unrevealed -> revealed -> answered (correct | incorrect).
Après chaque réponse, le score est recalculé depuis l'état complet puis persisté
avec la liste des questions jouées. Quand tout est répondu, la phase COMPLETE
s'affiche après un court délai.
"""

import logging
import time
from datetime import datetime, timezone
from enum import Enum
from typing import TYPE_CHECKING, Callable, Optional

from app.client.messages import MessageBox
from app.client.models import GameBoard, Question
from app.client.results import Result

if TYPE_CHECKING:
    from app.client.auth_store import AuthStore
    from app.client.game_board_store import GameBoardStore
    from app.client.routes import Navigator

logger = logging.getLogger(__name__)

COMPLETE_DISPLAY_DELAY = 0.5
GAME_BOARDS_PATH = "/game-boards"


class PlayPhase(str, Enum):
    PLAYER_SETUP = "player_setup"
    PLAYING = "playing"
    COMPLETE = "complete"


class QuestionStatus(str, Enum):
    UNREVEALED = "unrevealed"
    REVEALED = "revealed"
    CORRECT = "correct"
    INCORRECT = "incorrect"


class PlayController:
    def __init__(
        self,
        *,
        board_id: str,
        auth: "AuthStore",
        boards: "GameBoardStore",
        navigator: "Navigator",
        clock: Callable[[], float] = time.monotonic,
    ):
        self.board_id = board_id
        self.auth = auth
        self.boards = boards
        self.navigator = navigator
        self.clock = clock
        self.messages = MessageBox(clock=clock)

        self.player_name = ""
        self.selected_question: Optional[Question] = None
        self.show_answer = False
        self._phase = PlayPhase.PLAYER_SETUP
        self._complete_at: Optional[float] = None

    # ---------- Chargement ----------

    def load(self) -> Optional[GameBoard]:
        user = self.auth.user
        if user is None:
            return None
        board = self.boards.find_game_board(self.board_id)
        if board is None:
            self.boards.fetch_game_boards(user.id)
            board = self.boards.find_game_board(self.board_id)
        if board is None:
            logger.info("Game board %s not found, leaving play page", self.board_id)
            self.navigator.navigate(GAME_BOARDS_PATH)
            return None
        self.boards.set_current_game_board(board)
        return board

    # ---------- État ----------

    @property
    def phase(self) -> PlayPhase:
        if (
            self._phase is PlayPhase.PLAYING
            and self._complete_at is not None
            and self.clock() >= self._complete_at
        ):
            self._phase = PlayPhase.COMPLETE
        return self._phase

    @property
    def score(self) -> int:
        return self.boards.calculate_score()

    def question_status(self, question_id: str) -> QuestionStatus:
        state = self.boards.get_question_state(question_id)
        if state is None or (not state.revealed and not state.answered):
            return QuestionStatus.UNREVEALED
        if not state.answered:
            return QuestionStatus.REVEALED
        return QuestionStatus.CORRECT if state.correct else QuestionStatus.INCORRECT

    def _find_question(self, question_id: str) -> Optional[Question]:
        board = self.boards.current_game_board
        if board is None:
            return None
        return next((q for q in board.iter_questions() if q.id == question_id), None)

    # ---------- Actions ----------

    def start(self, player_name: str) -> Result:
        name = player_name.strip()
        if not name:
            return Result.failure(ValueError("Player name is required"))

        result = self.boards.start_game_session(self.board_id, name)
        if not result.ok:
            logger.error("Failed to start game session: %s", result.message)
            self.messages.error("Failed to start game session")
            return result

        self.player_name = name
        self._phase = PlayPhase.PLAYING
        self._complete_at = None
        return result

    def select_question(self, question_id: str) -> bool:
        """Sans effet sur une question déjà répondue."""
        state = self.boards.get_question_state(question_id)
        if state is not None and state.answered:
            return False
        question = self._find_question(question_id)
        if question is None:
            return False
        self.selected_question = question
        self.show_answer = False
        self.boards.update_question_state(question_id, revealed=True)
        return True

    def reveal_answer(self) -> Optional[str]:
        if self.selected_question is None:
            return None
        self.show_answer = True
        return self.selected_question.answer

    def close_question(self) -> None:
        self.selected_question = None
        self.show_answer = False

    def mark_answer(self, correct: bool) -> Result:
        question = self.selected_question
        session = self.boards.current_session
        if question is None or session is None:
            return Result.failure(ValueError("No question in play"))

        self.boards.update_question_state(question.id, answered=True, correct=correct)
        changes = {
            "score": self.boards.calculate_score(),
            "completed_questions": [*session.completed_questions, question.id],
        }
        complete = self.boards.is_game_complete()
        if complete:
            changes["completed_at"] = datetime.now(timezone.utc)

        result = self.boards.update_game_session(session.id, **changes)
        if not result.ok:
            # la partie continue, seul l'enregistrement a échoué
            logger.error("Failed to save game session %s: %s", session.id, result.message)

        self.close_question()
        if complete:
            self._complete_at = self.clock() + COMPLETE_DISPLAY_DELAY
        return result

    def play_again(self) -> None:
        self._phase = PlayPhase.PLAYER_SETUP
        self._complete_at = None
        self.player_name = ""
        self.close_question()
        self.boards.set_current_session(None)
        self.boards.set_question_states([])

    def end_game(self) -> None:
        self.navigator.navigate(GAME_BOARDS_PATH)
