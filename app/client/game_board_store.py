"""
➡️ But : État des plateaux côté application + moteur de partie.

- CRUD sur la table `game_boards` (liste en mémoire des plateaux de l'utilisateur,
  pointeur "plateau courant").
- Parties : création / mise à jour de la ligne `game_sessions`.
- États de questions (éphémères), score recalculé à partir de l'état complet,
  détection de fin de partie.

Lectures : une erreur donne une liste vide (la vue ne doit pas casser).
Écritures : Result(error=...) que l'appelant doit vérifier.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Union

from pydantic import ValidationError

from app.client.backend import BackendClient
from app.client.errors import BackendError, BackendNotConfiguredError
from app.client.models import GameBoard, GameSession, QuestionState
from app.client.results import Result
from app.features.game_boards.schemas import GameBoardCreateIn, GameBoardUpdateIn
from app.features.game_sessions.schemas import GameSessionCreateIn, GameSessionUpdateIn

logger = logging.getLogger(__name__)

STORE_ERRORS = (BackendError, BackendNotConfiguredError, ValidationError)


class GameBoardStore:
    def __init__(self, client: Optional[BackendClient]):
        self.client = client
        self.game_boards: List[GameBoard] = []
        self.current_game_board: Optional[GameBoard] = None
        self.current_session: Optional[GameSession] = None
        self.question_states: List[QuestionState] = []
        self.loading = False

    def _require_client(self) -> BackendClient:
        if self.client is None:
            raise BackendNotConfiguredError()
        return self.client

    # -----------------------------
    # Plateaux
    # -----------------------------

    def fetch_game_boards(self, user_id: str) -> List[GameBoard]:
        self.loading = True
        try:
            rows = (
                self._require_client()
                .table("game_boards")
                .select()
                .eq("user_id", user_id)
                .order("created_at", desc=True)
                .execute()
            )
            self.game_boards = [GameBoard.model_validate(row) for row in rows or []]
        except STORE_ERRORS as e:
            logger.error("Error fetching game boards: %s", e)
            self.game_boards = []
        finally:
            self.loading = False
        return self.game_boards

    def find_game_board(self, board_id: str) -> Optional[GameBoard]:
        return next((board for board in self.game_boards if board.id == board_id), None)

    def create_game_board(self, board: Union[GameBoardCreateIn, Dict[str, Any]]) -> Result:
        self.loading = True
        try:
            payload = GameBoardCreateIn.model_validate(board).model_dump(mode="json")
            row = (
                self._require_client()
                .table("game_boards")
                .insert(payload)
                .select()
                .single()
                .execute()
            )
            created = GameBoard.model_validate(row)
            self.game_boards = [created, *self.game_boards]
            return Result.success(created)
        except STORE_ERRORS as e:
            return Result.failure(e)
        finally:
            self.loading = False

    def update_game_board(self, board_id: str, **changes: Any) -> Result:
        self.loading = True
        try:
            update = GameBoardUpdateIn.model_validate(changes)
            update.updated_at = datetime.now(timezone.utc)
            payload = update.model_dump(mode="json", exclude_unset=True)
            row = (
                self._require_client()
                .table("game_boards")
                .update(payload)
                .eq("id", board_id)
                .select()
                .single()
                .execute()
            )
            updated = GameBoard.model_validate(row)
            self.game_boards = [updated if board.id == board_id else board for board in self.game_boards]
            if self.current_game_board and self.current_game_board.id == board_id:
                self.current_game_board = updated
            return Result.success(updated)
        except STORE_ERRORS as e:
            return Result.failure(e)
        finally:
            self.loading = False

    def delete_game_board(self, board_id: str) -> Result:
        self.loading = True
        try:
            self._require_client().table("game_boards").delete().eq("id", board_id).execute()
            self.game_boards = [board for board in self.game_boards if board.id != board_id]
            if self.current_game_board and self.current_game_board.id == board_id:
                self.current_game_board = None
            return Result.success()
        except STORE_ERRORS as e:
            return Result.failure(e)
        finally:
            self.loading = False

    # -----------------------------
    # Parties
    # -----------------------------

    def start_game_session(self, game_board_id: str, player_name: str) -> Result:
        self.loading = True
        try:
            client = self._require_client()
            # les états de questions suivent le plateau courant
            if self.current_game_board is None or self.current_game_board.id != game_board_id:
                self.question_states = []
                raise LookupError(f"Game board {game_board_id} is not the current game board")
            payload = GameSessionCreateIn(game_board_id=game_board_id, player_name=player_name)
            row = (
                client
                .table("game_sessions")
                .insert(payload.model_dump(mode="json"))
                .select()
                .single()
                .execute()
            )
            self.current_session = GameSession.model_validate(row)
            self.initialize_question_states()
            return Result.success(self.current_session)
        except STORE_ERRORS + (LookupError,) as e:
            return Result.failure(e)
        finally:
            self.loading = False

    def update_game_session(self, session_id: str, **changes: Any) -> Result:
        # pas de drapeau loading : appelé en pleine partie
        try:
            payload = GameSessionUpdateIn.model_validate(changes).model_dump(mode="json", exclude_unset=True)
            row = (
                self._require_client()
                .table("game_sessions")
                .update(payload)
                .eq("id", session_id)
                .select()
                .single()
                .execute()
            )
            updated = GameSession.model_validate(row)
            if self.current_session and self.current_session.id == session_id:
                self.current_session = updated
            return Result.success(updated)
        except STORE_ERRORS as e:
            return Result.failure(e)

    # -----------------------------
    # États des questions
    # -----------------------------

    def initialize_question_states(self) -> None:
        if self.current_game_board is None:
            self.question_states = []
            return
        self.question_states = [QuestionState(id=question.id) for question in self.current_game_board.iter_questions()]

    def get_question_state(self, question_id: str) -> Optional[QuestionState]:
        return next((state for state in self.question_states if state.id == question_id), None)

    def update_question_state(self, question_id: str, **changes: Any) -> None:
        self.question_states = [
            state.model_copy(update=changes) if state.id == question_id else state
            for state in self.question_states
        ]

    def calculate_score(self) -> int:
        """Somme des points des questions répondues correctement (jamais incrémental)."""
        if self.current_game_board is None:
            return 0
        states = {state.id: state for state in self.question_states}
        score = 0
        for question in self.current_game_board.iter_questions():
            state = states.get(question.id)
            if state is not None and state.answered and state.correct:
                score += question.points
        return score

    def is_game_complete(self) -> bool:
        """Vrai ssi chaque question du plateau a un état répondu."""
        if self.current_game_board is None:
            return False
        states = {state.id: state for state in self.question_states}
        return all(
            question.id in states and states[question.id].answered
            for question in self.current_game_board.iter_questions()
        )

    # -----------------------------
    # Setters
    # -----------------------------

    def set_current_game_board(self, game_board: Optional[GameBoard]) -> None:
        self.current_game_board = game_board

    def set_current_session(self, session: Optional[GameSession]) -> None:
        self.current_session = session

    def set_question_states(self, states: List[QuestionState]) -> None:
        self.question_states = list(states)
