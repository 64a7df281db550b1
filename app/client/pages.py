"""
➡️ But : Contrôleurs des pages de l'application (logique d'écran, sans rendu).

Chaque page lit les stores de l'AppState, déclenche les opérations
et range le retour utilisateur dans sa MessageBox (effacée après 3 s).
La page "play" est PlayController (app/client/play.py).
"""

import logging
from typing import TYPE_CHECKING, List, Optional

from app.client.forms import BoardForm, BoardFormData, FormValidationError
from app.client.messages import MessageBox
from app.client.models import GameBoard
from app.features.game_boards.schemas import GameBoardCreateIn
from app.client.play import PlayController
from app.client.results import Result

if TYPE_CHECKING:
    from app.client.app_state import AppState

logger = logging.getLogger(__name__)

REGISTER_REDIRECT_DELAY = 3.0
EDIT_REDIRECT_DELAY = 2.0
RECENT_GAMES_COUNT = 3


def board_path(board_id: str, action: str) -> str:
    return f"/game-boards/{board_id}/{action}"


def count_questions(boards: List[GameBoard]) -> int:
    return sum(board.question_count for board in boards)


class Page:
    def __init__(self, state: "AppState"):
        self.state = state
        self.messages = MessageBox(clock=state.clock)

    @property
    def user(self):
        return self.state.auth.user


# -----------------------------
# Comptes
# -----------------------------

class LoginPage(Page):
    def __init__(self, state: "AppState"):
        super().__init__(state)
        self.show_forgot_password = False

    def sign_in(self, email: str, password: str) -> Result:
        result = self.state.auth.sign_in(email, password)
        if not result.ok:
            self.messages.error(result.message or "Failed to sign in")
        else:
            self.state.navigator.navigate("/")
        return result

    def forgot_password(self, email: str) -> Result:
        result = self.state.auth.reset_password(email)
        if not result.ok:
            self.messages.error(result.message or "Failed to send reset email")
        else:
            self.messages.success("Password reset email sent successfully!")
            self.show_forgot_password = False
        return result


class RegisterPage(Page):
    def register(self, *, full_name: str, email: str, password: str, confirm_password: str) -> Result:
        if password != confirm_password:
            error = ValueError("Passwords do not match")
            self.messages.error(str(error))
            return Result.failure(error)

        result = self.state.auth.register(email, password, full_name)
        if not result.ok:
            self.messages.error(result.message or "Failed to create account")
        else:
            self.messages.success("Account created successfully! Please check your email to verify your account.")
            self.state.navigator.navigate_later("/login", REGISTER_REDIRECT_DELAY)
        return result


class ProfilePage(Page):
    def __init__(self, state: "AppState"):
        super().__init__(state)
        self.full_name = ""
        self.email = ""
        self.avatar_url = ""

    def mount(self) -> None:
        user = self.user
        if user is None:
            return
        self.full_name = user.full_name or ""
        self.email = user.email
        self.avatar_url = user.avatar_url or ""
        self.state.boards.fetch_game_boards(user.id)

    def update_profile(self, *, full_name: str, avatar_url: str) -> Result:
        result = self.state.auth.update_profile(full_name=full_name, avatar_url=avatar_url)
        if not result.ok:
            self.messages.error(result.message or "Failed to update profile")
        else:
            self.full_name, self.avatar_url = full_name, avatar_url
            self.messages.success("Profile updated successfully!")
        return result

    # -------- Statistiques --------

    @property
    def board_count(self) -> int:
        return len(self.state.boards.game_boards)

    @property
    def total_questions(self) -> int:
        return count_questions(self.state.boards.game_boards)

    @property
    def member_since(self) -> str:
        user = self.user
        if user is None or user.created_at is None:
            return "N/A"
        return str(user.created_at.year)


# -----------------------------
# Listes de plateaux
# -----------------------------

class GameBoardsPage(Page):
    def mount(self) -> List[GameBoard]:
        if self.user is None:
            return []
        return self.state.boards.fetch_game_boards(self.user.id)

    @property
    def game_boards(self) -> List[GameBoard]:
        return self.state.boards.game_boards

    def play(self, board_id: str) -> None:
        self.state.navigator.navigate(board_path(board_id, "play"))

    def edit(self, board_id: str) -> None:
        self.state.navigator.navigate(board_path(board_id, "edit"))

    def delete(self, board_id: str) -> Result:
        result = self.state.boards.delete_game_board(board_id)
        if not result.ok:
            self.messages.error("Failed to delete game board. Please try again.")
        return result


class HomePage(GameBoardsPage):
    @property
    def recent_games(self) -> List[GameBoard]:
        return self.game_boards[:RECENT_GAMES_COUNT]

    @property
    def total_questions(self) -> int:
        return count_questions(self.game_boards)


# -----------------------------
# Formulaires
# -----------------------------

class CreateBoardPage(Page):
    """Brouillon sauvegardé à chaque modification, repris au montage."""

    def __init__(self, state: "AppState"):
        super().__init__(state)
        self.form: Optional[BoardForm] = None

    def mount(self) -> BoardForm:
        drafts = self.state.drafts
        draft = drafts.load_create()
        self.form = BoardForm(draft or BoardFormData(), on_change=drafts.save_create)
        if draft is None:
            drafts.save_create(self.form.data)
        return self.form

    def submit(self) -> Result:
        if self.form is None or self.user is None:
            return Result.failure(ValueError("Form is not ready"))
        try:
            data = self.form.submit()
        except FormValidationError as e:
            self.messages.error(e.message)
            return Result.failure(e)

        result = self.state.boards.create_game_board(
            GameBoardCreateIn(user_id=self.user.id, **data.model_dump())
        )
        if not result.ok:
            logger.error("Failed to create game board: %s", result.message)
            self.messages.error("Failed to create game board. Please try again.")
            return result

        self.state.drafts.clear_create()
        self.state.navigator.navigate("/game-boards")
        return result


class EditBoardPage(Page):
    """
    Montage : brouillon d'édition de CE plateau s'il existe (sans appel réseau),
    sinon le plateau du store (chargé au besoin). Le brouillon est écrit
    dès la fin du chargement, puis à chaque modification.
    """

    def __init__(self, state: "AppState", board_id: str):
        super().__init__(state)
        self.board_id = board_id
        self.form: Optional[BoardForm] = None
        self.is_loading = True

    def _save_draft(self, data: BoardFormData) -> None:
        if not self.is_loading:
            self.state.drafts.save_edit(self.board_id, data)

    def mount(self) -> Optional[BoardForm]:
        draft = self.state.drafts.load_edit(self.board_id)
        if draft is not None:
            self.form = BoardForm(draft, on_change=self._save_draft)
            self.is_loading = False
            return self.form

        user = self.user
        if user is None:
            return None

        self.is_loading = True
        boards = self.state.boards
        board = boards.find_game_board(self.board_id)
        if board is None:
            boards.fetch_game_boards(user.id)
            board = boards.find_game_board(self.board_id)
        if board is None:
            self.messages.error("Game board not found")
            self.state.navigator.navigate("/game-boards")
            return None

        self.form = BoardForm(on_change=self._save_draft)
        self.form.load(
            BoardFormData(
                title=board.title,
                description=board.description or "",
                categories=[category.model_copy(deep=True) for category in board.categories],
                theme=board.theme.model_copy(deep=True),
            )
        )
        self.is_loading = False
        # fin du chargement : le brouillon reprend le plateau tel quel
        self._save_draft(self.form.data)
        return self.form

    def submit(self) -> Result:
        if self.form is None:
            return Result.failure(ValueError("Form is not ready"))
        try:
            data = self.form.submit()
        except FormValidationError as e:
            self.messages.error(e.message)
            return Result.failure(e)

        result = self.state.boards.update_game_board(
            self.board_id,
            title=data.title,
            description=data.description,
            categories=data.categories,
            theme=data.theme,
        )
        if not result.ok:
            self.messages.error(result.message or "Failed to update game board")
            return result

        self.messages.success("Game board updated successfully!")
        self.state.drafts.clear_edit(self.board_id)
        self.state.navigator.navigate_later("/game-boards", EDIT_REDIRECT_DELAY)
        return result


def play_page(state: "AppState", board_id: str) -> PlayController:
    return PlayController(
        board_id=board_id,
        auth=state.auth,
        boards=state.boards,
        navigator=state.navigator,
        clock=state.clock,
    )
