from app.client.models import GameBoard

PASSWORD = "secret-password"


def register(api, email: str, password: str = PASSWORD, **data):
    res = api.post("/api/v1/auth/sign-up", json={"email": email, "password": password, "data": data})
    assert res.status_code == 201, res.text
    return res.json()


def sign_in(api, email: str, password: str = PASSWORD):
    res = api.post("/api/v1/auth/sign-in", json={"email": email, "password": password})
    assert res.status_code == 200, res.text
    return res.json()


def auth_headers(session: dict) -> dict:
    return {"Authorization": f"Bearer {session['access_token']}"}


def board_payload(title: str = "Quiz Night", categories: int = 5) -> dict:
    return {
        "title": title,
        "description": "Test board",
        "categories": [
            {
                "name": f"Category {c}",
                "questions": [
                    {"points": (q + 1) * 100, "question": f"Q{c}.{q}", "answer": f"A{c}.{q}"}
                    for q in range(4)
                ],
            }
            for c in range(categories)
        ],
        "theme": {
            "name": "Classic Blue",
            "background_color": "#0f1419",
            "card_color": "#1e40af",
            "card_text_color": "#ffffff",
            "header_color": "#3b82f6",
            "header_text_color": "#ffffff",
            "title_color": "#60a5fa",
            "border_radius": 8,
        },
    }




def make_board(board_id: str = "board-1", categories: int = 5):
    """Plateau en mémoire, sans passer par le backend."""
    payload = board_payload(categories=categories)
    for c_idx, category in enumerate(payload["categories"]):
        category["id"] = f"c{c_idx}"
        for q_idx, question in enumerate(category["questions"]):
            question["id"] = f"c{c_idx}q{q_idx}"
    return GameBoard.model_validate(
        {
            **payload,
            "id": board_id,
            "user_id": "user-1",
            "created_at": "2024-01-01T00:00:00Z",
            "updated_at": "2024-01-01T00:00:00Z",
        }
    )
