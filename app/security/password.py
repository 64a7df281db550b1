import bcrypt

# bcrypt ignore (ou refuse) tout ce qui dépasse 72 octets
MAX_PASSWORD_BYTES = 72


def hash_password(password: str) -> str:
    """Hash bcrypt (sel inclus) sous forme de str, stockable tel quel."""
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, hashed_password: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), hashed_password.encode("utf-8"))
    except ValueError:
        # hash corrompu ou mot de passe trop long
        return False
