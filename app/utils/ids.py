import secrets
import string

_ALPHABET = string.ascii_lowercase + string.digits


def generate_id(length: int = 9) -> str:
    """
    Identifiant court, safe pour URL, pour les catégories/questions d'un plateau.
    Exemple: k3f9x0q1z
    """
    return "".join(secrets.choice(_ALPHABET) for _ in range(length))
