from typing import Any, Dict, Generic, Optional, Type, TypeVar
from sqlmodel import SQLModel, Session

from app.db.models.base import utcnow

# Type générique pour le modèle (User, GameBoard, etc.)
ModelT = TypeVar("ModelT", bound=SQLModel)

class BaseRepository(Generic[ModelT]):
    """
    Repository de base pour les opérations CRUD standards.

    👉 Ne contient aucune logique métier.
    👉 Gère la persistance générique : create, read, update, delete.
    👉 Les repositories concrets définissent `model = MaClasseSQLModel`.
    """

    model: Type[ModelT]

    def __init__(self, session: Session):
        self.session = session

    # ---------- READ ----------

    def get(self, id_: Any) -> Optional[ModelT]:
        """Retourne un enregistrement par son identifiant, ou None."""
        return self.session.get(self.model, id_)

    def apply_filters(self, statement, filters: Dict[str, Any]):
        """Ajoute un `where colonne == valeur` par filtre d'égalité."""
        for column, value in filters.items():
            statement = statement.where(getattr(self.model, column) == value)
        return statement

    def apply_order(self, statement, order_by: Optional[str], descending: bool = True):
        if not order_by:
            return statement
        column = getattr(self.model, order_by)
        return statement.order_by(column.desc() if descending else column.asc())

    def apply_page(self, statement, offset: int = 0, limit: Optional[int] = None):
        """Sans `limit`, toutes les lignes à partir de `offset`."""
        statement = statement.offset(offset)
        if limit is not None:
            statement = statement.limit(limit)
        return statement

    # ---------- CREATE ----------

    def create(self, *, commit: bool = True, **fields) -> ModelT:
        """
        Crée et persiste un nouvel enregistrement.
        commit=False permet d'orchestrer une transaction globale au niveau service.
        """
        entity = self.model(**fields)
        self.session.add(entity)
        if commit:
            self.session.commit()
            self.session.refresh(entity)
        else:
            # flush pour obtenir l'ID sans commit (utile pour FKs)
            self.session.flush()
        return entity

    # ---------- UPDATE ----------

    def update(self, entity: ModelT, *, commit: bool = True, **changes) -> ModelT:
        """
        Met à jour un enregistrement existant (updated_at est rafraîchi).
        commit=False permet d'orchestrer une transaction globale au niveau service.
        """
        for key, value in changes.items():
            setattr(entity, key, value)
        if "updated_at" not in changes and hasattr(entity, "updated_at"):
            entity.updated_at = utcnow()
        self.session.add(entity)
        if commit:
            self.session.commit()
            self.session.refresh(entity)
        else:
            self.session.flush()
        return entity

    # ---------- DELETE ----------

    def delete(self, entity: ModelT, *, commit: bool = True) -> None:
        """
        Supprime un enregistrement.
        commit=False permet d'orchestrer une transaction globale au niveau service.
        """
        self.session.delete(entity)
        if commit:
            self.session.commit()
        else:
            self.session.flush()
