from typing import Any, Generic, Optional, Sequence, Type, TypeVar
from sqlmodel import SQLModel, Session, select, func

from assetdesk.db.models.base import utcnow

# Type générique pour le modèle (User, Equipment, etc.)
ModelT = TypeVar("ModelT", bound=SQLModel)

class BaseRepository(Generic[ModelT]):
    """
    Repository de base pour les opérations CRUD standards.

    👉 Ne contient aucune logique métier.
    👉 Gère la persistance générique : create, read, update, delete, count, list.
    👉 Les repositories concrets définissent `model = MaClasseSQLModel`.
    """

    model: Type[ModelT]

    def __init__(self, session: Session):
        self.session = session

    # ---------- READ ----------

    def list(self, offset: int = 0, limit: Optional[int] = None) -> Sequence[ModelT]:
        """Retourne une liste (paginée si limit) des enregistrements, par id croissant."""
        statement = select(self.model).order_by(self.model.id).offset(offset)
        if limit is not None:
            statement = statement.limit(limit)
        return self.session.exec(statement).all()

    def list_where(self, *conditions) -> Sequence[ModelT]:
        """Retourne les enregistrements satisfaisant toutes les conditions."""
        statement = select(self.model)
        for condition in conditions:
            statement = statement.where(condition)
        return self.session.exec(statement.order_by(self.model.id)).all()

    def count(self, *conditions) -> int:
        """Retourne le nombre d’enregistrements (filtré si conditions)."""
        statement = select(func.count(self.model.id))
        for condition in conditions:
            statement = statement.where(condition)
        return int(self.session.exec(statement).one())

    def get(self, id_: Any) -> Optional[ModelT]:
        """Retourne un enregistrement par son identifiant, ou None."""
        return self.session.get(self.model, id_)

    def exists(self, id_: Any) -> bool:
        return self.get(id_) is not None

    def latest(self, *conditions, limit: int = 5, order_by=None) -> Sequence[ModelT]:
        """Les `limit` enregistrements les plus récents (created_at par défaut)."""
        column = order_by if order_by is not None else self.model.created_at
        statement = select(self.model)
        for condition in conditions:
            statement = statement.where(condition)
        statement = statement.order_by(column.desc(), self.model.id.desc()).limit(limit)
        return self.session.exec(statement).all()

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
        Met à jour un enregistrement existant.
        commit=False permet d'orchestrer une transaction globale au niveau service.
        """
        for key, value in changes.items():
            setattr(entity, key, value)
        if hasattr(entity, "updated_at"):
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
