from typing import Any, Dict, Iterator, Optional

from sqlalchemy.orm import Session

from store.errors import BadRequestAlertError, EntityNotFoundError
from store.repositories.base_repo import EntityRepository
from store.repositories.criteria import Criteria
from store.repositories.pagination import Pageable
from store.utils.logs import get_logger
from store.utils.transactions import smart_transaction

log = get_logger("store.services")


class EntityService:
    """
    CRUD use cases shared by every entity resource.

    Writes run inside `smart_transaction`; saved entities are read back
    through the repository so callers get the joined association.
    """

    entity_name: str = ""
    repository_class = EntityRepository

    def __init__(self, db: Session, repository: Optional[EntityRepository] = None):
        self.db = db
        self.repository = repository or self.repository_class(db)

    @property
    def label(self) -> str:
        return self.repository.entity_name

    # --- id checks done before touching storage ---

    def _check_new(self, entity) -> None:
        if entity.id is not None:
            raise BadRequestAlertError(
                f"A new {self.entity_name} cannot already have an ID",
                self.entity_name,
                "idexists",
            )

    def _check_existing(self, entity_id, body_id) -> None:
        if body_id is None:
            raise BadRequestAlertError("Invalid id", self.entity_name, "idnull")
        if entity_id != body_id:
            raise BadRequestAlertError("Invalid ID", self.entity_name, "idinvalid")
        if not self.repository.exists_by_id(entity_id):
            raise BadRequestAlertError("Entity not found", self.entity_name, "idnotfound")

    # --- use cases ---

    def save(self, entity):
        log.debug("Request to save %s : %s", self.label, entity)
        with smart_transaction(self.db):
            saved = self.repository.save(entity)
        return self.repository.find_by_id(saved.id)

    def create(self, entity):
        self._check_new(entity)
        return self.save(entity)

    def update(self, entity_id, entity):
        self._check_existing(entity_id, entity.id)
        return self.save(entity)

    def partial_update(self, entity_id, body_id, changes: Dict[str, Any]):
        log.debug("Request to partially update %s : %s, %s", self.label, entity_id, changes)
        self._check_existing(entity_id, body_id)
        with smart_transaction(self.db):
            existing = self.repository.find_by_id(entity_id)
            if existing is None:
                raise EntityNotFoundError(self.label, entity_id)
            for name, value in changes.items():
                if value is not None:
                    setattr(existing, name, value)
            self.repository.save(existing)
        return self.repository.find_by_id(entity_id)

    def find_all(self, pageable: Optional[Pageable] = None) -> Iterator:
        log.debug("Request to get all %ss", self.label)
        return self.repository.find_all(pageable)

    def find_all_by(
        self, pageable: Optional[Pageable] = None, criteria: Optional[Criteria] = None
    ) -> Iterator:
        log.debug("Request to get %ss by criteria : %s", self.label, criteria)
        return self.repository.find_all_by(pageable, criteria)

    def count_all(self, criteria: Optional[Criteria] = None) -> int:
        return self.repository.count_all(criteria)

    def find_one(self, entity_id):
        log.debug("Request to get %s : %s", self.label, entity_id)
        return self.repository.find_by_id(entity_id)

    def get_one(self, entity_id):
        entity = self.find_one(entity_id)
        if entity is None:
            raise EntityNotFoundError(self.label, entity_id)
        return entity

    def delete(self, entity_id) -> int:
        log.debug("Request to delete %s : %s", self.label, entity_id)
        with smart_transaction(self.db):
            return self.repository.delete_by_id(entity_id)
