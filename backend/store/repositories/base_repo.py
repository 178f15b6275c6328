from dataclasses import dataclass
from typing import Iterator, List, Optional

from sqlalchemy import Table, delete, func, insert, select, update
from sqlalchemy.orm import Session
from sqlalchemy.sql import Select

from store.errors import ConflictingUpdateError, InvalidCriteriaError
from store.repositories.converter import ColumnConverter, converter as default_converter
from store.repositories.criteria import Criteria, CriteriaTranslator, where
from store.repositories.pagination import Direction, Pageable
from store.repositories.rowmapper import RowMapper
from store.utils.logs import get_logger

log = get_logger("store.repositories")

ENTITY_ALIAS = "e"


@dataclass(frozen=True)
class Association:
    """A many-to-one reached through a foreign key on the entity table."""

    table: Table
    alias: str
    prefix: str
    foreign_key: str
    attribute: str
    mapper: RowMapper


class EntityRepository:
    """
    SQL repository for one entity.

    Reads select the entity's columns labelled `e_<column>` and, when the
    entity has an association, LEFT OUTER JOIN the related table and label its
    columns under the association prefix. Rows are mapped back to entities
    lazily as the caller iterates.
    """

    entity_name: str = ""
    table: Table = None
    mapper_class = RowMapper

    def __init__(self, db: Session, converter: Optional[ColumnConverter] = None):
        self.db = db
        self.converter = converter or default_converter
        self.mapper = self.mapper_class(self.converter)
        self.entity_table = self.table.alias(ENTITY_ALIAS)
        self.association = self._association()
        self.association_table = (
            self.association.table.alias(self.association.alias)
            if self.association is not None
            else None
        )
        self.translator = CriteriaTranslator(
            self.entity_table, self.mapper.columns, self.converter
        )

    def _association(self) -> Optional[Association]:
        return None

    # --- query building ---

    def create_query(
        self, pageable: Optional[Pageable] = None, criteria: Optional[Criteria] = None
    ) -> Select:
        e = self.entity_table
        columns = self.mapper.select_columns(e, ENTITY_ALIAS)
        source = e
        if self.association is not None:
            a = self.association_table
            columns += self.association.mapper.select_columns(a, self.association.prefix)
            source = e.outerjoin(a, e.c[self.association.foreign_key] == a.c.id)

        stmt = select(*columns).select_from(source)
        clause = self.translator.translate(criteria)
        if clause is not None:
            stmt = stmt.where(clause)
        if pageable is not None:
            stmt = stmt.order_by(*self._order_by(pageable)).offset(pageable.offset).limit(pageable.size)
        return stmt

    def _order_by(self, pageable: Pageable) -> List:
        clauses = []
        for order in pageable.sort:
            try:
                col = self.translator.column(order.property)
            except InvalidCriteriaError:
                raise InvalidCriteriaError(f"Unknown sort property: {order.property!r}") from None
            clauses.append(col.desc() if order.direction is Direction.DESC else col.asc())
        return clauses

    def process(self, row):
        entity = self.mapper(row, ENTITY_ALIAS)
        if self.association is not None:
            related = self.association.mapper.map_optional(row, self.association.prefix)
            if related is not None:
                setattr(entity, self.association.attribute, related)
        return entity

    # --- reads ---

    def find_all(self, pageable: Optional[Pageable] = None) -> Iterator:
        return self.find_all_by(pageable, None)

    def find_all_by(
        self, pageable: Optional[Pageable] = None, criteria: Optional[Criteria] = None
    ) -> Iterator:
        stmt = self.create_query(pageable, criteria)
        return (self.process(row) for row in self.db.execute(stmt).mappings())

    def find_by_id(self, entity_id):
        stmt = self.create_query(criteria=where("id").is_(entity_id))
        row = self.db.execute(stmt).mappings().one_or_none()
        return self.process(row) if row is not None else None

    def exists_by_id(self, entity_id) -> bool:
        stmt = select(self.table.c.id).where(self.table.c.id == entity_id)
        return self.db.execute(stmt).first() is not None

    def count_all(self, criteria: Optional[Criteria] = None) -> int:
        stmt = select(func.count()).select_from(self.entity_table)
        clause = self.translator.translate(criteria)
        if clause is not None:
            stmt = stmt.where(clause)
        return self.db.execute(stmt).scalar_one()

    # --- writes ---

    def insert(self, entity):
        values = self.mapper.to_values(entity, include_id=entity.id is not None)
        result = self.db.execute(insert(self.table).values(**values))
        entity.id = result.inserted_primary_key[0]
        log.debug("Inserted %s id=%s", self.entity_name, entity.id)
        return entity

    def update(self, entity) -> int:
        values = self.mapper.to_values(entity)
        result = self.db.execute(
            update(self.table).where(self.table.c.id == entity.id).values(**values)
        )
        return result.rowcount

    def save(self, entity):
        if entity.id is None:
            return self.insert(entity)
        if self.update(entity) <= 0:
            log.warning("Update of %s id=%s matched no rows", self.entity_name, entity.id)
            raise ConflictingUpdateError(self.entity_name, entity.id)
        return entity

    def delete_by_id(self, entity_id) -> int:
        result = self.db.execute(delete(self.table).where(self.table.c.id == entity_id))
        return result.rowcount

    def delete_all(self) -> int:
        return self.db.execute(delete(self.table)).rowcount
