class StoreError(Exception):
    pass


class EntityNotFoundError(StoreError):
    def __init__(self, entity_name: str, entity_id):
        super().__init__(f"{entity_name} with id = {entity_id} not found")
        self.entity_name = entity_name
        self.entity_id = entity_id


class BadRequestAlertError(StoreError):
    """
    A request the caller can fix: unexpected id on create, id missing,
    path/body id mismatch, or updating an id that does not exist.
    `error_key` ends up in the `X-<app>-error` header as `error.<key>`.
    """

    def __init__(self, message: str, entity_name: str, error_key: str):
        super().__init__(message)
        self.entity_name = entity_name
        self.error_key = error_key


class ConflictingUpdateError(StoreError):
    """An update matched zero rows: the entity vanished concurrently."""

    def __init__(self, entity_name: str, entity_id):
        super().__init__(f"Unable to update {entity_name} with id = {entity_id}")
        self.entity_name = entity_name
        self.entity_id = entity_id


class InvalidCriteriaError(StoreError):
    pass
