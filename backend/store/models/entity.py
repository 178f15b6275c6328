class IdentityMixin:
    """
    Equality by primary key only. An entity without an id is equal to nothing
    but itself, so two unsaved records never collapse into one in a set.
    """

    def __eq__(self, other):
        if self is other:
            return True
        if not isinstance(other, type(self)):
            return False
        return self.id is not None and self.id == other.id

    def __hash__(self):
        # one hash per type, like the JPA getClass().hashCode() idiom: the id
        # changes on insert and the hash must stay stable across that
        return hash(type(self))
