class NotFoundError(Exception):
    """Raised by the storage layer when an id does not resolve to a row."""

    def __init__(self, entity, entity_id=None):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} not found")

    @property
    def message(self):
        return f"{self.entity} not found"
