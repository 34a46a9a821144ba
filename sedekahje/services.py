"""Storage-backed operations on institutions."""

from __future__ import annotations

import logging

from .models import Institution

DATABASE_NAME = "sedekahje"
COLLECTION_NAME = "institutions"

logger = logging.getLogger(__name__)


class InstitutionNotFoundError(LookupError):
    """Raised when no institution has the requested slug."""

    def __init__(self, slug: str):
        self.slug = slug
        super().__init__("mongo: no documents in result")


class InstitutionService:
    """Create and look up institutions in a MongoDB collection."""

    def __init__(self, collection):
        self.collection = collection

    @classmethod
    def from_client(cls, client) -> InstitutionService:
        """Use the institutions collection of the given client's database."""
        return cls(client[DATABASE_NAME][COLLECTION_NAME])

    def create_institution(self, institution: Institution) -> None:
        """Store a new institution; storage errors propagate."""
        self.collection.insert_one(institution.to_dict())
        logger.info("Created institution %s", institution.name)

    def get_institutions(self) -> list[Institution]:
        """Return every stored institution."""
        return [Institution.from_dict(document) for document in self.collection.find({})]

    def get_institution_by_slug(self, slug: str) -> Institution:
        """Return the institution with ``slug`` or raise InstitutionNotFoundError."""
        document = self.collection.find_one({"slug": slug})
        if document is None:
            raise InstitutionNotFoundError(slug)
        return Institution.from_dict(document)