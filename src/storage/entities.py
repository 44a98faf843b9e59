"""
Entity persistence for surveys, tests and response records.

Entities are stored as JSON tagged with their entity type, so a key can be
loaded without knowing in advance what it holds. Every failure (missing
key, unreadable file, bad JSON, wrong entity type) surfaces as
StoreUnavailableError and leaves in-memory state untouched.
"""

from __future__ import annotations

from pathlib import PurePath
from typing import Annotated, TypeVar, Union

from loguru import logger
from pydantic import Field, TypeAdapter, ValidationError

from src.core.errors import StoreUnavailableError
from src.surveys import ResponseSet, Survey, Test, response_prefix

from .store import BlobStore

Entity = Annotated[Union[Survey, Test, ResponseSet], Field(discriminator="entity")]
ENTITY_ADAPTER: TypeAdapter[Entity] = TypeAdapter(Entity)

E = TypeVar("E", Survey, Test, ResponseSet)


class EntityStore:
    """
    Save/load entities through a blob store.

    Usage:
        store = EntityStore(DirectoryBlobStore(Path("data/surveys")))
        key = store.save(survey, survey.file_name())
        survey = store.load(key, Survey)
    """

    def __init__(self, blobs: BlobStore):
        self.blobs = blobs

    def save(self, entity: Survey | Test | ResponseSet, key: str) -> str:
        """Serialize `entity` under `key` and return the key."""
        data = entity.model_dump_json(indent=2).encode("utf-8")
        try:
            self.blobs.put(key, data)
        except (OSError, KeyError) as e:
            raise StoreUnavailableError(f"Failed to save {key}: {e}", key=key) from e
        logger.info(f"Saved {entity.entity} '{self._label(entity)}' to {key}")
        return key

    def load(self, key: str, expected: type[E] | None = None) -> E:
        """
        Load the entity stored under `key`.

        Args:
            key: Store key (file name for directory stores)
            expected: Entity class the caller needs; anything else is an error
        """
        try:
            data = self.blobs.get(key)
        except (OSError, KeyError) as e:
            raise StoreUnavailableError(f"Failed to load {key}: {e}", key=key) from e

        try:
            entity = ENTITY_ADAPTER.validate_json(data)
        except ValidationError as e:
            raise StoreUnavailableError(
                f"{key} does not contain a valid survey, test or response", key=key
            ) from e

        if expected is not None and not isinstance(entity, expected):
            raise StoreUnavailableError(
                f"{key} does not contain a {expected.__name__}", key=key
            )
        logger.debug(f"Loaded {entity.entity} from {key}")
        return entity

    def keys(self, suffix: str = "") -> list[str]:
        return [key for key in self.blobs.keys() if key.endswith(suffix)]

    def save_response(self, response: ResponseSet, extension: str = ".resp") -> str:
        """Save a response under its conventional name, never overwriting."""
        key = response.file_name(extension)
        if self.blobs.exists(key):
            stem = PurePath(key).stem
            n = 1
            while self.blobs.exists(f"{stem}-{n}{extension}"):
                n += 1
            key = f"{stem}-{n}{extension}"
        return self.save(response, key)

    def load_responses(self, subject_name: str) -> list[ResponseSet]:
        """
        Load every response whose key starts with the subject's sanitized name.

        Files that cannot be loaded are skipped. The name match is a
        best-effort association: different names can sanitize alike.
        """
        responses = []
        for key in self.blobs.keys(response_prefix(subject_name)):
            try:
                responses.append(self.load(key, ResponseSet))
            except StoreUnavailableError as e:
                logger.warning(f"Skipping response {key}: {e}")
        return responses

    @staticmethod
    def _label(entity: Survey | Test | ResponseSet) -> str:
        if isinstance(entity, ResponseSet):
            return entity.subject_name
        return entity.name
