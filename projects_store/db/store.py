"""Connection-per-call access layer over a MongoDB database.

Every public coroutine opens its own client, performs exactly one request
against the named collection and closes the client again, whatever the
outcome. Raw documents are normalised (``_id`` becomes the string ``id``) and
validated against the pydantic schema the caller asks for before they are
returned. Failures come back as ``Err`` values, never as exceptions.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from functools import lru_cache
from typing import (
    Any,
    AsyncIterator,
    Awaitable,
    Callable,
    Dict,
    List,
    Mapping,
    Optional,
    Sequence,
    Type,
    TypeVar,
)

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection, AsyncIOMotorDatabase
from pydantic import BaseModel, TypeAdapter, ValidationError
from pymongo.errors import DuplicateKeyError, PyMongoError

from ..config import Settings, get_settings
from ..exceptions import (
    DuplicateKeyRepositoryError,
    NotFoundError,
    ParseError,
    RepositoryError,
    StoreError,
    WrongIdError,
)
from ..models.identifiers import decode_id
from ..result import Err, Result, err, ok

LOGGER = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)
T = TypeVar("T")

Query = Mapping[str, Any]

_IDENTITY_FIELDS = ("id", "_id")


@lru_cache(maxsize=None)
def _list_adapter(schema: Type[BaseModel]) -> TypeAdapter:
    return TypeAdapter(List[schema])  # type: ignore[valid-type]


class DocumentStore:
    """Thin MongoDB access layer shared by the entity repositories."""

    def __init__(self, settings: Optional[Settings] = None) -> None:
        settings = settings or get_settings()
        if not settings.mongo_uri:
            raise RuntimeError("Missing MONGO_CONNECTION_STRING env var")
        self._settings = settings

    def _create_client(self) -> AsyncIOMotorClient:
        settings = self._settings
        return AsyncIOMotorClient(
            settings.mongo_uri,
            serverSelectionTimeoutMS=settings.mongo_server_selection_timeout_ms,
            connectTimeoutMS=settings.mongo_connect_timeout_ms,
            socketTimeoutMS=settings.mongo_socket_timeout_ms,
            **({"directConnection": True} if settings.mongo_direct else {}),
        )

    @asynccontextmanager
    async def _connection(self) -> AsyncIterator[AsyncIOMotorDatabase]:
        client = self._create_client()
        try:
            yield client[self._settings.mongo_db]
        finally:
            client.close()
            LOGGER.debug("MongoDB connection closed")

    async def _run(
        self,
        operation: str,
        collection: str,
        fn: Callable[[AsyncIOMotorCollection], Awaitable[T]],
    ) -> Result[T, StoreError]:
        try:
            async with self._connection() as database:
                value = await fn(database[collection])
        except DuplicateKeyError as exc:
            LOGGER.debug("Duplicate key on %s into '%s': %s", operation, collection, exc)
            return err(DuplicateKeyRepositoryError(f"duplicate key in '{collection}'", cause=exc))
        except PyMongoError as exc:
            LOGGER.error("MongoDB %s on '%s' failed: %s", operation, collection, exc)
            return err(StoreError(f"{operation} on '{collection}' failed", cause=exc))
        except Exception as exc:
            LOGGER.exception("Unexpected failure during %s on '%s'", operation, collection)
            return err(StoreError("An unknown error occurred", cause=exc))
        return ok(value)

    @staticmethod
    def _normalise_query(query: Optional[Query]) -> Result[Dict[str, Any], RepositoryError]:
        """Translate a canonical ``id`` key into the native ``_id`` filter.

        A query carrying both ``id`` and ``_id`` is ambiguous and yields
        ``WrongIdError``; neither key silently wins.
        """

        normalised = dict(query or {})
        if "id" in normalised:
            if "_id" in normalised:
                return err(WrongIdError(normalised["id"]))
            decoded = decode_id(normalised.pop("id"))
            if isinstance(decoded, Err):
                return decoded
            normalised["_id"] = decoded.value
        return ok(normalised)

    @staticmethod
    def _transform_id(document: Mapping[str, Any]) -> Dict[str, Any]:
        normalised = dict(document)
        if "_id" in normalised:
            normalised["id"] = str(normalised.pop("_id"))
        return normalised

    async def insert_one(
        self,
        collection: str,
        document: Mapping[str, Any],
    ) -> Result[str, RepositoryError]:
        """Insert ``document`` and return the store-assigned id as a string."""

        # The driver writes the generated _id back into the mapping it is given
        payload = dict(document)
        result = await self._run("insert_one", collection, lambda coll: coll.insert_one(payload))
        if isinstance(result, Err):
            return result

        inserted_id = result.value.inserted_id
        if inserted_id is None:
            return err(StoreError(f"insert_one on '{collection}' failed to return the id"))
        return ok(str(inserted_id))

    async def get_one(
        self,
        collection: str,
        query: Query,
        schema: Type[ModelT],
    ) -> Result[ModelT, RepositoryError]:
        normalised = self._normalise_query(query)
        if isinstance(normalised, Err):
            return normalised

        result = await self._run("get_one", collection, lambda coll: coll.find_one(normalised.value))
        if isinstance(result, Err):
            return result
        if result.value is None:
            LOGGER.debug("No document in '%s' matched %s", collection, normalised.value)
            return err(NotFoundError("Document not found"))

        try:
            return ok(schema.model_validate(self._transform_id(result.value)))
        except ValidationError as exc:
            LOGGER.warning("Document in '%s' failed %s validation", collection, schema.__name__)
            return err(ParseError(exc))

    async def get_many(
        self,
        collection: str,
        schema: Type[ModelT],
        query: Optional[Query] = None,
    ) -> Result[List[ModelT], RepositoryError]:
        """Return every matching document in the store's natural order."""

        normalised = self._normalise_query(query)
        if isinstance(normalised, Err):
            return normalised

        result = await self._run(
            "get_many", collection, lambda coll: coll.find(normalised.value).to_list(None)
        )
        if isinstance(result, Err):
            return result

        documents = [self._transform_id(document) for document in result.value]
        try:
            return ok(_list_adapter(schema).validate_python(documents))
        except ValidationError as exc:
            LOGGER.warning("Documents in '%s' failed %s validation", collection, schema.__name__)
            return err(ParseError(exc))

    async def aggregate(
        self,
        collection: str,
        pipeline: Sequence[Mapping[str, Any]],
        schema: Type[ModelT],
    ) -> Result[List[ModelT], RepositoryError]:
        """Run ``pipeline`` and validate its output; the pipeline shapes its own fields."""

        stages = [dict(stage) for stage in pipeline]
        result = await self._run("aggregate", collection, lambda coll: coll.aggregate(stages).to_list(None))
        if isinstance(result, Err):
            return result

        try:
            return ok(_list_adapter(schema).validate_python(result.value))
        except ValidationError as exc:
            LOGGER.warning("Aggregation on '%s' failed %s validation", collection, schema.__name__)
            return err(ParseError(exc))

    async def update(
        self,
        collection: str,
        fields: Mapping[str, Any],
        query: Query,
    ) -> Result[None, RepositoryError]:
        """Merge ``fields`` into exactly one matching document; never upserts."""

        normalised = self._normalise_query(query)
        if isinstance(normalised, Err):
            return normalised

        updates = {key: value for key, value in fields.items() if key not in _IDENTITY_FIELDS}
        if updates:
            result = await self._run(
                "update",
                collection,
                lambda coll: coll.update_one(normalised.value, {"$set": updates}),
            )
            if isinstance(result, Err):
                return result
            matched = result.value.matched_count > 0
        else:
            # MongoDB rejects an empty $set; only check that the target exists
            result = await self._run(
                "update",
                collection,
                lambda coll: coll.find_one(normalised.value, projection={"_id": 1}),
            )
            if isinstance(result, Err):
                return result
            matched = result.value is not None

        if not matched:
            return err(NotFoundError("Document not found"))
        return ok(None)

    async def delete(self, collection: str, query: Query) -> Result[None, RepositoryError]:
        normalised = self._normalise_query(query)
        if isinstance(normalised, Err):
            return normalised

        result = await self._run("delete", collection, lambda coll: coll.delete_one(normalised.value))
        if isinstance(result, Err):
            return result
        if not result.value.deleted_count:
            return err(NotFoundError("Document not found"))
        return ok(None)

    async def remove_collection(self, collection: str) -> Result[None, RepositoryError]:
        """Drop ``collection`` entirely; dropping a missing collection succeeds."""

        result = await self._run("remove_collection", collection, lambda coll: coll.drop())
        if isinstance(result, Err):
            return result
        LOGGER.info("Dropped collection '%s'", collection)
        return ok(None)


__all__ = ["DocumentStore", "Query"]
