"""
MongoDB access for the Foodie API.

The connection lives in a DatabaseState object owned by the app (see
main.lifespan) instead of a module global, so route handlers receive the
database through the get_db dependency and tests can attach any client.
"""

import logging
import os
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional, Sequence

from bson import ObjectId
from bson.errors import InvalidId
from fastapi import Request
from pydantic import BaseModel
from pymongo import MongoClient
from pymongo.database import Database
from pymongo.errors import PyMongoError

from errors import ApiError, ErrorKind

log = logging.getLogger(__name__)

DEFAULT_DATABASE_NAME = "foodie"
DEFAULT_TIMEOUT_MS = 5000


class DatabaseState:
    """Datastore handle plus reachability, tied to the process lifecycle."""

    def __init__(self, url: Optional[str] = None, name: Optional[str] = None,
                 timeout_ms: int = DEFAULT_TIMEOUT_MS):
        self.url = url
        self.name = name or DEFAULT_DATABASE_NAME
        self.timeout_ms = timeout_ms
        self.client: Optional[MongoClient] = None
        self.db: Optional[Database] = None
        self.error: Optional[str] = None

    @classmethod
    def from_env(cls) -> "DatabaseState":
        return cls(
            url=os.getenv("DATABASE_URL"),
            name=os.getenv("DATABASE_NAME", DEFAULT_DATABASE_NAME),
            timeout_ms=int(os.getenv("DATABASE_TIMEOUT_MS", DEFAULT_TIMEOUT_MS)),
        )

    @property
    def connected(self) -> bool:
        return self.db is not None

    def connect(self) -> bool:
        if not self.url:
            self.error = "DATABASE_URL is not set"
            log.warning("No DATABASE_URL configured, running without a database")
            return False
        client = MongoClient(self.url, serverSelectionTimeoutMS=self.timeout_ms)
        try:
            client.admin.command("ping")
        except PyMongoError as e:
            client.close()
            self.error = str(e)
            log.error("MongoDB connection failed: %s", e)
            return False
        self.attach(client)
        log.info("Connected to MongoDB database %s", self.name)
        return True

    def attach(self, client: MongoClient) -> None:
        self.client = client
        self.db = client[self.name]
        self.error = None

    def close(self) -> None:
        if self.client is not None:
            self.client.close()
            log.info("MongoDB connection closed")
        self.client = None
        self.db = None

    def status(self) -> str:
        return "Connected" if self.connected else "Not Connected"


def get_db(request: Request) -> Database:
    state: DatabaseState = request.app.state.database
    if not state.connected:
        raise ApiError(
            ErrorKind.SERVICE_UNAVAILABLE,
            "Database not available",
            error="Add DATABASE_URL to your environment variables",
        )
    return state.db


# ---------- Document helpers ----------

def to_object_id(id_str: Any) -> ObjectId:
    if isinstance(id_str, ObjectId):
        return id_str
    try:
        return ObjectId(id_str)
    except (InvalidId, TypeError):
        raise ApiError(ErrorKind.BAD_REQUEST, "Invalid id format")


def _safe_object_id(value: Any) -> Optional[ObjectId]:
    try:
        return to_object_id(value)
    except ApiError:
        return None


def create_document(db: Database, collection_name: str, data) -> str:
    """Insert a model (or dict) stamped with createdAt/updatedAt; returns the new id."""
    if isinstance(data, BaseModel):
        doc = data.model_dump(by_alias=True)
    else:
        doc = dict(data)
    now = datetime.now(timezone.utc)
    doc["createdAt"] = now
    doc["updatedAt"] = now
    result = db[collection_name].insert_one(doc)
    return str(result.inserted_id)


def get_documents(db: Database, collection_name: str, filter_dict: Optional[dict] = None,
                  sort: Optional[Sequence] = None, limit: Optional[int] = None) -> List[dict]:
    cursor = db[collection_name].find(filter_dict or {})
    if sort:
        cursor = cursor.sort(list(sort))
    if limit:
        cursor = cursor.limit(limit)
    return list(cursor)


def serialize(doc: Optional[dict]) -> Optional[dict]:
    if not doc:
        return doc
    doc = dict(doc)
    if "_id" in doc:
        doc["id"] = str(doc.pop("_id"))
    return doc


# ---------- Expansion ----------

def fetch_refs(db: Database, collection_name: str, ids: Iterable[Any],
               fields: Sequence[str]) -> Dict[str, dict]:
    """Load the referenced documents in one query, projected to fields, keyed by id."""
    oids = {oid for oid in (_safe_object_id(i) for i in ids if i) if oid is not None}
    if not oids:
        return {}
    projection = {f: 1 for f in fields}
    found = db[collection_name].find({"_id": {"$in": list(oids)}}, projection)
    return {str(d["_id"]): serialize(d) for d in found}


def expand(db: Database, docs: List[dict], field: str, collection_name: str,
           fields: Sequence[str]) -> List[dict]:
    refs = fetch_refs(db, collection_name, (d.get(field) for d in docs), fields)
    for d in docs:
        ref = d.get(field)
        if ref is not None:
            d[field] = refs.get(str(ref))
    return docs


def expand_line_items(db: Database, docs: List[dict], fields: Sequence[str]) -> List[dict]:
    ids = [item.get("menuItem") for d in docs for item in d.get("items", [])]
    refs = fetch_refs(db, "menuitem", ids, fields)
    for d in docs:
        for item in d.get("items", []):
            ref = item.get("menuItem")
            if ref is not None:
                item["menuItem"] = refs.get(str(ref))
    return docs
