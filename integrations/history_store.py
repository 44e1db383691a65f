"""
Persistence for user profiles and saved analyses.

Two interchangeable stores:
- MongoDataAPIStore: MongoDB Atlas Data API over HTTPS (requests)
- InMemoryHistoryStore: process-local fallback when no credentials are set

Records are scoped by an opaque user id handed over by the auth layer.
Saved analyses are immutable; they can only be listed or deleted.
"""

import copy
import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import requests

import envirosense_config as config
from env_indicators.errors import UpstreamError, ValidationError

logger = logging.getLogger(__name__)

REQUIRED_ANALYSIS_FIELDS = ("parameter", "geometry", "geometryType", "startDate", "endDate", "results")
REQUIRED_RESULT_FIELDS = ("timeSeries", "stats", "insights")
PROFILE_FIELDS = ("email", "fullName", "avatarUrl")


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _require_user(user_id: Optional[str]) -> str:
    if not user_id or not isinstance(user_id, str):
        raise ValidationError("Missing user identifier.")
    return user_id


def validate_analysis_record(record: Any) -> Dict[str, Any]:
    if not isinstance(record, dict):
        raise ValidationError("Analysis record must be an object.")
    missing = [f for f in REQUIRED_ANALYSIS_FIELDS if record.get(f) in (None, "")]
    if missing:
        raise ValidationError(f"Analysis record missing fields: {', '.join(missing)}")
    results = record["results"]
    if not isinstance(results, dict) or any(f not in results for f in REQUIRED_RESULT_FIELDS):
        raise ValidationError("Analysis results must include timeSeries, stats and insights.")
    return {f: record[f] for f in REQUIRED_ANALYSIS_FIELDS}


def _profile_fields(profile: Any) -> Dict[str, Any]:
    if not isinstance(profile, dict):
        raise ValidationError("Profile must be an object.")
    return {k: profile[k] for k in PROFILE_FIELDS if k in profile}


class HistoryStore:
    def upsert_profile(self, user_id: str, profile: Dict[str, Any]) -> Dict[str, Any]:
        raise NotImplementedError

    def get_profile(self, user_id: str) -> Optional[Dict[str, Any]]:
        raise NotImplementedError

    def save_analysis(self, user_id: str, record: Dict[str, Any]) -> Dict[str, Any]:
        raise NotImplementedError

    def list_analyses(self, user_id: str) -> List[Dict[str, Any]]:
        raise NotImplementedError

    def delete_analysis(self, user_id: str, analysis_id: str) -> bool:
        raise NotImplementedError


class InMemoryHistoryStore(HistoryStore):
    def __init__(self):
        self._profiles: Dict[str, Dict[str, Any]] = {}
        self._analyses: Dict[str, Dict[str, Any]] = {}

    def upsert_profile(self, user_id, profile):
        user_id = _require_user(user_id)
        fields = _profile_fields(profile)
        now = _now_iso()
        current = self._profiles.get(user_id) or {"userId": user_id, "createdAt": now}
        updated = dict(current, **fields, updatedAt=now)
        self._profiles[user_id] = updated
        return copy.deepcopy(updated)

    def get_profile(self, user_id):
        user_id = _require_user(user_id)
        profile = self._profiles.get(user_id)
        return copy.deepcopy(profile) if profile else None

    def save_analysis(self, user_id, record):
        user_id = _require_user(user_id)
        doc = validate_analysis_record(record)
        doc = copy.deepcopy(doc)
        doc.update({"_id": uuid.uuid4().hex, "userId": user_id, "createdAt": _now_iso()})
        self._analyses[doc["_id"]] = doc
        return copy.deepcopy(doc)

    def list_analyses(self, user_id):
        user_id = _require_user(user_id)
        # insertion order is creation order; newest first
        docs = [d for d in reversed(list(self._analyses.values())) if d["userId"] == user_id]
        return copy.deepcopy(docs)

    def delete_analysis(self, user_id, analysis_id):
        user_id = _require_user(user_id)
        doc = self._analyses.get(analysis_id)
        if not doc or doc["userId"] != user_id:
            return False
        del self._analyses[analysis_id]
        return True


class MongoDataAPIStore(HistoryStore):
    def __init__(
        self,
        api_key: str,
        app_id: str,
        data_source: str = "Cluster0",
        database: str = "envirosense",
        timeout: int = 10,
        session: Optional[requests.Session] = None,
    ):
        self.api_key = api_key
        self.base_url = f"https://data.mongodb-api.com/app/{app_id}/endpoint/data/v1"
        self.data_source = data_source
        self.database = database
        self.timeout = timeout
        self.session = session or requests.Session()

    def _call(self, action: str, collection: str, body: Dict[str, Any]) -> Dict[str, Any]:
        url = f"{self.base_url}/action/{action}"
        payload = {"dataSource": self.data_source, "database": self.database, "collection": collection}
        payload.update(body)

        logger.info(f"MongoDB Data API call: {action} on {collection}")
        try:
            resp = self.session.post(
                url,
                json=payload,
                headers={"Content-Type": "application/json", "api-key": self.api_key},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.error(f"MongoDB Data API unreachable: {e}")
            raise UpstreamError(f"MongoDB API unreachable: {e}")

        if not resp.ok:
            logger.error(f"MongoDB Data API error: {resp.status_code} - {resp.text}")
            raise UpstreamError(f"MongoDB API error: {resp.status_code} - {resp.text}")

        try:
            return resp.json()
        except ValueError:
            raise UpstreamError("MongoDB API returned a non-JSON response")

    def upsert_profile(self, user_id, profile):
        user_id = _require_user(user_id)
        fields = _profile_fields(profile)
        now = _now_iso()
        self._call("updateOne", config.PROFILES_COLLECTION, {
            "filter": {"userId": user_id},
            "update": {
                "$set": dict(fields, userId=user_id, updatedAt=now),
                "$setOnInsert": {"createdAt": now},
            },
            "upsert": True,
        })
        return dict(fields, userId=user_id, updatedAt=now)

    def get_profile(self, user_id):
        user_id = _require_user(user_id)
        result = self._call("findOne", config.PROFILES_COLLECTION, {"filter": {"userId": user_id}})
        return result.get("document")

    def save_analysis(self, user_id, record):
        user_id = _require_user(user_id)
        doc = validate_analysis_record(record)
        doc.update({"userId": user_id, "createdAt": _now_iso()})
        result = self._call("insertOne", config.HISTORY_COLLECTION, {"document": doc})
        return dict(doc, _id=result.get("insertedId"))

    def list_analyses(self, user_id):
        user_id = _require_user(user_id)
        result = self._call("find", config.HISTORY_COLLECTION, {
            "filter": {"userId": user_id},
            "sort": {"createdAt": -1},
        })
        return result.get("documents") or []

    def delete_analysis(self, user_id, analysis_id):
        user_id = _require_user(user_id)
        result = self._call("deleteOne", config.HISTORY_COLLECTION, {
            "filter": {"_id": {"$oid": analysis_id}, "userId": user_id},
        })
        return bool(result.get("deletedCount"))


def build_history_store() -> HistoryStore:
    if config.MONGODB_DATA_API_KEY and config.MONGODB_APP_ID:
        logger.info("Using MongoDB Data API history store.")
        return MongoDataAPIStore(
            api_key=config.MONGODB_DATA_API_KEY,
            app_id=config.MONGODB_APP_ID,
            data_source=config.MONGODB_DATA_SOURCE,
            database=config.MONGODB_DATABASE,
            timeout=config.MONGODB_TIMEOUT,
        )
    logger.warning("MongoDB Data API credentials not found; using in-memory history store.")
    return InMemoryHistoryStore()
