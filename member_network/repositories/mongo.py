"""
Document storage - pymongo collections.

Same contract as SqlStorage; used when STORAGE_BACKEND=mongo.
"""

from typing import Iterable, List, Optional

from pymongo import ASCENDING, DESCENDING
from pymongo.database import Database

from member_network.db.mongodb import COLLECTIONS, init_mongo_indexes, test_mongo_connection
from member_network.repositories.base import (
    OPPORTUNITY_FIELDS, USER_FIELDS, Storage, new_id, pick, plain, utcnow,
)

CONTENT_FIELDS = {
    "leaders": ("name", "title", "bio", "image_url", "linkedin_url", "order", "visible"),
    "gallery_images": ("title", "description", "image_url", "category", "event_date", "order", "visible"),
    "videos": ("title", "description", "youtube_id", "thumbnail_url", "published_at",
               "featured", "visible", "order"),
}


def serialize_doc(doc: Optional[dict]) -> Optional[dict]:
    """Rename _id to id so documents look like relational rows."""
    if doc is None:
        return None
    doc = dict(doc)
    doc["id"] = doc.pop("_id")
    return doc


def serialize_docs(docs) -> List[dict]:
    return [serialize_doc(doc) for doc in docs]


class MongoStorage(Storage):

    def __init__(self, db: Database):
        self.db = db
        self.users = db[COLLECTIONS["users"]]
        self.opportunities = db[COLLECTIONS["opportunities"]]
        self.applications = db[COLLECTIONS["applications"]]
        self.interests = db[COLLECTIONS["interests"]]

    def init(self) -> None:
        init_mongo_indexes(self.db)

    def ping(self) -> bool:
        return test_mongo_connection(self.db.client)

    # ============================================================
    # USERS
    # ============================================================

    def create_user(self, email, password_hash, display_name=None, roles=(),
                    approval_status="pending", profile_completed=False) -> dict:
        now = utcnow()
        doc = {
            "_id": new_id(),
            "email": email.lower(),
            "password_hash": password_hash,
            "display_name": display_name,
            "is_active": True,
            "approval_status": plain(approval_status),
            "profile_completed": profile_completed,
            "roles": list(dict.fromkeys(plain(list(roles)))),
            "languages": [],
            "role_data": {},
            "created_at": now,
            "updated_at": now,
            "last_login": None,
        }
        self.users.insert_one(doc)
        return serialize_doc(doc)

    def get_user(self, user_id) -> Optional[dict]:
        return serialize_doc(self.users.find_one({"_id": user_id}))

    def get_user_by_email(self, email) -> Optional[dict]:
        return serialize_doc(self.users.find_one({"email": email.lower()}))

    def update_user(self, user_id, roles: Iterable = None, **fields) -> Optional[dict]:
        values = pick(fields, USER_FIELDS)
        if roles is not None:
            values["roles"] = list(dict.fromkeys(plain(list(roles))))
        values["updated_at"] = utcnow()
        result = self.users.update_one({"_id": user_id}, {"$set": values})
        if result.matched_count == 0:
            return None
        return self.get_user(user_id)

    def set_user_roles(self, user_id, roles: Iterable) -> Optional[dict]:
        values = {"roles": list(dict.fromkeys(plain(list(roles)))), "updated_at": utcnow()}
        result = self.users.update_one({"_id": user_id}, {"$set": values})
        if result.matched_count == 0:
            return None
        return self.get_user(user_id)

    def list_users(self, approval_status=None, role=None, profile_completed=None) -> List[dict]:
        query = {}
        if approval_status:
            query["approval_status"] = plain(approval_status)
        if role:
            query["roles"] = plain(role)
        if profile_completed is not None:
            query["profile_completed"] = profile_completed
        return serialize_docs(self.users.find(query).sort("created_at", DESCENDING))

    def delete_user(self, user_id) -> bool:
        owned = [doc["_id"] for doc in self.opportunities.find({"user_id": user_id}, {"_id": 1})]
        for collection in (self.applications, self.interests):
            collection.delete_many({"opportunity_id": {"$in": owned}})
            collection.delete_many({"user_id": user_id})
        self.opportunities.delete_many({"user_id": user_id})
        return self.users.delete_one({"_id": user_id}).deleted_count > 0

    def user_stats(self) -> dict:
        from member_network.services.roles import ROLE_DEFINITIONS

        stats = {"total_users": self.users.count_documents({})}
        for status, key in (("pending", "pending_approvals"), ("approved", "approved"), ("rejected", "rejected")):
            stats[key] = self.users.count_documents({"profile_completed": True, "approval_status": status})
        for role in ROLE_DEFINITIONS:
            stats[role.value] = self.users.count_documents({"roles": role.value})
        return stats

    # ============================================================
    # OPPORTUNITIES
    # ============================================================

    def create_opportunity(self, user_id, data: dict) -> dict:
        now = utcnow()
        doc = pick(data, OPPORTUNITY_FIELDS)
        doc.setdefault("status", "open")
        doc.setdefault("approval_status", "pending")
        doc["details"] = doc.get("details") or {}
        doc.update(_id=new_id(), user_id=user_id, created_at=now, updated_at=now)
        self.opportunities.insert_one(doc)
        return serialize_doc(doc)

    def get_opportunity(self, opportunity_id) -> Optional[dict]:
        return serialize_doc(self.opportunities.find_one({"_id": opportunity_id}))

    def list_opportunities(self, user_id=None, type=None, status=None, approval_status=None) -> List[dict]:
        query = {}
        if user_id:
            query["user_id"] = user_id
        if type:
            query["type"] = plain(type)
        if status:
            query["status"] = plain(status)
        if approval_status:
            query["approval_status"] = plain(approval_status)
        return serialize_docs(self.opportunities.find(query).sort("created_at", DESCENDING))

    def update_opportunity(self, opportunity_id, **fields) -> Optional[dict]:
        values = pick(fields, OPPORTUNITY_FIELDS)
        values["updated_at"] = utcnow()
        result = self.opportunities.update_one({"_id": opportunity_id}, {"$set": values})
        if result.matched_count == 0:
            return None
        return self.get_opportunity(opportunity_id)

    def delete_opportunity(self, opportunity_id) -> bool:
        self.applications.delete_many({"opportunity_id": opportunity_id})
        self.interests.delete_many({"opportunity_id": opportunity_id})
        return self.opportunities.delete_one({"_id": opportunity_id}).deleted_count > 0

    # ============================================================
    # APPLICATIONS
    # ============================================================

    def _with_names(self, doc: Optional[dict]) -> Optional[dict]:
        """Attach the opportunity title and applicant name/email."""
        if doc is None:
            return None
        record = serialize_doc(doc)
        opportunity = self.opportunities.find_one({"_id": record["opportunity_id"]}, {"title": 1})
        user = self.users.find_one({"_id": record["user_id"]}, {"full_name": 1, "email": 1})
        record["opportunity_title"] = opportunity["title"] if opportunity else None
        record["applicant_name"] = user.get("full_name") if user else None
        record["applicant_email"] = user.get("email") if user else None
        return record

    def create_application(self, user_id, opportunity_id, cover_letter=None, resume=None) -> dict:
        now = utcnow()
        doc = {
            "_id": new_id(),
            "user_id": user_id,
            "opportunity_id": opportunity_id,
            "status": "applied",
            "cover_letter": cover_letter,
            "resume": resume,
            "created_at": now,
            "updated_at": now,
        }
        self.applications.insert_one(doc)
        return self._with_names(doc)

    def get_application(self, application_id) -> Optional[dict]:
        return self._with_names(self.applications.find_one({"_id": application_id}))

    def find_application(self, user_id, opportunity_id) -> Optional[dict]:
        return self._with_names(self.applications.find_one(
            {"user_id": user_id, "opportunity_id": opportunity_id}
        ))

    def list_applications(self, user_id=None, opportunity_id=None) -> List[dict]:
        query = {}
        if user_id:
            query["user_id"] = user_id
        if opportunity_id:
            query["opportunity_id"] = opportunity_id
        cursor = self.applications.find(query).sort("created_at", DESCENDING)
        return [self._with_names(doc) for doc in cursor]

    def update_application_status(self, application_id, status) -> Optional[dict]:
        result = self.applications.update_one(
            {"_id": application_id},
            {"$set": {"status": plain(status), "updated_at": utcnow()}}
        )
        if result.matched_count == 0:
            return None
        return self.get_application(application_id)

    # ============================================================
    # INVESTOR INTERESTS
    # ============================================================

    def create_interest(self, user_id, opportunity_id, message=None,
                        contact_email=None, contact_phone=None) -> dict:
        doc = {
            "_id": new_id(),
            "user_id": user_id,
            "opportunity_id": opportunity_id,
            "message": message,
            "contact_email": contact_email,
            "contact_phone": contact_phone,
            "created_at": utcnow(),
        }
        self.interests.insert_one(doc)
        return serialize_doc(doc)

    def find_interest(self, user_id, opportunity_id) -> Optional[dict]:
        return serialize_doc(self.interests.find_one({"user_id": user_id, "opportunity_id": opportunity_id}))

    def list_interests(self, opportunity_id) -> List[dict]:
        return serialize_docs(
            self.interests.find({"opportunity_id": opportunity_id}).sort("created_at", DESCENDING)
        )

    # ============================================================
    # STATIC CONTENT
    # ============================================================

    def create_content(self, kind, data: dict) -> dict:
        doc = pick(data, CONTENT_FIELDS[kind])
        doc.update(_id=new_id(), created_at=utcnow())
        self.db[COLLECTIONS[kind]].insert_one(doc)
        return serialize_doc(doc)

    def get_content(self, kind, item_id) -> Optional[dict]:
        return serialize_doc(self.db[COLLECTIONS[kind]].find_one({"_id": item_id}))

    def list_content(self, kind, include_hidden=False) -> List[dict]:
        query = {} if include_hidden else {"visible": True}
        cursor = self.db[COLLECTIONS[kind]].find(query).sort([("order", ASCENDING), ("created_at", ASCENDING)])
        return serialize_docs(cursor)

    def update_content(self, kind, item_id, **fields) -> Optional[dict]:
        values = pick(fields, CONTENT_FIELDS[kind])
        collection = self.db[COLLECTIONS[kind]]
        if values:
            result = collection.update_one({"_id": item_id}, {"$set": values})
            if result.matched_count == 0:
                return None
        return self.get_content(kind, item_id)

    def delete_content(self, kind, item_id) -> bool:
        return self.db[COLLECTIONS[kind]].delete_one({"_id": item_id}).deleted_count > 0
