"""
Relational storage - SQLAlchemy Core over PostgreSQL (or SQLite in tests).
"""

from typing import Iterable, List, Optional

from sqlalchemy import delete, insert, select, text, update
from sqlalchemy.engine import Engine

from member_network.db.sql import make_session_factory, session_scope, test_sql_connection
from member_network.db.tables import (
    CONTENT_TABLES, applications, investor_interests, metadata, opportunities, user_roles, users,
)
from member_network.repositories.base import (
    OPPORTUNITY_FIELDS, USER_FIELDS, Storage, new_id, pick, plain, utcnow,
)


def _row(row) -> Optional[dict]:
    return dict(row._mapping) if row is not None else None


class SqlStorage(Storage):

    def __init__(self, engine: Engine):
        self.engine = engine
        self.session_factory = make_session_factory(engine)

    def _session(self):
        return session_scope(self.session_factory)

    def init(self) -> None:
        metadata.create_all(self.engine)

    def ping(self) -> bool:
        return test_sql_connection(self.engine)

    # ============================================================
    # USERS
    # ============================================================

    def _with_roles(self, db, rows) -> List[dict]:
        records = [_row(r) for r in rows]
        if not records:
            return records
        ids = [r["id"] for r in records]
        role_rows = db.execute(select(user_roles).where(user_roles.c.user_id.in_(ids))).fetchall()
        by_user = {}
        for role_row in role_rows:
            by_user.setdefault(role_row.user_id, []).append(role_row.role)
        for record in records:
            record["roles"] = by_user.get(record["id"], [])
            record["languages"] = record.get("languages") or []
            record["role_data"] = record.get("role_data") or {}
        return records

    def _fetch_user(self, db, clause) -> Optional[dict]:
        row = db.execute(select(users).where(clause)).fetchone()
        if row is None:
            return None
        return self._with_roles(db, [row])[0]

    def create_user(self, email, password_hash, display_name=None, roles=(),
                    approval_status="pending", profile_completed=False) -> dict:
        user_id = new_id()
        now = utcnow()
        with self._session() as db:
            db.execute(insert(users).values(
                id=user_id, email=email.lower(), password_hash=password_hash, display_name=display_name,
                is_active=True, approval_status=plain(approval_status),
                profile_completed=profile_completed, languages=[], role_data={},
                created_at=now, updated_at=now,
            ))
            for role in dict.fromkeys(plain(list(roles))):
                db.execute(insert(user_roles).values(user_id=user_id, role=role))
            return self._fetch_user(db, users.c.id == user_id)

    def get_user(self, user_id) -> Optional[dict]:
        with self._session() as db:
            return self._fetch_user(db, users.c.id == user_id)

    def get_user_by_email(self, email) -> Optional[dict]:
        with self._session() as db:
            return self._fetch_user(db, users.c.email == email.lower())

    def update_user(self, user_id, roles: Iterable = None, **fields) -> Optional[dict]:
        values = pick(fields, USER_FIELDS)
        values["updated_at"] = utcnow()
        with self._session() as db:
            result = db.execute(update(users).where(users.c.id == user_id).values(**values))
            if result.rowcount == 0:
                return None
            if roles is not None:
                self._replace_roles(db, user_id, roles)
            return self._fetch_user(db, users.c.id == user_id)

    def set_user_roles(self, user_id, roles: Iterable) -> Optional[dict]:
        with self._session() as db:
            result = db.execute(update(users).where(users.c.id == user_id).values(updated_at=utcnow()))
            if result.rowcount == 0:
                return None
            self._replace_roles(db, user_id, roles)
            return self._fetch_user(db, users.c.id == user_id)

    @staticmethod
    def _replace_roles(db, user_id, roles: Iterable):
        db.execute(delete(user_roles).where(user_roles.c.user_id == user_id))
        for role in dict.fromkeys(plain(list(roles))):
            db.execute(insert(user_roles).values(user_id=user_id, role=role))

    def list_users(self, approval_status=None, role=None, profile_completed=None) -> List[dict]:
        stmt = select(users)
        if approval_status:
            stmt = stmt.where(users.c.approval_status == plain(approval_status))
        if role:
            stmt = stmt.where(users.c.id.in_(
                select(user_roles.c.user_id).where(user_roles.c.role == plain(role))
            ))
        if profile_completed is not None:
            stmt = stmt.where(users.c.profile_completed == profile_completed)
        stmt = stmt.order_by(users.c.created_at.desc())
        with self._session() as db:
            return self._with_roles(db, db.execute(stmt).fetchall())

    def delete_user(self, user_id) -> bool:
        with self._session() as db:
            owned = select(opportunities.c.id).where(opportunities.c.user_id == user_id)
            for table in (applications, investor_interests):
                db.execute(delete(table).where(table.c.opportunity_id.in_(owned)))
                db.execute(delete(table).where(table.c.user_id == user_id))
            db.execute(delete(opportunities).where(opportunities.c.user_id == user_id))
            db.execute(delete(user_roles).where(user_roles.c.user_id == user_id))
            result = db.execute(delete(users).where(users.c.id == user_id))
            return result.rowcount > 0

    def user_stats(self) -> dict:
        with self._session() as db:
            total = db.execute(text("SELECT COUNT(*) FROM users")).scalar()
            by_status = dict(db.execute(text("""
                SELECT approval_status, COUNT(*) FROM users
                WHERE profile_completed = :done
                GROUP BY approval_status
            """), {"done": True}).fetchall())
            by_role = dict(db.execute(text(
                "SELECT role, COUNT(*) FROM user_roles GROUP BY role"
            )).fetchall())
        stats = {
            "total_users": total,
            "pending_approvals": by_status.get("pending", 0),
            "approved": by_status.get("approved", 0),
            "rejected": by_status.get("rejected", 0),
        }
        stats.update(by_role)
        return stats

    # ============================================================
    # OPPORTUNITIES
    # ============================================================

    def create_opportunity(self, user_id, data: dict) -> dict:
        opportunity_id = new_id()
        now = utcnow()
        values = pick(data, OPPORTUNITY_FIELDS)
        values.setdefault("status", "open")
        values.setdefault("approval_status", "pending")
        values["details"] = values.get("details") or {}
        with self._session() as db:
            db.execute(insert(opportunities).values(
                id=opportunity_id, user_id=user_id, created_at=now, updated_at=now, **values
            ))
            return _row(db.execute(
                select(opportunities).where(opportunities.c.id == opportunity_id)
            ).fetchone())

    def get_opportunity(self, opportunity_id) -> Optional[dict]:
        with self._session() as db:
            return _row(db.execute(
                select(opportunities).where(opportunities.c.id == opportunity_id)
            ).fetchone())

    def list_opportunities(self, user_id=None, type=None, status=None, approval_status=None) -> List[dict]:
        stmt = select(opportunities)
        if user_id:
            stmt = stmt.where(opportunities.c.user_id == user_id)
        if type:
            stmt = stmt.where(opportunities.c.type == plain(type))
        if status:
            stmt = stmt.where(opportunities.c.status == plain(status))
        if approval_status:
            stmt = stmt.where(opportunities.c.approval_status == plain(approval_status))
        stmt = stmt.order_by(opportunities.c.created_at.desc())
        with self._session() as db:
            return [_row(r) for r in db.execute(stmt).fetchall()]

    def update_opportunity(self, opportunity_id, **fields) -> Optional[dict]:
        values = pick(fields, OPPORTUNITY_FIELDS)
        values["updated_at"] = utcnow()
        with self._session() as db:
            result = db.execute(
                update(opportunities).where(opportunities.c.id == opportunity_id).values(**values)
            )
            if result.rowcount == 0:
                return None
            return _row(db.execute(
                select(opportunities).where(opportunities.c.id == opportunity_id)
            ).fetchone())

    def delete_opportunity(self, opportunity_id) -> bool:
        with self._session() as db:
            for table in (applications, investor_interests):
                db.execute(delete(table).where(table.c.opportunity_id == opportunity_id))
            result = db.execute(delete(opportunities).where(opportunities.c.id == opportunity_id))
            return result.rowcount > 0

    # ============================================================
    # APPLICATIONS
    # ============================================================

    def _application_query(self):
        return (
            select(
                applications,
                opportunities.c.title.label("opportunity_title"),
                users.c.full_name.label("applicant_name"),
                users.c.email.label("applicant_email"),
            )
            .select_from(
                applications
                .join(opportunities, applications.c.opportunity_id == opportunities.c.id)
                .join(users, applications.c.user_id == users.c.id)
            )
        )

    def create_application(self, user_id, opportunity_id, cover_letter=None, resume=None) -> dict:
        application_id = new_id()
        now = utcnow()
        with self._session() as db:
            db.execute(insert(applications).values(
                id=application_id, user_id=user_id, opportunity_id=opportunity_id,
                status="applied", cover_letter=cover_letter, resume=resume,
                created_at=now, updated_at=now,
            ))
            return _row(db.execute(
                self._application_query().where(applications.c.id == application_id)
            ).fetchone())

    def get_application(self, application_id) -> Optional[dict]:
        with self._session() as db:
            return _row(db.execute(
                self._application_query().where(applications.c.id == application_id)
            ).fetchone())

    def find_application(self, user_id, opportunity_id) -> Optional[dict]:
        with self._session() as db:
            return _row(db.execute(
                self._application_query().where(
                    applications.c.user_id == user_id,
                    applications.c.opportunity_id == opportunity_id,
                )
            ).fetchone())

    def list_applications(self, user_id=None, opportunity_id=None) -> List[dict]:
        stmt = self._application_query()
        if user_id:
            stmt = stmt.where(applications.c.user_id == user_id)
        if opportunity_id:
            stmt = stmt.where(applications.c.opportunity_id == opportunity_id)
        stmt = stmt.order_by(applications.c.created_at.desc())
        with self._session() as db:
            return [_row(r) for r in db.execute(stmt).fetchall()]

    def update_application_status(self, application_id, status) -> Optional[dict]:
        with self._session() as db:
            result = db.execute(
                update(applications)
                .where(applications.c.id == application_id)
                .values(status=plain(status), updated_at=utcnow())
            )
            if result.rowcount == 0:
                return None
            return _row(db.execute(
                self._application_query().where(applications.c.id == application_id)
            ).fetchone())

    # ============================================================
    # INVESTOR INTERESTS
    # ============================================================

    def create_interest(self, user_id, opportunity_id, message=None,
                        contact_email=None, contact_phone=None) -> dict:
        interest_id = new_id()
        with self._session() as db:
            db.execute(insert(investor_interests).values(
                id=interest_id, user_id=user_id, opportunity_id=opportunity_id,
                message=message, contact_email=contact_email, contact_phone=contact_phone,
                created_at=utcnow(),
            ))
            return _row(db.execute(
                select(investor_interests).where(investor_interests.c.id == interest_id)
            ).fetchone())

    def find_interest(self, user_id, opportunity_id) -> Optional[dict]:
        with self._session() as db:
            return _row(db.execute(
                select(investor_interests).where(
                    investor_interests.c.user_id == user_id,
                    investor_interests.c.opportunity_id == opportunity_id,
                )
            ).fetchone())

    def list_interests(self, opportunity_id) -> List[dict]:
        stmt = (
            select(investor_interests)
            .where(investor_interests.c.opportunity_id == opportunity_id)
            .order_by(investor_interests.c.created_at.desc())
        )
        with self._session() as db:
            return [_row(r) for r in db.execute(stmt).fetchall()]

    # ============================================================
    # STATIC CONTENT
    # ============================================================

    def create_content(self, kind, data: dict) -> dict:
        table = CONTENT_TABLES[kind]
        item_id = new_id()
        values = pick(data, table.c.keys())
        values.update(id=item_id, created_at=utcnow())
        with self._session() as db:
            db.execute(insert(table).values(**values))
            return _row(db.execute(select(table).where(table.c.id == item_id)).fetchone())

    def get_content(self, kind, item_id) -> Optional[dict]:
        table = CONTENT_TABLES[kind]
        with self._session() as db:
            return _row(db.execute(select(table).where(table.c.id == item_id)).fetchone())

    def list_content(self, kind, include_hidden=False) -> List[dict]:
        table = CONTENT_TABLES[kind]
        stmt = select(table)
        if not include_hidden:
            stmt = stmt.where(table.c.visible.is_(True))
        stmt = stmt.order_by(table.c.order, table.c.created_at)
        with self._session() as db:
            return [_row(r) for r in db.execute(stmt).fetchall()]

    def update_content(self, kind, item_id, **fields) -> Optional[dict]:
        table = CONTENT_TABLES[kind]
        values = pick(fields, set(table.c.keys()) - {"id", "created_at"})
        with self._session() as db:
            if values:
                result = db.execute(update(table).where(table.c.id == item_id).values(**values))
                if result.rowcount == 0:
                    return None
            return _row(db.execute(select(table).where(table.c.id == item_id)).fetchone())

    def delete_content(self, kind, item_id) -> bool:
        table = CONTENT_TABLES[kind]
        with self._session() as db:
            result = db.execute(delete(table).where(table.c.id == item_id))
            return result.rowcount > 0
