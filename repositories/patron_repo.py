"""
repositories/patron_repo.py
---------------------------
Data access layer for enrolled members.
All SQL related to the `patrons` table lives here.
"""

from models.filters import PatronFilters
from models.patron import Patron
from query.builder import QueryBuilder
from repositories.base import Repository


class PatronRepository(Repository[Patron]):
    """Repository for CRUD operations on the patrons table, ordered by full name."""

    entity_name = "patron"
    table = "patrons"
    filters_type = PatronFilters
    sort_key = "(p.firstname || p.lastname)"
    columns = (
        "id", "memberid", "firstname", "lastname", "address", "primaryphone",
        "secondaryphone", "email", "enrollmentdate", "lastupdatedate", "lastupdatebyid",
    )

    def _select_template(self) -> str:
        return f"""
            SELECT
                p.id,
                p.memberid,
                p.firstname,
                p.lastname,
                p.address,
                p.primaryphone,
                p.secondaryphone,
                p.email,
                p.enrollmentdate,
                p.lastupdatedate,
                p.lastupdatebyid,
                {self.audit.display("lastupdateby")}
            FROM patrons p
            {self.audit.join("p", "lastupdatebyid")}
            /**where**/
        """

    def _apply_filters(self, builder: QueryBuilder, f: PatronFilters) -> None:
        (
            builder
            .equals("p.id", f.id)
            .equals("p.memberid", f.member_id)
            .equals("p.firstname", f.first_name)
            .equals("p.lastname", f.last_name)
            .equals("p.address", f.address)
            .equals("p.primaryphone", f.primary_phone)
            .equals("p.secondaryphone", f.secondary_phone)
            .equals("p.email", f.email)
            .between("p.enrollmentdate", f.enrollment_date_start, f.enrollment_date_end)
            .between("p.lastupdatedate", f.last_update_date_start, f.last_update_date_end)
            .equals(self.audit.name_column, f.last_update_by, name="lastupdateby")
            .equals("p.lastupdatebyid", f.last_update_by_id)
        )

    def _to_params(self, patron: Patron) -> dict:
        return {
            "id": patron.id,
            "memberid": patron.member_id,
            "firstname": patron.first_name,
            "lastname": patron.last_name,
            "address": patron.address,
            "primaryphone": patron.primary_phone,
            "secondaryphone": patron.secondary_phone,
            "email": patron.email,
            "enrollmentdate": patron.enrollment_date,
            "lastupdatedate": patron.last_update_date,
            "lastupdatebyid": patron.last_update_by_id,
        }

    def _row_to_entity(self, row: dict) -> Patron:
        return Patron(
            id=row["id"],
            member_id=row["memberid"],
            first_name=row["firstname"],
            last_name=row["lastname"],
            address=row["address"],
            primary_phone=row["primaryphone"],
            secondary_phone=row["secondaryphone"],
            email=row["email"],
            enrollment_date=row["enrollmentdate"],
            last_update_date=row["lastupdatedate"],
            last_update_by_id=row["lastupdatebyid"],
            last_update_by=self.audit.resolve(row.get("lastupdateby")),
        )
