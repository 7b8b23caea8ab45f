"""
repositories/account_repo.py
----------------------------
Data access layer for staff accounts.
Credentials are handled elsewhere; this repository only manages the
records that audit attribution points at.
"""

from errors import RepositoryError
from models.account import ROLES, Account
from models.filters import AccountFilters
from query.builder import QueryBuilder
from repositories.base import Repository


class AccountRepository(Repository[Account]):
    """Repository for CRUD operations on the accounts table, ordered by name."""

    entity_name = "account"
    table = "accounts"
    filters_type = AccountFilters
    sort_key = "acct.name"
    # creationdate is filled in by the store
    columns = ("id", "name", "role", "lastupdatedate", "lastupdatebyid")

    def create(self, account: Account):
        self._check_role(account)
        return super().create(account)

    def update(self, account: Account):
        self._check_role(account)
        return super().update(account)

    def _check_role(self, account: Account) -> None:
        if account.role not in ROLES:
            raise RepositoryError(
                f"Unknown role '{account.role}'",
                entity=self.entity_name, key=account.id,
            )

    def _select_template(self) -> str:
        return f"""
            SELECT
                acct.id,
                acct.name,
                acct.role,
                acct.creationdate,
                acct.lastupdatedate,
                acct.lastupdatebyid,
                {self.audit.display("lastupdateby")}
            FROM accounts acct
            {self.audit.join("acct", "lastupdatebyid")}
            /**where**/
        """

    def _apply_filters(self, builder: QueryBuilder, f: AccountFilters) -> None:
        (
            builder
            .equals("acct.id", f.id)
            .equals("acct.name", f.name)
            .equals("acct.role", f.role)
        )

    def _to_params(self, account: Account) -> dict:
        return {
            "id": account.id,
            "name": account.name,
            "role": account.role,
            "lastupdatedate": account.last_update_date,
            "lastupdatebyid": account.last_update_by_id,
        }

    def _row_to_entity(self, row: dict) -> Account:
        return Account(
            id=row["id"],
            name=row["name"],
            role=row["role"],
            creation_date=row["creationdate"],
            last_update_date=row["lastupdatedate"],
            last_update_by_id=row["lastupdatebyid"],
            last_update_by=self.audit.resolve(row.get("lastupdateby")),
        )
