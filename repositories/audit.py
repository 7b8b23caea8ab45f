"""
repositories/audit.py
---------------------
Resolves "who last touched this record" references against the accounts
table at read time. A reference to a removed account resolves to a fixed
label instead of failing the read.
"""

from typing import Optional

from config import DELETED_ACCOUNT_LABEL
from query.builder import QueryBuilder

FALLBACK_PARAM = "attribution_fallback"


class AuditOverlay:
    """
    Renders the join and display column for an attribution reference.

    Args:
        fallback_label: Display value used when the account is gone.
        account_alias: Alias given to the joined accounts table.
    """

    def __init__(self, fallback_label: str = DELETED_ACCOUNT_LABEL, account_alias: str = "a"):
        self.fallback_label = fallback_label
        self.account_alias = account_alias

    def join(self, alias: str, reference_column: str) -> str:
        """LEFT JOIN so that a missing account never drops the row."""
        a = self.account_alias
        return f"LEFT JOIN accounts {a} ON {alias}.{reference_column} = {a}.id"

    def display(self, output_name: str) -> str:
        return f"COALESCE({self.account_alias}.name, %({FALLBACK_PARAM})s) AS {output_name}"

    @property
    def name_column(self) -> str:
        return f"{self.account_alias}.name"

    def bind(self, builder: QueryBuilder) -> QueryBuilder:
        """Bind the fallback label used by `display`."""
        return builder.add_parameters(**{FALLBACK_PARAM: self.fallback_label})

    def resolve(self, name: Optional[str]) -> str:
        return name if name is not None else self.fallback_label
