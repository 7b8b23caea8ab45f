"""
repositories/scan_repo.py
-------------------------
Data access layer for the append-only scan ledger.

Scans are keyed by (event, patron, service). They are never updated or
deleted; a mistaken scan is retracted instead, which hides it from every
read while keeping the row.
"""

from typing import Optional
from uuid import UUID

from models.filters import ScanFilters
from models.scan import Scan
from query.builder import QueryBuilder
from repositories.base import CompositeKeyRepository
from utils.logger import get_logger

logger = get_logger(__name__)


class ScanRepository(CompositeKeyRepository[Scan]):
    """Repository for the scans table, ordered by scan date."""

    entity_name = "scan"
    filters_type = ScanFilters
    sort_key = "s.scandate"
    key_fields = ("event_id", "patron_id", "service_id")
    required_key_parts = 2

    # ── CREATE ────────────────────────────────────────────

    def create(self, scan: Scan) -> Optional[Scan]:
        """
        Record a new scan.

        Returns:
            The scan as stored, read back by its exact key.

        Raises:
            psycopg2.IntegrityError: If a live scan with the same key exists.
        """
        sql = """
            INSERT INTO scans
                (eventid, patronid, serviceid, plusone, scandate, scanbyid, deleted)
            VALUES
                (%(eventid)s, %(patronid)s, %(serviceid)s, %(plusone)s, %(scandate)s, %(scanbyid)s, FALSE)
        """
        params = {
            "eventid": scan.event_id,
            "patronid": scan.patron_id,
            "serviceid": scan.service_id,
            "plusone": scan.plus_one,
            "scandate": scan.scan_date,
            "scanbyid": scan.scan_by_id,
        }
        with self.db.connection() as conn:
            try:
                self.db.execute(sql, params, conn=conn)
            except Exception as e:
                logger.error(f"Failed to create scan {scan.key}: {e}")
                raise
            created = self._single(
                self._fetch(self._exact_filters(scan), conn=conn, refine=self._exact_service(scan)),
                key=scan.key,
            )
        logger.info(f"Created scan {scan.key}")
        return created

    # ── RETRACT ───────────────────────────────────────────

    def retract(self, event_id: UUID, patron_id: UUID, service_id: Optional[UUID] = None) -> bool:
        """
        Flag a live scan as retracted. ``service_id=None`` addresses the
        check-in scan only.

        Returns:
            True if a scan was retracted, False if none was live.
        """
        sql = """
            UPDATE scans
            SET deleted = TRUE
            WHERE eventid = %(eventid)s
              AND patronid = %(patronid)s
              AND serviceid IS NOT DISTINCT FROM %(serviceid)s
              AND deleted = FALSE
        """
        key = (event_id, patron_id, service_id)
        try:
            retracted = self.db.execute(
                sql, {"eventid": event_id, "patronid": patron_id, "serviceid": service_id}
            ) > 0
        except Exception as e:
            logger.error(f"Failed to retract scan {key}: {e}")
            raise
        if retracted:
            logger.info(f"Retracted scan {key}")
        return retracted

    # ── QUERY ─────────────────────────────────────────────

    def _select_template(self) -> str:
        return f"""
            SELECT
                s.eventid,
                s.patronid,
                s.serviceid,
                s.plusone,
                s.scandate,
                s.scanbyid,
                {self.audit.display("scanby")},
                s.deleted
            FROM scans s
            {self.audit.join("s", "scanbyid")}
            /**where**/
        """

    def _apply_default_predicates(self, builder: QueryBuilder) -> None:
        builder.where("s.deleted = FALSE")

    def _apply_filters(self, builder: QueryBuilder, f: ScanFilters) -> None:
        (
            builder
            .equals("s.eventid", f.event_id)
            .equals("s.patronid", f.patron_id)
            .equals("s.serviceid", f.service_id)
            .equals("s.plusone", f.plus_one)
            .between("s.scandate", f.scan_date_start, f.scan_date_end)
            .equals("s.scanbyid", f.scan_by_id)
        )

    @staticmethod
    def _exact_filters(scan: Scan) -> ScanFilters:
        return ScanFilters(
            event_id=scan.event_id, patron_id=scan.patron_id, service_id=scan.service_id, limit=2
        )

    @staticmethod
    def _exact_service(scan: Scan):
        """A check-in scan must not match the same patron's service scans."""
        if scan.service_id is not None:
            return None
        return lambda builder: builder.where("s.serviceid IS NULL")

    def _row_to_entity(self, row: dict) -> Scan:
        return Scan(
            event_id=row["eventid"],
            patron_id=row["patronid"],
            service_id=row["serviceid"],
            plus_one=row["plusone"],
            scan_date=row["scandate"],
            scan_by_id=row["scanbyid"],
            scan_by=self.audit.resolve(row.get("scanby")),
            deleted=row.get("deleted", False),
        )
