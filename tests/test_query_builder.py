"""Unit tests for query.builder.QueryBuilder.

Covers:
- Template validation and WHERE rendering.
- Equality, range and raw predicates; unset values.
- Parameter naming and binding.
- Ordering / pagination and bounds validation.
"""

from datetime import datetime

import pytest

from errors import InvalidQueryBounds
from models.filters import Filters, OrderDirection
from query.builder import Comparison, QueryBuilder

TEMPLATE = "SELECT * FROM patrons p /**where**/"


class TestTemplate:
    def test_requires_where_marker(self):
        with pytest.raises(ValueError):
            QueryBuilder("SELECT * FROM patrons")

    def test_rejects_two_markers(self):
        with pytest.raises(ValueError):
            QueryBuilder("SELECT 1 /**where**/ UNION SELECT 2 /**where**/")

    def test_no_predicates_renders_empty_where(self):
        sql, params = QueryBuilder(TEMPLATE).render()
        assert "WHERE" not in sql
        assert "/**where**/" not in sql
        assert params == {}


class TestPredicates:
    def test_equals_binds_placeholder(self):
        builder = QueryBuilder(TEMPLATE).equals("p.email", "ada@example.com")
        sql, params = builder.render()
        assert "WHERE p.email = %(email)s" in sql
        assert params == {"email": "ada@example.com"}

    def test_none_value_is_skipped(self):
        builder = QueryBuilder(TEMPLATE).equals("p.email", None)
        assert builder.clauses == []

    def test_falsy_values_other_than_none_are_applied(self):
        builder = QueryBuilder(TEMPLATE).equals("s.plusone", False).equals("p.memberid", 0)
        sql, params = builder.render()
        assert params == {"plusone": False, "memberid": 0}
        assert "s.plusone = %(plusone)s AND p.memberid = %(memberid)s" in sql

    def test_clauses_joined_with_and_in_call_order(self):
        builder = (
            QueryBuilder(TEMPLATE)
            .equals("p.lastname", "Lovelace")
            .equals("p.firstname", "Ada")
        )
        sql, _ = builder.render()
        assert "WHERE p.lastname = %(lastname)s AND p.firstname = %(firstname)s" in sql

    def test_between_requires_both_bounds(self):
        start = datetime(2024, 1, 1)
        builder = QueryBuilder(TEMPLATE)
        builder.between("p.enrollmentdate", start, None)
        builder.between("p.enrollmentdate", None, start)
        assert builder.clauses == []

    def test_between_binds_start_and_end(self):
        start, end = datetime(2024, 1, 1), datetime(2024, 2, 1)
        sql, params = QueryBuilder(TEMPLATE).between("p.enrollmentdate", start, end).render()
        assert (
            "p.enrollmentdate BETWEEN %(enrollmentdate_start)s AND %(enrollmentdate_end)s" in sql
        )
        assert params == {"enrollmentdate_start": start, "enrollmentdate_end": end}

    def test_between_via_add_predicate_accepts_none(self):
        builder = QueryBuilder(TEMPLATE).add_predicate("p.enrollmentdate", Comparison.BETWEEN, None)
        assert builder.clauses == []

    def test_raw_fragment_appended_verbatim(self):
        sql, params = QueryBuilder(TEMPLATE).where("s.deleted = FALSE").render()
        assert "WHERE s.deleted = FALSE" in sql
        assert params == {}

    def test_raw_fragment_skipped_when_flag_false(self):
        builder = QueryBuilder(TEMPLATE).add_predicate("s.deleted = FALSE", Comparison.RAW, False)
        assert builder.clauses == []

    def test_explicit_name(self):
        sql, params = QueryBuilder(TEMPLATE).equals("a.name", "admin", name="lastupdateby").render()
        assert "a.name = %(lastupdateby)s" in sql
        assert params == {"lastupdateby": "admin"}

    def test_name_derived_from_expression(self):
        sql, params = QueryBuilder(TEMPLATE).equals("(p.firstname || p.lastname)", "AdaLovelace").render()
        assert params == {"lastname": "AdaLovelace"}
        assert "%(lastname)s" in sql

    def test_name_clash_gets_suffix(self):
        builder = QueryBuilder(TEMPLATE).equals("p.id", 1).equals("a.id", 2)
        sql, params = builder.render()
        assert params == {"id": 1, "id_2": 2}
        assert "a.id = %(id_2)s" in sql

    def test_values_are_never_interpolated(self):
        hostile = "x'; DROP TABLE patrons; --"
        sql, params = QueryBuilder(TEMPLATE).equals("p.email", hostile).render()
        assert hostile not in sql
        assert params["email"] == hostile

    def test_add_parameters_rejects_rebinding(self):
        builder = QueryBuilder(TEMPLATE).add_parameters(label="x")
        with pytest.raises(ValueError):
            builder.add_parameters(label="y")


class TestPaging:
    def test_order_and_page_follow_predicates(self):
        builder = QueryBuilder(TEMPLATE).equals("p.email", "a@b.c")
        builder.page("p.lastname", Filters(limit=3, offset=6, order_by=OrderDirection.DESC))
        sql, params = builder.render()
        assert sql.index("WHERE") < sql.index("ORDER BY")
        assert sql.rstrip().endswith(
            "ORDER BY p.lastname DESC\nLIMIT %(limit)s OFFSET %(offset)s"
        )
        assert params["limit"] == 3
        assert params["offset"] == 6

    def test_defaults_apply_silently(self):
        sql, params = QueryBuilder(TEMPLATE).page("p.lastname", Filters()).render()
        assert "ORDER BY p.lastname ASC" in sql
        assert params == {"limit": Filters().limit, "offset": 0}

    @pytest.mark.parametrize("limit", [0, -1])
    def test_rejects_non_positive_limit(self, limit):
        with pytest.raises(InvalidQueryBounds):
            QueryBuilder(TEMPLATE).page("p.lastname", Filters(limit=limit))

    def test_rejects_negative_offset(self):
        with pytest.raises(InvalidQueryBounds):
            QueryBuilder(TEMPLATE).page("p.lastname", Filters(offset=-1))


class TestDeterminism:
    def _build(self):
        return (
            QueryBuilder(TEMPLATE)
            .equals("p.email", "ada@example.com")
            .between("p.enrollmentdate", datetime(2024, 1, 1), datetime(2024, 12, 31))
            .where("p.memberid > 0")
            .page("p.lastname", Filters(limit=10))
            .render()
        )

    def test_same_input_same_output(self):
        first_sql, first_params = self._build()
        second_sql, second_params = self._build()
        assert first_sql == second_sql
        assert list(first_params.items()) == list(second_params.items())
