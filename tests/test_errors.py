from uuid import UUID

from errors import AmbiguousKey, InvalidQueryBounds, OperationNotSupported, RepositoryError


def test_context_is_rendered():
    key = UUID(int=1)
    error = AmbiguousKey("More than one patron matched", entity="patron", operation="get", key=key)
    assert str(error) == f"More than one patron matched (entity=patron, operation=get, key={key})"


def test_message_without_context():
    assert str(InvalidQueryBounds("limit must be positive, got 0")) == "limit must be positive, got 0"


def test_taxonomy_shares_base():
    for cls in (InvalidQueryBounds, AmbiguousKey, OperationNotSupported):
        assert issubclass(cls, RepositoryError)
