import pytest

from salesreport.services.service_locator import (
    ServiceAlreadyRegisteredError,
    ServiceLocator,
    ServiceNotFoundError,
)


def test_register_and_get():
    loc = ServiceLocator()
    loc.register("provider", 1)
    assert loc.get("provider") == 1
    assert loc.get_typed("provider", int) == 1
    with pytest.raises(TypeError):
        loc.get_typed("provider", str)


def test_duplicate_and_missing():
    loc = ServiceLocator()
    loc.register("a", 1)
    with pytest.raises(ServiceAlreadyRegisteredError):
        loc.register("a", 2)
    loc.register("a", 2, allow_override=True)
    assert loc.get("a") == 2
    with pytest.raises(ServiceNotFoundError):
        loc.get("missing")
    assert loc.try_get("missing", "dflt") == "dflt"


def test_override_context_restores():
    loc = ServiceLocator()
    loc.register("sink", "real")
    with loc.override_context(sink="fake", extra=3):
        assert loc.get("sink") == "fake"
        assert loc.get("extra") == 3
    assert loc.get("sink") == "real"
    assert "extra" not in loc.list_keys()


def test_none_value_is_a_registered_service():
    loc = ServiceLocator()
    loc.register("maybe", None)
    assert loc.get("maybe") is None
