from stratspec.core.errors import CompositionError, RegistryError, StratSpecError


def test_stratspec_error_is_exception():
    assert issubclass(StratSpecError, Exception)


def test_registry_error_is_stratspec_error():
    err = RegistryError("duplicate tag")
    assert isinstance(err, StratSpecError)
    assert "duplicate tag" in str(err)


def test_composition_error_is_stratspec_error():
    err = CompositionError("majority needs exactly 3 votes")
    assert isinstance(err, StratSpecError)
    assert "3 votes" in str(err)
