from __future__ import annotations

from config_sh.domain.errors import (
    BootstrapError,
    ConfigError,
    NotFound,
    ParseError,
    RepositoryError,
    StorageError,
    TypeMismatch,
    WriteForbidden,
)


def test_error_hierarchy() -> None:
    assert issubclass(NotFound, StorageError)
    for exception_type in (StorageError, ParseError, WriteForbidden, TypeMismatch, RepositoryError, BootstrapError):
        assert issubclass(exception_type, ConfigError)
    for exception in (NotFound(""), ParseError(""), WriteForbidden("")):
        assert isinstance(exception, ConfigError)
