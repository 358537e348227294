from __future__ import annotations

from dataclasses import dataclass

from fastapi import HTTPException, status


@dataclass(eq=False)
class IdentityConfigException(Exception):
    message: str
    code: str = "error"
    details: dict | None = None

    def __str__(self) -> str:
        return self.message


@dataclass(eq=False)
class MissingConfigurationError(IdentityConfigException, ValueError):
    """The configuration to validate was not supplied at all."""

    code: str = "missing_configuration"


@dataclass(eq=False)
class ConfigurationRejectedError(IdentityConfigException):
    """The configuration was evaluated and failed one or more policies."""

    code: str = "configuration_rejected"

    @property
    def errors(self) -> list[str]:
        return list((self.details or {}).get("errors", []))


@dataclass(eq=False)
class ComposeFileError(IdentityConfigException):
    code: str = "compose_file_error"


@dataclass(eq=False)
class DatabaseError(IdentityConfigException):
    code: str = "database_error"


EXC_TO_STATUS: dict[type[IdentityConfigException], int] = {
    MissingConfigurationError: status.HTTP_400_BAD_REQUEST,
    ConfigurationRejectedError: status.HTTP_422_UNPROCESSABLE_ENTITY,
    ComposeFileError: status.HTTP_422_UNPROCESSABLE_ENTITY,
    DatabaseError: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def map_exception_to_http(exc: IdentityConfigException) -> HTTPException:
    status_code = status.HTTP_400_BAD_REQUEST
    for typ, st in EXC_TO_STATUS.items():
        if isinstance(exc, typ):
            status_code = st
            break

    return HTTPException(status_code=status_code, detail=exc.message)
