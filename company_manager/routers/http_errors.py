from typing import TypeVar

from fastapi import HTTPException, status

from company_manager.domain.results import Err, ErrorKind, Result

T = TypeVar("T")

STATUS_CODES = {
    ErrorKind.not_found: status.HTTP_404_NOT_FOUND,
    ErrorKind.invalid_state: status.HTTP_409_CONFLICT,
    ErrorKind.insufficient_funds: status.HTTP_400_BAD_REQUEST,
}


def unwrap(result: Result[T]) -> T:
    """Return the value of an Ok result, raise HTTPException for an Err

    Args:
        result (Result[T]): Result returned by the game service

    Returns:
        T: The wrapped value
    """
    if isinstance(result, Err):
        raise HTTPException(status_code=STATUS_CODES[result.kind], detail=result.reason)
    return result.value
