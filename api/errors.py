from fastapi import HTTPException
from pydantic.alias_generators import to_camel

from utils.result import ErrorType, Result

STATUS_CODES = {
    ErrorType.NOT_FOUND: 404,
    ErrorType.INVALID_TRANSITION: 400,
    ErrorType.LIMIT_EXCEEDED: 409,
    ErrorType.VALIDATION: 400,
}


def raise_for_failure(result: Result) -> None:
    """Translate a failed Result into an HTTPException; successes pass through."""
    if result:
        return
    raise HTTPException(
        status_code=STATUS_CODES.get(result.error_type, 400),
        detail={
            "error": result.error_type,
            "message": result.error,
            **{to_camel(k): v for k, v in result.details.items()},
        },
    )
