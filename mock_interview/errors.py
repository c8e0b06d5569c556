# mock_interview/errors.py
# 서비스 계층에서 던지는 예외. FastAPI HTTPException 을 상속해 라우터에서 그대로 응답으로 변환된다.
from fastapi import HTTPException


class AuthenticationError(HTTPException):
    def __init__(self, detail: str = "Valid access token required"):
        super().__init__(
            status_code=401,
            detail={"message": "unauthorized", "detail": detail},
        )


class NotFoundError(HTTPException):
    def __init__(self, message: str, detail: str | None = None):
        body = {"message": message}
        if detail:
            body["detail"] = detail
        super().__init__(status_code=404, detail=body)


class ValidationError(HTTPException):
    def __init__(self, detail: str):
        super().__init__(
            status_code=422,
            detail={"message": "validation_failed", "detail": detail},
        )
