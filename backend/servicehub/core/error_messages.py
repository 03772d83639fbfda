from fastapi import HTTPException, status


class ErrorResponses:
    INVALID_TOKEN = HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")
    PROVIDER_ONLY = HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Provider access only")
    ADMIN_ONLY = HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Admin access only")
    INVALID_ID = HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid id")
    SERVICE_NOT_FOUND = HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Service not found")
