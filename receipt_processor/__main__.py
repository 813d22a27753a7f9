import uvicorn

from receipt_processor.config import settings

if __name__ == "__main__":
    uvicorn.run(
        "receipt_processor.main:app",
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.log_level.lower(),
    )
