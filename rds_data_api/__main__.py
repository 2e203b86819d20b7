import uvicorn

from rds_data_api.core.config import settings


def main() -> None:
    uvicorn.run(
        "rds_data_api.main:app",
        host=settings.LISTEN_HOST,
        port=settings.LISTEN_PORT,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
