import uvicorn

from product_api.app import app
from product_api.logging_config import logger


def main() -> None:
    settings = app.state.settings
    logger.info(f"Server is running on http://localhost:{settings.port}")
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
