"""Run the API with uvicorn: ``python -m payroll_api`` or ``payroll-api``."""

import uvicorn

from payroll_api.core.config import settings


def main() -> None:
    # log_config=None keeps the handlers installed by setup_logging
    uvicorn.run(
        "payroll_api.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG and not settings.IS_PRODUCTION,
        log_config=None,
    )


if __name__ == "__main__":
    main()
