"""Run with: python -m family_meal_planner"""

import uvicorn

from family_meal_planner.config import get_settings


def run() -> None:
    settings = get_settings()
    uvicorn.run(
        "family_meal_planner.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.reload,
    )


if __name__ == "__main__":
    run()
