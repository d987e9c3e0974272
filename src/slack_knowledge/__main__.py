"""Run the API server: ``python -m slack_knowledge``."""

import uvicorn

from slack_knowledge.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run("slack_knowledge.app:app", host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
