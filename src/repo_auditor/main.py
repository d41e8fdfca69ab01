from __future__ import annotations
import logging
import uvicorn
from repo_auditor.infrastructure.config import get_settings

def main() -> None:
    """Start the uvicorn ASGI server."""
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
    )
    logger = logging.getLogger("repo_auditor")
    logger.info("OpenAI configured: %s", settings.openai_api_key is not None)
    logger.info("GitHub token configured: %s", settings.github_token is not None)
    uvicorn.run(
        "repo_auditor.interface.app:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
