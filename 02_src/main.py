"""Main entry point for the festival guide bot."""

from pathlib import Path

import uvicorn
from dotenv import load_dotenv

from eventbot.api import create_fastapi_app
from eventbot.config import BotSettings
from eventbot.logging_config import setup_logging
from sim import Sim


def main():
    """Run the bot's HTTP endpoint."""
    project_root = Path(__file__).resolve().parent.parent
    load_dotenv(project_root / ".env")

    setup_logging()
    settings = BotSettings.from_env()
    api_url = f"http://{settings.api_host}:{settings.api_port}"

    # Create SIM instance
    sim = Sim(api_url=api_url)

    # Set SIM instance for control router
    from eventbot.api.routes import control
    control.set_sim_instance(sim)

    app = create_fastapi_app()

    uvicorn.run(
        app,
        host=settings.api_host,
        port=settings.api_port,
        log_level="info",
    )


if __name__ == "__main__":
    main()
