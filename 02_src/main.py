"""Main entry point for the chat assistant bot."""

from pathlib import Path

import uvicorn
from dotenv import load_dotenv

from chatbot.api import create_fastapi_app
from chatbot.app import Application
from chatbot.config import Settings
from chatbot.logging_config import setup_logging
from sim import Sim


def main():
    """Run the application."""
    project_root = Path(__file__).resolve().parent.parent
    load_dotenv(project_root / ".env")
    setup_logging()

    settings = Settings.from_env()
    api_url = f"http://{settings.api_host}:{settings.api_port}"

    # Create SIM instance
    sim = Sim(api_url=api_url)

    # Set SIM instance for control router
    from chatbot.api.routes import control
    control.set_sim_instance(sim)

    app = create_fastapi_app(Application(settings=settings))

    # Run with uvicorn
    uvicorn.run(
        app,
        host=settings.api_host,
        port=settings.api_port,
        log_level="info",
        log_config=None,
    )


if __name__ == "__main__":
    main()
